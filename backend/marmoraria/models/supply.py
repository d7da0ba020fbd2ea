"""
Supply models - consumables (glue, cutting discs, polish) counted in units
"""
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum

from marmoraria.db.base import Base


class SupplyMovementType(str, Enum):
    ENTRADA = "ENTRADA"  # Stock received
    SAIDA = "SAIDA"  # Used in production


class Supply(Base):
    __tablename__ = "supplies"

    id = Column(String(32), primary_key=True, index=True)  # SUP-XXXXXXXX
    company_id = Column(String(32), ForeignKey("companies.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False, default="Geral")
    unit = Column(String(20), nullable=False, default="un")
    quantity = Column(Float, nullable=False, default=0)
    min_quantity = Column(Float, nullable=False, default=0)
    supplier = Column(String(200), nullable=True)
    observations = Column(Text, nullable=True)

    last_updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    movements = relationship(
        "SupplyMovement",
        back_populates="supply",
        order_by="SupplyMovement.sequence.desc()",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Supply {self.id}: {self.name} ({self.quantity} {self.unit})>"

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.quantity <= self.min_quantity

    @property
    def is_out_of_stock(self) -> bool:
        return self.quantity <= 0


class SupplyMovement(Base):
    __tablename__ = "supply_movements"

    id = Column(String(32), primary_key=True, index=True)
    supply_id = Column(String(32), ForeignKey("supplies.id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)

    movement_type = Column(String(10), nullable=False)
    quantity_change = Column(Float, nullable=False)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    operator_id = Column(String(32), nullable=True)
    operator_name = Column(String(200), nullable=False)
    observations = Column(Text, nullable=True)

    supply = relationship("Supply", back_populates="movements")

    def __repr__(self):
        return f"<SupplyMovement {self.movement_type} {self.quantity_change} on {self.supply_id}>"
