"""
Slab models

Slab holds the current state of one stock entry; SlabMovement is its
append-only history (entry, cuts, withdrawals, restocks). Rows are read and
written through SqlInventoryStore, which converts them to and from the
immutable SlabRecord/CutRecord values the geometry code works with.
"""
from sqlalchemy import (
    Column, Integer, String, Float, Text, Date, DateTime, ForeignKey, JSON, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime

from marmoraria.db.base import Base


class Slab(Base):
    __tablename__ = "slabs"

    __table_args__ = (
        UniqueConstraint("company_id", "entry_index", name="uq_slab_company_entry"),
    )

    id = Column(String(32), primary_key=True, index=True)  # CHP-XXXXXXXX
    entry_index = Column(Integer, nullable=False)  # Human-facing serial, per company
    company_id = Column(String(32), ForeignKey("companies.id"), nullable=False, index=True)

    # Description
    commercial_name = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False)  # Granito, Mármore, Quartzo...
    thickness = Column(String(20), nullable=False, default="2cm")
    supplier = Column(String(200), nullable=True)
    location = Column(String(100), nullable=True)  # "Cavalete 3"
    purchase_value = Column(Float, nullable=True)
    observations = Column(Text, nullable=True)

    # Geometry (cm)
    original_width = Column(Float, nullable=False)
    original_height = Column(Float, nullable=False)
    current_width = Column(Float, nullable=False)
    current_height = Column(Float, nullable=False)
    current_polygon = Column(JSON, nullable=False, default=list)  # [[x, y], ...]

    # Quantities (m2 / units)
    total_area = Column(Float, nullable=False)
    available_area = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    min_quantity = Column(Integer, nullable=False, default=0)

    status = Column(String(20), nullable=False, index=True)

    # Audit
    entry_date = Column(Date, nullable=True)
    last_operator_id = Column(String(32), nullable=True)
    last_operator_name = Column(String(200), nullable=True)
    last_updated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    movements = relationship(
        "SlabMovement",
        back_populates="slab",
        order_by="SlabMovement.sequence.desc()",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Slab {self.id}: {self.commercial_name} ({self.status})>"


class SlabMovement(Base):
    __tablename__ = "slab_movements"

    id = Column(String(32), primary_key=True, index=True)  # MOV-XXXXXXXXXXXX
    slab_id = Column(String(32), ForeignKey("slabs.id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)  # 0 = oldest

    movement_type = Column(String(20), nullable=False)
    date = Column(DateTime, nullable=False)
    client_name = Column(String(200), nullable=False, default="")
    project = Column(String(200), nullable=False, default="")
    observations = Column(Text, nullable=True)

    area_used = Column(Float, nullable=False, default=0.0)
    quantity_change = Column(Integer, nullable=False, default=0)
    leftover_width = Column(Float, nullable=False)
    leftover_height = Column(Float, nullable=False)
    leftover_polygon = Column(JSON, nullable=False, default=list)

    operator_id = Column(String(32), nullable=True)
    operator_name = Column(String(200), nullable=False)

    slab = relationship("Slab", back_populates="movements")

    def __repr__(self):
        return f"<SlabMovement {self.id}: {self.movement_type} on {self.slab_id}>"
