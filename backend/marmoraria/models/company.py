"""
Company model - one tenant (fabrication shop) of the platform
"""
from sqlalchemy import Column, String, Float, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum

from marmoraria.db.base import Base


class CompanyStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    PENDING = "pending"


class Company(Base):
    """
    A marmoraria using the platform. All slabs, supplies and team members
    hang off a company and are never visible to other companies.
    """
    __tablename__ = "companies"

    id = Column(String(32), primary_key=True, index=True)  # COMP-XXXXXXXXX
    name = Column(String(200), nullable=False)
    admin_id = Column(String(32), nullable=True)  # First ADMIN user, set after creation
    status = Column(String(20), nullable=False, default=CompanyStatus.ACTIVE.value)
    monthly_fee = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    users = relationship("User", back_populates="company")

    def __repr__(self):
        return f"<Company {self.id}: {self.name}>"

    @property
    def is_active(self) -> bool:
        return self.status == CompanyStatus.ACTIVE.value
