"""
User model - platform operators, shop admins and shop operators
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum

from marmoraria.db.base import Base


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"  # Platform operator, no company
    ADMIN = "admin"  # Manages one company's stock and team
    OPERATOR = "operator"  # Registers cuts and movements


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, index=True)  # USR-XXXXXXXXX
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.OPERATOR.value)
    company_id = Column(String(32), ForeignKey("companies.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    company = relationship("Company", back_populates="users")

    def __repr__(self):
        return f"<User {self.id}: {self.email} ({self.role})>"

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN.value

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value)
