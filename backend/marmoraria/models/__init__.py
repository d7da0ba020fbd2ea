"""
ORM models

Importing this package registers every table on Base.metadata.
"""
from marmoraria.models.company import Company, CompanyStatus
from marmoraria.models.user import User, UserRole
from marmoraria.models.slab import Slab, SlabMovement
from marmoraria.models.supply import Supply, SupplyMovement, SupplyMovementType

__all__ = [
    "Company",
    "CompanyStatus",
    "User",
    "UserRole",
    "Slab",
    "SlabMovement",
    "Supply",
    "SupplyMovement",
    "SupplyMovementType",
]
