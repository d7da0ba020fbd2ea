"""
Platform console Pydantic Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from marmoraria.models.company import CompanyStatus


class CompanyResponse(BaseModel):
    id: str
    name: str
    admin_id: Optional[str] = None
    status: CompanyStatus
    monthly_fee: float
    created_at: datetime
    slab_count: int = 0

    class Config:
        from_attributes = True


class CompanyCreate(BaseModel):
    admin_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=255)
    company_name: str = Field(..., min_length=1, max_length=200)
    password: str
    monthly_fee: float = Field(0.0, ge=0)


class CompanyStatusUpdate(BaseModel):
    """Explicit status; omit to toggle ACTIVE <-> SUSPENDED"""
    status: Optional[CompanyStatus] = None


class CompanyFeeUpdate(BaseModel):
    monthly_fee: float


class CompanyAdminResponse(BaseModel):
    id: str
    name: str
    email: str
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PlatformSummaryResponse(BaseModel):
    company_count: int
    active_companies: int
    suspended_companies: int
    total_slabs: int
    monthly_revenue: float

    class Config:
        from_attributes = True
