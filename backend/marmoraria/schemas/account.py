"""
Account Pydantic Schemas - registration, login, team
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from marmoraria.models.user import UserRole


class RegisterCompanyRequest(BaseModel):
    admin_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=255)
    company_name: str = Field(..., min_length=1, max_length=200)
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    company_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=255)
    role: UserRole = UserRole.OPERATOR
    password: str
