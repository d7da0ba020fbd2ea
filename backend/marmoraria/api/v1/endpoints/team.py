"""
Team endpoints - users of the caller's company
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marmoraria.api.v1.endpoints.auth import get_current_admin_user, get_tenant_id
from marmoraria.db.session import get_db
from marmoraria.models.user import User
from marmoraria.schemas.account import TeamMemberCreate, UserResponse
from marmoraria.services import account_service

router = APIRouter(prefix="/team", tags=["Team"])


@router.get("", response_model=List[UserResponse])
async def list_team(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return account_service.list_team(db, tenant_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def add_team_member(
    request: TeamMemberCreate,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """Add an ADMIN or OPERATOR to the caller's company"""
    return account_service.add_team_member(
        db,
        current_user,
        name=request.name,
        email=request.email,
        role=request.role,
        password=request.password,
    )
