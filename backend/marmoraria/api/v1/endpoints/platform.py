"""
Platform console endpoints (platform admins only)

Tenant companies, their status and monthly fee, and platform totals.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marmoraria.api.v1.endpoints.auth import get_current_super_admin
from marmoraria.db.session import get_db
from marmoraria.models.company import Company
from marmoraria.models.user import User
from marmoraria.schemas.platform import (
    CompanyAdminResponse,
    CompanyCreate,
    CompanyFeeUpdate,
    CompanyResponse,
    CompanyStatusUpdate,
    PlatformSummaryResponse,
)
from marmoraria.services import platform_service

router = APIRouter(prefix="/platform", tags=["Platform"])


def _company_response(db: Session, company: Company) -> CompanyResponse:
    response = CompanyResponse.model_validate(company)
    response.slab_count = platform_service.count_slabs(db, company.id)
    return response


@router.get("/summary", response_model=PlatformSummaryResponse)
async def get_summary(
    current_user: User = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    return platform_service.get_platform_summary(db)


@router.get("/companies", response_model=List[CompanyResponse])
async def list_companies(
    search: Optional[str] = None,
    current_user: User = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    results = []
    for company, slab_count in platform_service.list_companies(db, search):
        response = CompanyResponse.model_validate(company)
        response.slab_count = slab_count
        results.append(response)
    return results


@router.post("/companies", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    request: CompanyCreate,
    current_user: User = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    company = platform_service.create_company_account(
        db,
        current_user,
        admin_name=request.admin_name,
        email=request.email,
        company_name=request.company_name,
        password=request.password,
        monthly_fee=request.monthly_fee,
    )
    return _company_response(db, company)


@router.patch("/companies/{company_id}/status", response_model=CompanyResponse)
async def update_status(
    company_id: str,
    request: CompanyStatusUpdate,
    current_user: User = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    """Set the status, or toggle ACTIVE <-> SUSPENDED when none is given"""
    if request.status is None:
        company = platform_service.toggle_company_status(db, current_user, company_id)
    else:
        company = platform_service.set_company_status(db, current_user, company_id, request.status)
    return _company_response(db, company)


@router.patch("/companies/{company_id}/fee", response_model=CompanyResponse)
async def update_fee(
    company_id: str,
    request: CompanyFeeUpdate,
    current_user: User = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    company = platform_service.update_monthly_fee(db, current_user, company_id, request.monthly_fee)
    return _company_response(db, company)


@router.get("/companies/{company_id}/admin", response_model=CompanyAdminResponse)
async def get_company_admin(
    company_id: str,
    current_user: User = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    return platform_service.get_company_admin(db, current_user, company_id)
