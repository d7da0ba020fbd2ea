"""
Platform Service

Console for the platform operator (SUPER_ADMIN): every tenant company, its
status and monthly fee, and platform-wide totals.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from marmoraria.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from marmoraria.logging_config import audit_log, get_logger
from marmoraria.models.company import Company, CompanyStatus
from marmoraria.models.slab import Slab
from marmoraria.models.user import User
from marmoraria.services import account_service

logger = get_logger(__name__)


@dataclass
class PlatformSummary:
    company_count: int
    active_companies: int
    suspended_companies: int
    total_slabs: int
    monthly_revenue: float


def require_super_admin(user: User) -> None:
    if not user.is_super_admin:
        raise PermissionDeniedError("Platform console is restricted to platform admins")


def get_company(db: Session, company_id: str) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise NotFoundError("Company", company_id)
    return company


def count_slabs(db: Session, company_id: str) -> int:
    return db.query(Slab).filter(Slab.company_id == company_id).count()


def list_companies(db: Session, search: Optional[str] = None) -> List[Tuple[Company, int]]:
    """
    Companies with their slab counts, ordered by name

    Returns:
        List of (company, slab_count)
    """
    counts = dict(
        db.query(Slab.company_id, func.count(Slab.id)).group_by(Slab.company_id).all()
    )
    query = db.query(Company)
    if search:
        query = query.filter(func.lower(Company.name).contains(search.strip().lower()))

    return [(c, counts.get(c.id, 0)) for c in query.order_by(Company.name).all()]


def create_company_account(
    db: Session,
    acting_user: User,
    admin_name: str,
    email: str,
    company_name: str,
    password: str,
    monthly_fee: float = 0.0,
) -> Company:
    require_super_admin(acting_user)
    admin = account_service.register_company(
        db, admin_name, email, company_name, password, monthly_fee=monthly_fee
    )
    return admin.company


def set_company_status(
    db: Session,
    acting_user: User,
    company_id: str,
    status: CompanyStatus,
) -> Company:
    require_super_admin(acting_user)
    company = get_company(db, company_id)
    previous = company.status
    company.status = status.value
    db.commit()
    db.refresh(company)

    logger.info(
        "Company status changed",
        extra={"company_id": company_id, "from_status": previous, "to_status": status.value},
    )
    audit_log(
        "COMPANY_STATUS_CHANGED",
        user_id=acting_user.id,
        company_id=company_id,
        resource_type="company",
        resource_id=company_id,
        details={"from": previous, "to": status.value},
    )
    return company


def toggle_company_status(db: Session, acting_user: User, company_id: str) -> Company:
    """ACTIVE <-> SUSPENDED; a PENDING company becomes ACTIVE."""
    company = get_company(db, company_id)
    if company.status == CompanyStatus.ACTIVE.value:
        target = CompanyStatus.SUSPENDED
    else:
        target = CompanyStatus.ACTIVE
    return set_company_status(db, acting_user, company_id, target)


def update_monthly_fee(db: Session, acting_user: User, company_id: str, fee: float) -> Company:
    require_super_admin(acting_user)
    if fee < 0:
        raise ValidationError("Monthly fee cannot be negative", field="monthly_fee")

    company = get_company(db, company_id)
    previous = company.monthly_fee
    company.monthly_fee = fee
    db.commit()
    db.refresh(company)

    audit_log(
        "COMPANY_FEE_CHANGED",
        user_id=acting_user.id,
        company_id=company_id,
        resource_type="company",
        resource_id=company_id,
        details={"from": previous, "to": fee},
    )
    return company


def get_company_admin(db: Session, acting_user: User, company_id: str) -> User:
    require_super_admin(acting_user)
    company = get_company(db, company_id)
    admin = account_service.get_user(db, company.admin_id) if company.admin_id else None
    if admin is None:
        raise NotFoundError("Company admin", company_id)
    return admin


def get_platform_summary(db: Session) -> PlatformSummary:
    companies = db.query(Company).all()
    return PlatformSummary(
        company_count=len(companies),
        active_companies=sum(1 for c in companies if c.status == CompanyStatus.ACTIVE.value),
        suspended_companies=sum(1 for c in companies if c.status == CompanyStatus.SUSPENDED.value),
        total_slabs=db.query(Slab).count(),
        monthly_revenue=round(sum(c.monthly_fee or 0.0 for c in companies), 2),
    )
