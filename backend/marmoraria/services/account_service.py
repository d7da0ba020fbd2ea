"""
Account Service

Company registration, login and team management. A company is created
together with its first ADMIN user; admins then add OPERATORs (or other
admins) to their own team.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from marmoraria.core.security import hash_password, verify_password
from marmoraria.exceptions import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from marmoraria.logging_config import audit_log, get_logger
from marmoraria.models.company import Company, CompanyStatus
from marmoraria.models.user import User, UserRole

logger = get_logger(__name__)

TEAM_ROLES = (UserRole.ADMIN, UserRole.OPERATOR)
MIN_PASSWORD_LENGTH = 6


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:9].upper()}"


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _check_new_user(db: Session, name: str, email: str, password: str) -> str:
    email = _normalize_email(email)
    if not (name or "").strip():
        raise ValidationError("Name is required", field="name")
    if "@" not in email:
        raise ValidationError("A valid email is required", field="email")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must have at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    if get_user_by_email(db, email):
        raise ConflictError("Email already registered", details={"email": email})
    return email


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == _normalize_email(email)).first()


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def register_company(
    db: Session,
    admin_name: str,
    email: str,
    company_name: str,
    password: str,
    monthly_fee: float = 0.0,
) -> User:
    """
    Create a company and its first ADMIN user

    Returns:
        The new admin user (company reachable through ``user.company``)

    Raises:
        ValidationError: missing/invalid fields
        ConflictError: email already registered
    """
    if not (company_name or "").strip():
        raise ValidationError("Company name is required", field="company_name")
    email = _check_new_user(db, admin_name, email, password)

    company = Company(
        id=_new_id("COMP"),
        name=company_name.strip(),
        status=CompanyStatus.ACTIVE.value,
        monthly_fee=monthly_fee,
    )
    admin = User(
        id=_new_id("USR"),
        name=admin_name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=UserRole.ADMIN.value,
        company_id=company.id,
    )
    company.admin_id = admin.id

    db.add(company)
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Company registered", extra={"company_id": company.id})
    audit_log(
        "COMPANY_REGISTERED",
        user_id=admin.id,
        company_id=company.id,
        resource_type="company",
        resource_id=company.id,
        details={"name": company.name},
    )
    return admin


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Verify credentials

    Raises:
        AuthenticationError: unknown email, wrong password, inactive user
            or suspended company
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Incorrect email or password")
    if not user.is_active:
        raise AuthenticationError("User account is inactive")
    if user.company is not None and user.company.status == CompanyStatus.SUSPENDED.value:
        raise AuthenticationError(
            "Company access is suspended",
            error_code="COMPANY_SUSPENDED",
            status_code=403,
        )

    user.last_login_at = datetime.utcnow()
    db.commit()

    audit_log("USER_LOGIN", user_id=user.id, company_id=user.company_id, resource_type="user",
              resource_id=user.id)
    return user


def list_team(db: Session, company_id: str) -> List[User]:
    return db.query(User).filter(User.company_id == company_id).order_by(User.name).all()


def add_team_member(
    db: Session,
    acting_user: User,
    name: str,
    email: str,
    role: UserRole,
    password: str,
) -> User:
    """
    Add a user to the acting admin's company

    Raises:
        PermissionDeniedError: acting user is not an admin of a company
        ValidationError / ConflictError: bad input, email taken
    """
    if not acting_user.is_admin or acting_user.company_id is None:
        raise PermissionDeniedError("Only company admins can manage the team")
    if role not in TEAM_ROLES:
        raise ValidationError(
            f"Invalid role. Must be one of: {[r.value for r in TEAM_ROLES]}",
            field="role",
        )
    email = _check_new_user(db, name, email, password)

    member = User(
        id=_new_id("USR"),
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=role.value,
        company_id=acting_user.company_id,
    )
    db.add(member)
    db.commit()
    db.refresh(member)

    audit_log(
        "TEAM_MEMBER_ADDED",
        user_id=acting_user.id,
        company_id=acting_user.company_id,
        resource_type="user",
        resource_id=member.id,
        details={"role": role.value},
    )
    return member


def ensure_super_admin(db: Session, email: str, password: str, name: str) -> User:
    """Create the platform operator account if it does not exist yet."""
    existing = get_user_by_email(db, email)
    if existing:
        return existing

    user = User(
        id=_new_id("USR"),
        name=name,
        email=_normalize_email(email),
        password_hash=hash_password(password),
        role=UserRole.SUPER_ADMIN.value,
        company_id=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Platform admin account created", extra={"user_id": user.id})
    return user
