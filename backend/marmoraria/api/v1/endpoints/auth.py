"""
Authentication endpoints

Company self-registration, login and the dependencies every other router
uses to resolve the caller, their tenant and their role.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from marmoraria.core.security import create_access_token, get_user_from_token
from marmoraria.db.session import get_db
from marmoraria.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from marmoraria.logging_config import get_logger
from marmoraria.models.company import CompanyStatus
from marmoraria.models.user import User
from marmoraria.schemas.account import RegisterCompanyRequest, TokenResponse, UserResponse
from marmoraria.services import account_service, platform_service
from marmoraria.services.identity import IdentityContext

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the user behind a bearer token

    Raises:
        AuthenticationError: invalid/expired token, unknown or inactive user,
            or a user whose company has been suspended
    """
    user_id = get_user_from_token(token)
    if user_id is None:
        raise AuthenticationError("Could not validate credentials")

    user = account_service.get_user(db, user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Could not validate credentials")

    if user.company is not None and user.company.status == CompanyStatus.SUSPENDED.value:
        raise AuthenticationError(
            "Company access is suspended",
            error_code="COMPANY_SUSPENDED",
            status_code=403,
        )

    return user


def get_current_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """Company ADMIN (or platform admin)"""
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return current_user


def get_current_super_admin(current_user: User = Depends(get_current_user)) -> User:
    platform_service.require_super_admin(current_user)
    return current_user


def get_tenant_id(
    current_user: User = Depends(get_current_user),
    x_company_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> str:
    """
    Company whose stock the request operates on

    Regular users always act on their own company. Platform admins pick a
    company with the X-Company-Id header.
    """
    if current_user.is_super_admin:
        if not x_company_id:
            raise ValidationError(
                "Platform admins must select a company with the X-Company-Id header",
                field="X-Company-Id",
            )
        return platform_service.get_company(db, x_company_id).id

    if current_user.company_id is None:
        raise PermissionDeniedError("User is not attached to a company")
    return current_user.company_id


def get_identity(current_user: User = Depends(get_current_user)) -> IdentityContext:
    return IdentityContext.for_user(current_user)


# ============================================================================
# ENDPOINTS
# ============================================================================

def _token_response(user: User) -> TokenResponse:
    token = create_access_token(user.id, company_id=user.company_id)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterCompanyRequest, db: Session = Depends(get_db)):
    """
    Register a new marmoraria and its first ADMIN user

    Returns an access token so the new admin is logged in immediately.
    """
    admin = account_service.register_company(
        db,
        admin_name=request.admin_name,
        email=request.email,
        company_name=request.company_name,
        password=request.password,
    )
    return _token_response(admin)


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    Login with email and password

    OAuth2 form: the email goes in the ``username`` field.
    """
    user = account_service.authenticate(db, form_data.username, form_data.password)
    logger.info("User logged in", extra={"user_id": user.id})
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user
