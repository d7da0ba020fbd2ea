"""
Marmoraria Control - Configuration Management with pydantic-settings

Provides validated, type-safe configuration from environment variables.
All settings can be overridden via environment variables or .env file.
"""
from functools import lru_cache
from typing import Optional, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ===================
    # Application Settings
    # ===================
    PROJECT_NAME: str = "Marmoraria Control"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    ENVIRONMENT: str = Field(default="development", description="deployment environment")

    # ===================
    # Database Settings
    # ===================
    DATABASE_URL: str = Field(
        default="sqlite:///./marmoraria.db",
        description="SQLAlchemy database URL"
    )
    AUTO_CREATE_TABLES: bool = Field(default=True, description="Create missing tables on startup")

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    # ===================
    # Security Settings
    # ===================
    SECRET_KEY: str = Field(
        default="change-this-to-a-random-secret-key-in-production",
        description="JWT signing key - MUST change in production"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=480, description="JWT token expiration in minutes")

    @field_validator("SECRET_KEY")
    @classmethod
    def warn_default_secret(cls, v: str) -> str:
        """Warn if using default secret key."""
        if "change-this" in v.lower():
            import warnings
            warnings.warn(
                "Using default SECRET_KEY - this is insecure for production!",
                UserWarning
            )
        return v

    # ===================
    # Platform (super admin) bootstrap
    # ===================
    SUPER_ADMIN_EMAIL: Optional[str] = Field(default=None, description="Platform operator login")
    SUPER_ADMIN_PASSWORD: Optional[str] = Field(default=None, description="Platform operator password")
    SUPER_ADMIN_NAME: str = Field(default="Platform Admin")
    DEFAULT_MONTHLY_FEE: float = Field(default=0.0, ge=0, description="Fee assigned to new companies")

    # ===================
    # CORS Settings
    # ===================
    ALLOWED_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ===================
    # Inventory Rules
    # ===================
    EXHAUSTED_AREA_THRESHOLD_M2: float = Field(
        default=0.05,
        gt=0,
        description="Remnants smaller than this (m2) are treated as exhausted"
    )
    RECENT_ENTRIES_LIMIT: int = Field(default=5, ge=1, description="Entries shown on the dashboard")

    # ===================
    # Logging Settings
    # ===================
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log format: json or text")
    LOG_FILE: Optional[str] = Field(default=None, description="Log file path (optional)")
    AUDIT_LOG_FILE: Optional[str] = Field(default="./logs/audit.log", description="Audit log file path")

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.ENVIRONMENT.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once per process.
    """
    return Settings()


settings = get_settings()
