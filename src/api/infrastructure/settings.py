"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TenancySettings(BaseSettings):
    """Host-to-tenant resolution settings.

    Environment variables:
        REFERRALFLOW_TENANCY_ENVIRONMENT: production, development or test (default: development)
        REFERRALFLOW_TENANCY_ROOT_DOMAINS: JSON list of hosts that map to the default tenant
        REFERRALFLOW_TENANCY_PRODUCTION_ROOT_SUFFIX: Suffix stripped in production (default: .vercel.app)
        REFERRALFLOW_TENANCY_LOCAL_DEV_SUFFIX: Suffix stripped in development (default: .localhost:3000)
        REFERRALFLOW_TENANCY_BLOCKED_PATH_PREFIXES: JSON list of bot-probe path prefixes
        REFERRALFLOW_TENANCY_BLOCKED_PATH_REDIRECT_URL: Where bot probes are sent
    """

    model_config = SettingsConfigDict(
        env_prefix="REFERRALFLOW_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["production", "development", "test"] = Field(
        default="development",
        description="Deployment environment",
    )
    root_domains: list[str] = Field(
        default=[
            "localhost:3000",
            "actiniumholdings.com",
            "referral-app.vercel.app",
            "referralflow.health",
            "www.referralflow.health",
        ],
        description="Hosts served as the root (default tenant) site",
    )
    production_root_suffix: str = Field(
        default=".vercel.app",
        description="Root-domain suffix stripped from hosts in production",
    )
    local_dev_suffix: str = Field(
        default=".localhost:3000",
        description="Root-domain suffix stripped from hosts in development",
    )
    blocked_path_prefixes: list[str] = Field(
        default=[
            "/admin",
            "/wp-admin",
            "/wp-login.php",
            "/dashboard/admin",
            "/administrator",
            "/backup",
            "/.env",
        ],
        description="Path prefixes treated as bot probes",
    )
    blocked_path_redirect_url: str = Field(
        default="https://google.com",
        description="Redirect target for bot probes",
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_local_dev(self) -> bool:
        return self.environment == "development"


class AuthSettings(BaseSettings):
    """Session cookie and super-admin settings.

    Environment variables:
        REFERRALFLOW_AUTH_SESSION_SECRET: HMAC secret for session tokens (required in production)
        REFERRALFLOW_AUTH_SESSION_COOKIE_NAME: Cookie name (default: session)
        REFERRALFLOW_AUTH_SESSION_MAX_AGE_SECONDS: Session lifetime (default: 5 days)
        REFERRALFLOW_AUTH_ADMIN_EMAIL: Comma-separated super-admin addresses
    """

    model_config = SettingsConfigDict(
        env_prefix="REFERRALFLOW_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    session_secret: SecretStr = Field(
        default=SecretStr("dev-session-secret-change-me"),
        description="Secret used to sign session tokens",
    )
    session_cookie_name: str = Field(
        default="session",
        description="Name of the session cookie",
    )
    session_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 5,
        description="Session token lifetime in seconds",
        ge=60,
    )
    admin_email: str = Field(
        default="",
        description="Comma-separated super-admin email addresses",
    )

    @property
    def admin_emails(self) -> list[str]:
        """Normalized super-admin addresses (trimmed, lowercased, non-empty)."""
        return [
            email.strip().lower()
            for email in self.admin_email.split(",")
            if email.strip()
        ]


class SessionTimeoutSettings(BaseSettings):
    """Client-side inactivity tracking settings.

    Environment variables:
        REFERRALFLOW_SESSION_INACTIVITY_TIMEOUT_SECONDS: Idle time before logout (default: 300)
        REFERRALFLOW_SESSION_WARNING_LEAD_SECONDS: Warning shown this long before logout (default: 20)
        REFERRALFLOW_SESSION_TICK_INTERVAL_SECONDS: State machine tick (default: 1)
        REFERRALFLOW_SESSION_ACTIVITY_THROTTLE_SECONDS: Minimum gap between activity writes (default: 1)
        REFERRALFLOW_SESSION_PRESENCE_PING_INTERVAL_SECONDS: Minimum gap between presence pings (default: 60)
        REFERRALFLOW_SESSION_PROTECTED_PATH_PREFIXES: JSON list of tracked path prefixes
        REFERRALFLOW_SESSION_API_BASE_URL: Base URL of the API for logout and presence calls
    """

    model_config = SettingsConfigDict(
        env_prefix="REFERRALFLOW_SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    inactivity_timeout_seconds: int = Field(default=5 * 60, ge=1)
    warning_lead_seconds: int = Field(default=20, ge=0)
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    activity_throttle_seconds: float = Field(default=1.0, ge=0)
    presence_ping_interval_seconds: int = Field(default=60, ge=1)
    protected_path_prefixes: list[str] = Field(default=["/dashboard"])
    login_path: str = Field(default="/login")
    logout_endpoint: str = Field(default="/api/auth/logout")
    presence_endpoint: str = Field(default="/api/presence")
    activity_store_key: str = Field(default="referralflow.lastActivity")
    activity_store_dir: str = Field(
        default="~/.referralflow",
        description="Directory holding the shared activity timestamp file",
    )
    api_base_url: str = Field(default="http://localhost:3000")

    @model_validator(mode="after")
    def validate_warning_lead(self) -> "SessionTimeoutSettings":
        """Validate the warning window fits inside the timeout."""
        if self.warning_lead_seconds >= self.inactivity_timeout_seconds:
            raise ValueError(
                f"warning_lead_seconds ({self.warning_lead_seconds}) must be < "
                f"inactivity_timeout_seconds ({self.inactivity_timeout_seconds})"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="ReferralFlow API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_session_timeout_settings() -> SessionTimeoutSettings:
    """Get cached session timeout settings."""
    return SessionTimeoutSettings()
