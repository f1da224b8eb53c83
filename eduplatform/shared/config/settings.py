# 📄 File: eduplatform/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The configuration center that reads settings from environment variables,
# like where the sign-in service lives and how long the "resend code" wait is.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for the client authentication core.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
#
# 🔄 Connected Modules / Calls From:
# - eduplatform.main (process lifespan)
# - eduplatform.shared.config.supabase (client construction)
# - eduplatform.shared.utils.logging (log level / format)
# - Registration wizard factory (cooldown and code length)

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Used when the project has not been configured yet
PLACEHOLDER_SUPABASE_URL = "https://placeholder.supabase.co"
PLACEHOLDER_SUPABASE_ANON_KEY = "placeholder_key"

_UNCONFIGURED_URLS = {
    "",
    "your_supabase_url_here",
    "https://your-project.supabase.co",
}
_UNCONFIGURED_KEYS = {"", "your_supabase_anon_key_here"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="EduPlatform", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json/text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SUPABASE SERVICES
    # =========================================================================

    SUPABASE_URL: str = Field(
        default=PLACEHOLDER_SUPABASE_URL,
        description="Supabase project URL"
    )
    SUPABASE_ANON_KEY: str = Field(
        default=PLACEHOLDER_SUPABASE_ANON_KEY,
        description="Supabase anonymous key"
    )
    SUPABASE_PROFILE_TABLE: str = Field(
        default="user_profiles",
        description="Table holding one profile row per authenticated user"
    )
    AUTH_PERSIST_SESSION: bool = Field(default=True, description="Persist auth session")
    AUTH_AUTO_REFRESH_TOKEN: bool = Field(default=True, description="Auto refresh tokens")
    DEFAULT_USER_ROLE: str = Field(default="student", description="Role given to new sign-ups")

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    PASSWORD_MIN_LENGTH: int = Field(default=8, description="Minimum password length")
    VERIFICATION_CODE_LENGTH: int = Field(default=6, description="Verification code digits")
    RESEND_COOLDOWN_SECONDS: int = Field(default=60, description="Resend code cooldown")
    RESEND_NOTICE_SECONDS: float = Field(
        default=3.0,
        description="How long the 'code sent' notice stays visible"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format value."""
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()

    @field_validator("SUPABASE_URL")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        """Fall back to the placeholder project when the URL was never filled in."""
        v = v.strip()
        if v in _UNCONFIGURED_URLS:
            return PLACEHOLDER_SUPABASE_URL
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid Supabase URL: {v}")
        return v.rstrip("/")

    @field_validator("SUPABASE_ANON_KEY")
    @classmethod
    def validate_supabase_key(cls, v: str) -> str:
        """Fall back to the placeholder key when the key was never filled in."""
        v = v.strip()
        if v in _UNCONFIGURED_KEYS:
            return PLACEHOLDER_SUPABASE_ANON_KEY
        return v

    @field_validator("VERIFICATION_CODE_LENGTH", "RESEND_COOLDOWN_SECONDS", "PASSWORD_MIN_LENGTH")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def uses_placeholder_credentials(self) -> bool:
        """True when either Supabase credential is still the placeholder."""
        return (
            self.SUPABASE_URL == PLACEHOLDER_SUPABASE_URL
            or self.SUPABASE_ANON_KEY == PLACEHOLDER_SUPABASE_ANON_KEY
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
