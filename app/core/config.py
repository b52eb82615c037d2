"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables (and the .env file)
- Centralizes Twilio credentials, app hash and the shared client secret
- Validates required configuration on startup
- Exposes the non-secret view served by GET /config
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal, List, Dict, Any

from app.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Required values are Optional here so the app can be imported without them;
    validate_settings() refuses to start when any of them is missing.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Twilio
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio Account SID"
    )
    TWILIO_API_KEY: Optional[str] = Field(
        default=None,
        description="Twilio API Key SID used for basic auth"
    )
    TWILIO_API_SECRET: Optional[str] = Field(
        default=None,
        description="Twilio API Key secret"
    )
    TWILIO_API_BASE_URL: str = Field(
        default="https://api.twilio.com/2010-04-01",
        description="Twilio REST API base URL"
    )
    SENDING_PHONE_NUMBER: Optional[str] = Field(
        default=None,
        description="Twilio phone number the verification SMS is sent from"
    )

    # Verification
    APP_HASH: Optional[str] = Field(
        default=None,
        description="Android app hash appended to the SMS for automatic retrieval"
    )
    CLIENT_SECRET: Optional[str] = Field(
        default=None,
        description="Secret shared between the mobile app and this server"
    )
    VERIFICATION_CODE_LENGTH: int = Field(
        default=6,
        description="Number of digits in the one-time code"
    )
    VERIFICATION_TTL_MINUTES: float = Field(
        default=5,
        description="Minutes a one-time code stays valid"
    )
    SMS_DISPATCH_TIMEOUT_SECONDS: Optional[float] = Field(
        default=10.0,
        description="Upper bound for a single SMS send (None disables it)"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for the HTTP server"
    )
    PORT: int = Field(
        default=3000,
        description="Port for the HTTP server"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    STATIC_DIR: str = Field(
        default="public",
        description="Directory of static files served at / when it exists"
    )

    @validator("VERIFICATION_CODE_LENGTH")
    def validate_code_length(cls, v):
        """Keep codes short enough to type and long enough to guess poorly."""
        if v < 4 or v > 10:
            raise ValueError("VERIFICATION_CODE_LENGTH must be between 4 and 10")
        return v

    @validator("VERIFICATION_TTL_MINUTES")
    def validate_ttl(cls, v):
        if v <= 0:
            raise ValueError("VERIFICATION_TTL_MINUTES must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def verification_ttl_seconds(self) -> float:
        return self.VERIFICATION_TTL_MINUTES * 60

    def public_view(self) -> Dict[str, Any]:
        """
        Configuration dump for the /config health check.
        Secrets are reported only as "is it set".
        """
        return {
            "TWILIO_ACCOUNT_SID": self.TWILIO_ACCOUNT_SID,
            "TWILIO_API_KEY": self.TWILIO_API_KEY,
            "TWILIO_API_SECRET": bool(self.TWILIO_API_SECRET),
            "SENDING_PHONE_NUMBER": self.SENDING_PHONE_NUMBER,
            "APP_HASH": self.APP_HASH,
            "CLIENT_SECRET": bool(self.CLIENT_SECRET),
            "VERIFICATION_CODE_LENGTH": self.VERIFICATION_CODE_LENGTH,
            "VERIFICATION_TTL_MINUTES": self.VERIFICATION_TTL_MINUTES,
            "ENVIRONMENT": self.ENVIRONMENT,
        }

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def validate_settings(config: Settings = settings) -> bool:
    """
    Validates critical settings on application startup.
    Raises ConfigurationError listing a remediation message per missing group.
    """
    errors: List[str] = []

    if not (config.TWILIO_API_KEY and config.TWILIO_API_SECRET and config.TWILIO_ACCOUNT_SID):
        errors.append(
            "Please copy the .env.example file to .env, "
            "and then add your Twilio API Key, API Secret, "
            "and Account SID to the .env file. "
            "Find them on https://www.twilio.com/console"
        )

    if not config.SENDING_PHONE_NUMBER:
        errors.append(
            "Please provide a valid phone number, "
            "such as +15125551212, in the .env file"
        )

    if not config.APP_HASH:
        errors.append("Please provide a valid Android app hash, in the .env file")

    if not config.CLIENT_SECRET:
        errors.append(
            "Please provide a secret string to share, "
            "between the app and the server in the .env file"
        )

    if errors:
        raise ConfigurationError(
            f"Configuration validation failed: {len(errors)} problem(s)",
            details=errors
        )

    return True
