"""
Application configuration

SECURITY: Defaults are fail-safe for production.
- DEBUG defaults to False
- DHL_ACCOUNT_NUMBER has no usable default in production (will fail if not set)
- Runtime validation catches incomplete billing configuration
"""
import os
import logging
from typing import Optional
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

SUPPORTED_LABEL_FORMATS = ("pdf", "zpl", "lp2", "epl")


class Settings(BaseSettings):
    # App - defaults are PRODUCTION safe
    APP_NAME: str = "Carrier Compliance"
    DEBUG: bool = False  # SECURE DEFAULT: off in production
    ENVIRONMENT: str = "production"  # Explicit env marker
    LOG_LEVEL: str = "INFO"

    # DHL Express billing
    DHL_ACCOUNT_NUMBER: str = ""
    DHL_DUTIES_ACCOUNT_NUMBER: Optional[str] = None

    # DHL Express payload defaults
    DHL_DEFAULT_PRODUCT_CODE: str = "P"  # Express Worldwide
    DHL_LABEL_FORMAT: str = "pdf"
    DHL_DEFAULT_CURRENCY: str = "USD"
    DHL_DEFAULT_EXPORT_REASON: str = "Sale"

    @field_validator("DHL_LABEL_FORMAT", mode="before")
    @classmethod
    def parse_label_format(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in SUPPORTED_LABEL_FORMATS:
                raise ValueError(
                    f"DHL_LABEL_FORMAT must be one of: {', '.join(SUPPORTED_LABEL_FORMATS)}"
                )
        return v

    @field_validator("DHL_DEFAULT_CURRENCY", mode="before")
    @classmethod
    def parse_currency(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def validate_production_config(self):
        """Runtime validation to catch incomplete production configurations."""
        if self.ENVIRONMENT == "production":
            errors = []

            if self.DEBUG:
                errors.append(
                    "DEBUG=True is forbidden in production. "
                    "Set DEBUG=false or ENVIRONMENT=development"
                )

            if not self.DHL_ACCOUNT_NUMBER:
                errors.append(
                    "DHL_ACCOUNT_NUMBER is required in production. "
                    "Every booking must be billed to a shipper account."
                )

            if errors:
                raise ValueError(
                    "PRODUCTION CONFIGURATION VIOLATIONS:\n" + "\n".join(f"  - {e}" for e in errors)
                )

        return self

    class Config:
        env_file = ".env"
        case_sensitive = True


# Try to load settings, provide helpful error on failure
try:
    settings = Settings()
except Exception as e:
    # In development, allow fallback defaults
    if os.getenv("ENVIRONMENT", "development") == "development":
        logger.warning(
            f"Settings validation failed ({e.__class__.__name__}), using development defaults. "
            "Set DHL_ACCOUNT_NUMBER in .env file."
        )
        os.environ.setdefault("ENVIRONMENT", "development")
        settings = Settings()
    else:
        raise
