# src/social_api/settings.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from social_api.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="social-api",
        description="Application name"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL",
        description="Custom S3 endpoint (MinIO, moto server, COS, R2...)"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="social-media-storage",
        alias="S3_BUCKET_NAME",
        description="Bucket holding both media files and JSON documents"
    )

    public_base_url: Optional[str] = Field(
        default=None,
        description="Public URL prefix for stored objects. Presigned URLs are used when unset."
    )

    presigned_url_expiry_seconds: int = Field(
        default=7 * 24 * 3600,
        ge=1,
        le=7 * 24 * 3600,
        description="Lifetime of presigned object URLs"
    )

    # Sign-up
    verification_code_ttl_seconds: int = Field(
        default=600,
        ge=1,
        description="How long an issued verification code stays redeemable"
    )

    verification_sweep_interval_seconds: int = Field(
        default=300,
        ge=1,
        description="Interval of the background sweep of expired codes"
    )

    min_password_length: int = Field(
        default=6,
        ge=1
    )

    expose_verification_code: bool = Field(
        default=True,
        description="Echo the issued code back as `demoCode` (no email delivery)"
    )

    # HTTP
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000"]
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names from the environment."""
        v = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
