"""Configuration models for PlantKey.

This module contains all configuration-related Pydantic models used throughout the application.
"""

import re

from pydantic import BaseModel, Field, field_validator

from plantkey.quota.entitlements import UserTier


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "plantkey"})


class ScoringConfig(BaseModel):
    """Tunable constants for fusing external recognition scores with verified traits."""

    match_bonus: float = Field(default=0.05, ge=0.0, le=1.0)  # Added per verified trait match
    mismatch_penalty: float = Field(default=0.03, ge=0.0, le=1.0)  # Subtracted per mismatch
    adjusted_candidate_limit: int = Field(default=5, ge=1)  # Top external results re-ranked


class QuotaConfig(BaseModel):
    """Daily free-tier quota for Observe trait answers."""

    free_daily_limit: int = Field(default=3, ge=0)
    backend: str = "file"  # "memory", "file" or "redis"
    count_key: str = "observe_answers_today"
    date_key: str = "observe_answers_date"

    # Redis backend
    redis_host: str = "127.0.0.1"
    redis_port: int = 6379
    redis_db: int = 0

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate quota store backend name."""
        if v not in {"memory", "file", "redis"}:
            raise ValueError(
                f"Invalid quota backend '{v}'. Must be one of: memory, file, redis."
            )
        return v

    @field_validator("count_key", "date_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate persistence key format."""
        if not re.match(r"^[a-zA-Z0-9:._-]+$", v):
            raise ValueError(
                f"Invalid quota key '{v}'. "
                "Must contain only letters, numbers, colons, dots, underscores, and hyphens."
            )
        return v


class RecognitionConfig(BaseModel):
    """PlantNet image recognition settings."""

    api_key: str = ""  # Overridden by PLANTNET_API_KEY when set
    base_url: str = "https://my-api.plantnet.org"
    project: str = "all"
    language: str = "en"
    timeout_seconds: float = Field(default=30.0, gt=0)
    include_related_images: bool = False
    no_reject: bool = False


class PlantKeyConfig(BaseModel):
    """Configuration settings for the PlantKey application."""

    # Version tracking
    config_version: str = "1.0.0"  # Configuration schema version

    # Entitlement tier consumed by the quota gate
    user_tier: UserTier = UserTier.FREE

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Identification
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    quota: QuotaConfig = Field(default_factory=QuotaConfig)
    recognition: RecognitionConfig = Field(default_factory=RecognitionConfig)
