"""
Configuration management for the store service
"""
from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Store service configuration loaded from environment variables"""

    # Token signing
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Password policy
    # No default: the minimum length is a deployment decision
    PASSWORD_MIN_LENGTH: int
    PASSWORD_MAX_LENGTH: int = 1024
    PASSWORD_HASH_ROUNDS: int = 29000

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./app.db"

    # Server Configuration
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        frozen=True,
    )

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def secret_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("JWT_SECRET_KEY must not be blank")
        return v

    @field_validator(
        "ACCESS_TOKEN_EXPIRE_MINUTES", "PASSWORD_MIN_LENGTH", "PASSWORD_MAX_LENGTH", "PASSWORD_HASH_ROUNDS"
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @model_validator(mode="after")
    def password_bounds_ordered(self) -> "Settings":
        if self.PASSWORD_MIN_LENGTH > self.PASSWORD_MAX_LENGTH:
            raise ValueError("PASSWORD_MIN_LENGTH must not exceed PASSWORD_MAX_LENGTH")
        return self


def load_settings(**overrides) -> Settings:
    """
    Build the process-wide settings.

    Raises:
        ConfigurationError: If required values are missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            details={"fields": fields},
        ) from e
