"""Pydantic configuration models for Facts Today."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class StoreConfig(BaseModel):
    """Hosted fact store connection."""

    url: str = "http://localhost:54321"
    api_key: Optional[str] = None
    table: str = "facts"
    row_limit: int = Field(default=1500, ge=1)
    timeout: float = Field(default=10.0, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Store url must be http(s): {v}")
        return v.rstrip("/")


class LoggingConfig(BaseModel):
    """structlog output settings."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v


class WebConfig(BaseModel):
    """Web server settings."""

    frontend_origin: str = "http://localhost:8000"
    session_cookie: str = "facts_session"
    max_sessions: int = Field(default=1000, ge=1)


class FactsConfig(BaseModel):
    """Root configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "FactsConfig":
        return cls.model_validate(data or {})
