"""Process-wide relay settings, loaded from environment / .env file once at startup."""

import logging
from functools import lru_cache
from typing import Any

import boto3
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_ENV,
    DEFAULT_MODEL,
    DEFAULT_PORT,
    DEVELOPMENT_ENV,
    PROVIDER_KEY_ENVS,
)

logger = logging.getLogger(__name__)

SECRET_FIELDS = ("gemini_api_key", "openai_api_key", "langsmith_api_key")


class RelaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # API keys; each *_parameter names an SSM SecureString read when the key itself is unset.
    gemini_api_key: str | None = None
    gemini_api_key_parameter: str | None = None
    openai_api_key: str | None = None
    openai_api_key_parameter: str | None = None
    langsmith_api_key: str | None = None
    langsmith_api_key_parameter: str | None = None

    model: str = Field(default=DEFAULT_MODEL, alias="CHAT_MODEL")
    port: int = Field(default=DEFAULT_PORT, alias="PORT")
    environment: str = Field(default=DEFAULT_ENV, alias="APP_ENV")
    aws_region: str = Field(default=DEFAULT_AWS_REGION, alias="AWS_REGION")

    @field_validator(
        "gemini_api_key",
        "gemini_api_key_parameter",
        "openai_api_key",
        "openai_api_key_parameter",
        "langsmith_api_key",
        "langsmith_api_key_parameter",
        mode="before",
    )
    @classmethod
    def blank_as_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("model", "environment", mode="before")
    @classmethod
    def blank_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not value.strip():
            return DEFAULT_MODEL if info.field_name == "model" else DEFAULT_ENV
        return value

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, environment: str) -> str:
        return environment.strip().lower()

    @property
    def development(self) -> bool:
        return self.environment == DEVELOPMENT_ENV

    def api_key_for(self, provider: str) -> str | None:
        if provider == "gemini":
            return self.gemini_api_key
        if provider == "openai":
            return self.openai_api_key
        return None

    def api_key_env_for(self, provider: str) -> str:
        return PROVIDER_KEY_ENVS[provider]


def _get_secure_parameter(ssm_client: Any, parameter_name: str) -> str:
    result = ssm_client.get_parameter(Name=parameter_name, WithDecryption=True)
    value = result["Parameter"].get("Value")
    if not value:
        raise RuntimeError(f"SSM parameter {parameter_name} has no value")
    return value


def _get_optional_secure_parameter(ssm_client: Any, parameter_name: str) -> str | None:
    try:
        return _get_secure_parameter(ssm_client, parameter_name)
    except Exception:
        logger.warning(
            "SSM parameter is unavailable; treating credential as unset",
            extra={"parameter_name": parameter_name},
            exc_info=True,
        )
        return None


def resolve_parameter_secrets(settings: RelaySettings) -> RelaySettings:
    """Fill unset API keys from the SSM parameters named in the settings."""
    pending = {
        name: getattr(settings, f"{name}_parameter")
        for name in SECRET_FIELDS
        if not getattr(settings, name) and getattr(settings, f"{name}_parameter")
    }
    if not pending:
        return settings

    ssm_client = boto3.client("ssm", region_name=settings.aws_region)
    updates = {
        name: _get_optional_secure_parameter(ssm_client, parameter_name)
        for name, parameter_name in pending.items()
    }
    return settings.model_copy(update=updates)


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    """Load settings from ``.env`` and the process environment (called once via lru_cache)."""
    settings = resolve_parameter_secrets(RelaySettings())
    logger.info(
        "Relay settings loaded",
        extra={
            "model": settings.model,
            "environment": settings.environment,
            "gemini_key_configured": bool(settings.gemini_api_key),
            "openai_key_configured": bool(settings.openai_api_key),
            "langsmith_enabled": bool(settings.langsmith_api_key),
        },
    )
    return settings
