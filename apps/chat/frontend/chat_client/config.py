"""Frontend settings, loaded from environment / .env file."""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND_URL = "http://localhost:5000"


class FrontendSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    backend_url: str = Field(default=DEFAULT_BACKEND_URL, alias="RELAY_BACKEND_URL")

    @field_validator("backend_url", mode="before")
    @classmethod
    def normalize_backend_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/") or DEFAULT_BACKEND_URL
        return value


@lru_cache(maxsize=1)
def get_frontend_settings() -> FrontendSettings:
    return FrontendSettings()
