"""Runtime infrastructure helpers for provider clients and tracing."""

import logging
import os
from functools import lru_cache
from typing import Any

from google import genai
from langsmith import traceable
from langsmith.run_trees import get_cached_client
from openai import OpenAI

from chat_relay.config import RelaySettings
from chat_relay.constants import LANGSMITH_PROJECT

logger = logging.getLogger(__name__)


def _configure_langsmith(langsmith_api_key: str | None) -> None:
    if not langsmith_api_key:
        os.environ.pop("LANGSMITH_TRACING", None)
        os.environ.pop("LANGSMITH_API_KEY", None)
        logger.info("LangSmith tracing disabled because API key is unavailable")
        return

    os.environ["LANGSMITH_TRACING"] = "true"
    os.environ["LANGSMITH_API_KEY"] = langsmith_api_key
    os.environ.setdefault("LANGSMITH_PROJECT", LANGSMITH_PROJECT)


@lru_cache(maxsize=1)
def ensure_langsmith_configured(settings: RelaySettings) -> None:
    """Configure LangSmith environment variables (called once via lru_cache)."""
    _configure_langsmith(settings.langsmith_api_key)


def flush_langsmith_traces() -> None:
    if os.environ.get("LANGSMITH_TRACING", "").lower() != "true":
        return
    if not os.environ.get("LANGSMITH_API_KEY"):
        return
    try:
        get_cached_client().flush()
    except Exception:
        logger.warning("Failed to flush LangSmith traces", exc_info=True)


@lru_cache(maxsize=4)
def get_gemini_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


@lru_cache(maxsize=4)
def get_openai_client(api_key: str) -> OpenAI:
    return OpenAI(api_key=api_key)


@traceable(run_type="llm", name="gemini.models.generate_content")
def invoke_gemini_generate_content(client: genai.Client, model: str, contents: str) -> Any:
    return client.models.generate_content(model=model, contents=contents)


@traceable(run_type="llm", name="openai.responses.create")
def invoke_openai_responses(client: OpenAI, request_params: dict[str, Any]) -> Any:
    return client.responses.create(**request_params)
