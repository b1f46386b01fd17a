"""OpenAI provider implementation for chat requests."""

import logging
import time
from collections.abc import Callable
from typing import Any

import openai
from openai import OpenAI

from .base import ProviderResponse, mentions_credential_problem

logger = logging.getLogger(__name__)


class OpenAIChatProvider:
    def __init__(
        self,
        get_openai_client: Callable[[], OpenAI],
        invoke_responses: Callable[[OpenAI, dict[str, Any]], Any],
    ) -> None:
        self._get_openai_client = get_openai_client
        self._invoke_responses = invoke_responses

    def invoke(self, message: str, model: str) -> ProviderResponse:
        client = self._get_openai_client()
        start = time.time()
        request_params: dict[str, Any] = {
            "model": model,
            "input": message,
        }
        response = self._invoke_responses(client, request_params)
        duration_ms = int((time.time() - start) * 1000)
        content = response.output_text or ""

        logger.info(
            "Chat response generated",
            extra={
                "openai_duration_ms": duration_ms,
                "model": response.model,
                "usage_prompt_tokens": (response.usage.input_tokens if response.usage else None),
                "usage_completion_tokens": (
                    response.usage.output_tokens if response.usage else None
                ),
                "response_length": len(content),
                "response_id": response.id,
            },
        )
        return ProviderResponse(
            message=content,
            response_id=response.id,
            input_tokens=response.usage.input_tokens if response.usage else None,
            output_tokens=response.usage.output_tokens if response.usage else None,
            duration_seconds=round(duration_ms / 1000, 2),
        )

    def is_credential_error(self, exc: Exception) -> bool:
        if isinstance(exc, openai.AuthenticationError):
            return True
        return mentions_credential_problem(exc)
