"""Gemini provider implementation for chat requests."""

import logging
import time
from collections.abc import Callable
from typing import Any

from google import genai
from google.genai import errors as genai_errors

from .base import ProviderResponse, mentions_credential_problem

logger = logging.getLogger(__name__)


class GeminiChatProvider:
    def __init__(
        self,
        get_client: Callable[[], genai.Client],
        invoke_generate_content: Callable[[genai.Client, str, str], Any],
    ) -> None:
        self._get_client = get_client
        self._invoke_generate_content = invoke_generate_content

    def invoke(self, message: str, model: str) -> ProviderResponse:
        client = self._get_client()
        start = time.time()
        response = self._invoke_generate_content(client, model, message)
        duration_ms = int((time.time() - start) * 1000)
        content = response.text or ""

        usage = response.usage_metadata
        input_tokens = usage.prompt_token_count if usage else None
        output_tokens = usage.candidates_token_count if usage else None
        response_id = response.response_id or ""

        logger.info(
            "Chat response generated",
            extra={
                "gemini_duration_ms": duration_ms,
                "model": model,
                "usage_prompt_tokens": input_tokens,
                "usage_completion_tokens": output_tokens,
                "response_length": len(content),
                "response_id": response_id,
            },
        )
        return ProviderResponse(
            message=content,
            response_id=response_id,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            duration_seconds=round(duration_ms / 1000, 2),
        )

    def is_credential_error(self, exc: Exception) -> bool:
        # Gemini reports a bad key as 400 INVALID_ARGUMENT "API key not valid".
        if isinstance(exc, genai_errors.APIError) and exc.code == 401:
            return True
        return mentions_credential_problem(exc)
