"""Application service for chat relay requests."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from chat_relay.config import RelaySettings
from chat_relay.constants import PROVIDER_LABELS, RESPONSE_LOG_PREVIEW_CHARS
from chat_relay.errors import InvalidInputError, MisconfiguredError, ProviderError, UnauthorizedError
from chat_relay.model_registry import ModelCapability
from chat_relay.providers.base import ChatProvider
from chat_relay.schemas import ChatResponse

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class RelayReply:
    message: str
    timestamp: str

    def to_response(self) -> ChatResponse:
        return ChatResponse(message=self.message, timestamp=self.timestamp)


class RelayService:
    def __init__(
        self,
        settings: RelaySettings,
        model_capabilities: Mapping[str, ModelCapability],
        providers: Mapping[str, ChatProvider],
    ) -> None:
        self._settings = settings
        self._model_capabilities = model_capabilities
        self._providers = providers

    def generate_reply(self, message: str) -> RelayReply:
        if not isinstance(message, str) or not message.strip():
            raise InvalidInputError()

        capability = self._model_capabilities.get(self._settings.model)
        if capability is None:
            raise MisconfiguredError(
                f"Model {self._settings.model} is not supported. "
                f"Please set CHAT_MODEL to one of: {', '.join(sorted(self._model_capabilities))}."
            )

        label = PROVIDER_LABELS[capability.provider]
        if not self._settings.api_key_for(capability.provider):
            key_env = self._settings.api_key_env_for(capability.provider)
            raise MisconfiguredError(
                f"{label} API key not configured. Please set {key_env} environment variable."
            )

        provider = self._providers.get(capability.provider)
        if provider is None:
            raise MisconfiguredError(f"Unsupported provider: {capability.provider}")

        logger.info("Received message", extra={"chat_message": message, "model": self._settings.model})
        try:
            response = provider.invoke(message, self._settings.model)
        except Exception as exc:
            logger.exception("Error generating response", extra={"model": self._settings.model})
            if provider.is_credential_error(exc):
                raise UnauthorizedError(
                    f"Invalid API key. Please check your {label} API key configuration."
                ) from exc
            raise ProviderError(details=str(exc)) from exc

        logger.info(
            "Generated response",
            extra={
                "response_preview": response.message[:RESPONSE_LOG_PREVIEW_CHARS],
                "response_id": response.response_id,
                "duration_seconds": response.duration_seconds,
            },
        )
        return RelayReply(message=response.message, timestamp=utc_timestamp())
