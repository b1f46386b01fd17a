"""HTTP client for the chat relay service."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Cannot connect to server. Please ensure the backend is running."
FALLBACK_ERROR_MESSAGE = "Failed to send message. Please try again."
# Chat calls wait as long as the provider takes; health checks give up early.
HEALTH_CHECK_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class RelayReply:
    message: str
    timestamp: str


class RelayCallError(Exception):
    """A relay call that did not produce a reply.

    ``message`` is always safe to show in the transcript.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _server_error_message(response: httpx.Response) -> str | None:
    try:
        payload: Any = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
        return payload["error"]
    return None


class RelayClient:
    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def send_message(self, message: str) -> RelayReply:
        try:
            response = self._client.post("/api/chat", json={"message": message})
        except httpx.TransportError as exc:
            logger.warning("Relay unreachable", extra={"error": str(exc)})
            raise RelayCallError(CONNECTION_ERROR_MESSAGE) from exc

        if response.is_error:
            logger.warning("Relay returned an error", extra={"status_code": response.status_code})
            raise RelayCallError(
                _server_error_message(response) or FALLBACK_ERROR_MESSAGE,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            message, timestamp = payload["message"], payload["timestamp"]
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Relay returned an unexpected body", extra={"error": str(exc)})
            raise RelayCallError(FALLBACK_ERROR_MESSAGE, status_code=response.status_code) from exc

        if not isinstance(message, str) or not isinstance(timestamp, str):
            logger.warning(
                "Relay returned a reply with non-string fields",
                extra={"status_code": response.status_code},
            )
            raise RelayCallError(FALLBACK_ERROR_MESSAGE, status_code=response.status_code)
        return RelayReply(message=message, timestamp=timestamp)

    def check_health(self) -> bool:
        try:
            response = self._client.get("/health", timeout=HEALTH_CHECK_TIMEOUT_SECONDS)
        except httpx.TransportError:
            return False
        return response.status_code == 200
