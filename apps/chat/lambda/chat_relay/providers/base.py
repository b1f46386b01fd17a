"""Provider interfaces and shared response model."""

from dataclasses import dataclass
from typing import Protocol

CREDENTIAL_FAILURE_MARKER = "API key"


@dataclass(frozen=True)
class ProviderResponse:
    message: str
    response_id: str
    input_tokens: int | None
    output_tokens: int | None
    duration_seconds: float


class ChatProvider(Protocol):
    def invoke(self, message: str, model: str) -> ProviderResponse:
        """Send one prompt to the provider and wait for the complete reply."""
        ...

    def is_credential_error(self, exc: Exception) -> bool:
        """Return True when ``exc`` means the provider rejected the API key."""
        ...


def mentions_credential_problem(exc: Exception) -> bool:
    return CREDENTIAL_FAILURE_MARKER.lower() in str(exc).lower()
