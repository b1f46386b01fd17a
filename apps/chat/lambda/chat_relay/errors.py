"""Domain-level exceptions for the chat relay.

Every failure the relay reports to a client is one of these. Each carries
the HTTP status it maps to and the public message for the error envelope;
``details`` holds the underlying cause and is only exposed in development.
"""

from .constants import INTERNAL_ERROR, INVALID_MESSAGE_ERROR, NOT_FOUND_ERROR, PROVIDER_FAILURE_ERROR


class RelayError(Exception):
    status_code = 500
    default_message = INTERNAL_ERROR

    def __init__(self, message: str | None = None, details: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidInputError(RelayError):
    """Raised when the chat message is missing, not a string, or blank."""

    status_code = 400
    default_message = INVALID_MESSAGE_ERROR


class UnauthorizedError(RelayError):
    """Raised when the provider rejects the configured credential."""

    status_code = 401


class MisconfiguredError(RelayError):
    """Raised when the deployment is missing required setup, such as an API key."""

    status_code = 500


class ProviderError(RelayError):
    """Raised for any provider failure that is not a credential problem."""

    status_code = 500
    default_message = PROVIDER_FAILURE_ERROR


class NotFoundError(RelayError):
    status_code = 404
    default_message = NOT_FOUND_ERROR


class InternalError(RelayError):
    status_code = 500
    default_message = INTERNAL_ERROR
