"""Shared constants and literal types for the chat relay."""

from typing import Literal

GEMINI_API_KEY_ENV = "GEMINI_API_KEY"
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"

DEFAULT_AWS_REGION = "ap-northeast-1"
LANGSMITH_PROJECT = "chat-relay"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PORT = 5000
DEVELOPMENT_ENV = "development"
DEFAULT_ENV = "production"
RESPONSE_LOG_PREVIEW_CHARS = 100

INVALID_MESSAGE_ERROR = "Invalid message. Please provide a non-empty message."
PROVIDER_FAILURE_ERROR = "Failed to generate response. Please try again later."
INTERNAL_ERROR = "Internal server error"
NOT_FOUND_ERROR = "Endpoint not found"

Provider = Literal["gemini", "openai"]

PROVIDER_LABELS: dict[str, str] = {"gemini": "Gemini", "openai": "OpenAI"}
PROVIDER_KEY_ENVS: dict[str, str] = {
    "gemini": GEMINI_API_KEY_ENV,
    "openai": OPENAI_API_KEY_ENV,
}
