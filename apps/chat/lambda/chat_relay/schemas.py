"""Pydantic schemas for the chat relay API."""

from pydantic import BaseModel, ConfigDict, field_validator


class ChatRequest(BaseModel):
    # Strict so numbers or lists sent as the message are rejected rather than coerced.
    model_config = ConfigDict(strict=True)

    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, message: str) -> str:
        if not message.strip():
            raise ValueError("message must not be blank")
        return message


class ChatResponse(BaseModel):
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "Server is running"
