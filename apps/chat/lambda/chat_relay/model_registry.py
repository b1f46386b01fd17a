"""Model capability registry."""

from dataclasses import dataclass

from .constants import Provider


@dataclass(frozen=True)
class ModelCapability:
    provider: Provider


MODEL_CAPABILITIES: dict[str, ModelCapability] = {
    # --- Gemini models ---
    "gemini-2.5-flash": ModelCapability(provider="gemini"),
    "gemini-2.5-flash-lite": ModelCapability(provider="gemini"),
    "gemini-2.5-pro": ModelCapability(provider="gemini"),
    # --- OpenAI models ---
    "gpt-4.1-mini": ModelCapability(provider="openai"),
    "gpt-4o-mini": ModelCapability(provider="openai"),
}
ALLOWED_MODELS = set(MODEL_CAPABILITIES)
