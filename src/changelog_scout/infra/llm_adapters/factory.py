from __future__ import annotations

from .anthropic_adapter import AnthropicTextAdapter
from .interface import TextGenerationAdapter
from .openai_adapter import OpenAITextAdapter
from .types import Provider


def get_adapter(provider: Provider, model: str, api_key: str) -> TextGenerationAdapter:
    """Factory that returns an adapter for the requested provider/model."""
    if provider == "openai":
        return OpenAITextAdapter(model, api_key)
    if provider == "anthropic":
        return AnthropicTextAdapter(model, api_key)
    raise ValueError("provider must be 'openai' or 'anthropic'")
