from .types import Provider, TokenUsage, LLMResponse
from .interface import TextGenerationAdapter
from .openai_adapter import OpenAITextAdapter
from .anthropic_adapter import AnthropicTextAdapter
from .factory import get_adapter

__all__ = [
    "Provider",
    "TokenUsage",
    "LLMResponse",
    "TextGenerationAdapter",
    "OpenAITextAdapter",
    "AnthropicTextAdapter",
    "get_adapter",
]
