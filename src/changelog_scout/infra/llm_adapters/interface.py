from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import LLMResponse


@runtime_checkable
class TextGenerationAdapter(Protocol):
    """Minimal interface for a single system + user prompt completion."""

    model: str

    def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_output_tokens: int = 4096,
    ) -> LLMResponse:
        """Run one request and return normalized text + token usage."""
        raise NotImplementedError
