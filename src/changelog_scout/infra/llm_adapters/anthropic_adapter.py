from __future__ import annotations

import anthropic

from .types import LLMResponse, TokenUsage


class AnthropicTextAdapter:
    """Anthropic Messages API adapter (Claude Sonnet, etc.).

    - System text goes into ``system``, the prompt is a single user message
    - Only text content blocks are joined into the answer
    """

    def __init__(self, model: str, api_key: str) -> None:
        self.model = model
        self._client = anthropic.Anthropic(api_key=api_key)

    def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_output_tokens: int = 4096,
    ) -> LLMResponse:
        kwargs = {}
        if system:
            kwargs["system"] = system
        message = self._client.messages.create(
            model=self.model,
            max_tokens=max_output_tokens,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        texts = [block.text for block in message.content if getattr(block, "type", None) == "text"]

        u = message.usage
        iu = u.input_tokens if u is not None else None
        ou = u.output_tokens if u is not None else None
        tt = (iu or 0) + (ou or 0) if (iu is not None or ou is not None) else None
        usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text="".join(texts), usage=usage)
