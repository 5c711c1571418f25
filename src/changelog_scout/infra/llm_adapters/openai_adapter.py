from __future__ import annotations

from openai import OpenAI

from .types import LLMResponse, TokenUsage


class OpenAITextAdapter:
    """OpenAI Responses API adapter (gpt-4o, o3, etc.).

    - System text goes into ``instructions``, the prompt into ``input``
    - The API key is passed explicitly, never read from the environment here
    """

    def __init__(self, model: str, api_key: str) -> None:
        self.model = model
        self._client = OpenAI(api_key=api_key)

    def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_output_tokens: int = 4096,
    ) -> LLMResponse:
        response = self._client.responses.create(
            model=self.model,
            instructions=system,
            input=prompt,
            max_output_tokens=max_output_tokens,
        )
        usage = None
        u = response.usage
        if u is not None:
            iu = u.input_tokens
            ou = u.output_tokens
            tt = u.total_tokens if u.total_tokens is not None else (iu or 0) + (ou or 0)
            usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text=response.output_text or "", usage=usage)
