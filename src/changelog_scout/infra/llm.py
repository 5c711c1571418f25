from __future__ import annotations

from .llm_adapters import Provider, get_adapter
from ..core.ports import LoggerPort


class LLM:
    def __init__(
        self,
        *,
        provider: Provider,
        model: str,
        api_key: str,
        logger: LoggerPort,
        max_output_tokens: int = 4096,
    ) -> None:
        self._provider = provider
        self._model = model
        self._api_key = api_key
        self._logger = logger
        self._max_output_tokens = max_output_tokens

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    def generate(self, *, system: str, prompt: str) -> str:
        # Log LLM input with provider/model info
        self._logger.info(
            "llm_input",
            type="llm_input",
            provider=self._provider,
            model=self._model,
            prompt_len=len(prompt),
            prompt=prompt,
        )

        adapter = get_adapter(self._provider, self._model, self._api_key)
        resp = adapter.generate(prompt, system=system, max_output_tokens=self._max_output_tokens)
        text = resp.text

        usage = resp.usage
        if usage is not None:
            self._logger.info(
                "llm_usage",
                type="llm_usage",
                provider=self._provider,
                model=self._model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                total_tokens=usage.total_tokens,
            )

        self._logger.info(
            "llm_output",
            type="llm_output",
            provider=self._provider,
            model=self._model,
            raw_text_len=len(text),
            raw_text=text,
        )

        return text
