import types

import pytest

from changelog_scout.infra.llm_adapters import (
    AnthropicTextAdapter,
    OpenAITextAdapter,
    TextGenerationAdapter,
    get_adapter,
)
from changelog_scout.infra.llm_adapters import anthropic_adapter as anthropic_mod
from changelog_scout.infra.llm_adapters import openai_adapter as openai_mod


class DummyOpenAIResponse:
    def __init__(self, text, usage):
        self.output_text = text
        self.usage = usage


class DummyResponsesClient:
    def __init__(self):
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        usage = types.SimpleNamespace(input_tokens=5, output_tokens=7, total_tokens=None)
        return DummyOpenAIResponse("ok-openai", usage)


class DummyOpenAI:
    def __init__(self, *, api_key):
        assert api_key == "sk-openai-test"
        self.responses = DummyResponsesClient()


class DummyContentBlock:
    def __init__(self, type_, text=""):
        self.type = type_
        self.text = text


class DummyMessagesClient:
    def __init__(self):
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return types.SimpleNamespace(
            content=[DummyContentBlock("text", "ok-"), DummyContentBlock("thinking"), DummyContentBlock("text", "anthropic")],
            usage=types.SimpleNamespace(input_tokens=3, output_tokens=4),
        )


class DummyAnthropic:
    def __init__(self, *, api_key):
        assert api_key == "sk-anthropic-test"
        self.messages = DummyMessagesClient()


@pytest.fixture(autouse=True)
def mock_clients(monkeypatch):
    monkeypatch.setattr(openai_mod, "OpenAI", lambda api_key: DummyOpenAI(api_key=api_key))
    monkeypatch.setattr(
        anthropic_mod, "anthropic", types.SimpleNamespace(Anthropic=lambda api_key: DummyAnthropic(api_key=api_key))
    )
    yield


def test_openai_adapter_uses_instructions_and_input():
    adapter = OpenAITextAdapter(model="gpt-4o", api_key="sk-openai-test")

    resp = adapter.generate("the prompt", system="the system", max_output_tokens=256)

    sent = adapter._client.responses.kwargs
    assert sent == {
        "model": "gpt-4o",
        "instructions": "the system",
        "input": "the prompt",
        "max_output_tokens": 256,
    }
    assert resp.text == "ok-openai"
    assert (resp.usage.input_tokens, resp.usage.output_tokens, resp.usage.total_tokens) == (5, 7, 12)


def test_anthropic_adapter_uses_system_and_user_message():
    adapter = AnthropicTextAdapter(model="claude-sonnet", api_key="sk-anthropic-test")

    resp = adapter.generate("the prompt", system="the system", max_output_tokens=512)

    sent = adapter._client.messages.kwargs
    assert sent["model"] == "claude-sonnet"
    assert sent["max_tokens"] == 512
    assert sent["system"] == "the system"
    assert sent["messages"] == [{"role": "user", "content": "the prompt"}]
    assert resp.text == "ok-anthropic"
    assert resp.usage.total_tokens == 7


def test_anthropic_adapter_omits_empty_system():
    adapter = AnthropicTextAdapter(model="claude-sonnet", api_key="sk-anthropic-test")

    adapter.generate("p")

    assert "system" not in adapter._client.messages.kwargs


def test_factory_selects_adapter():
    assert isinstance(get_adapter("openai", "gpt-4o", "sk-openai-test"), OpenAITextAdapter)
    assert isinstance(get_adapter("anthropic", "claude", "sk-anthropic-test"), AnthropicTextAdapter)
    assert isinstance(get_adapter("openai", "gpt-4o", "sk-openai-test"), TextGenerationAdapter)


def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError):
        get_adapter("cohere", "command", "key")
