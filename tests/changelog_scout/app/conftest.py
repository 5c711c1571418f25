"""Shared fixtures for app-level tests."""
import pytest

from changelog_scout.app.config import AppConfig, DirectoryConfig, LLMConfig

from fakes import FakeLLM, make_container_factory, sample_forge


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        llm=LLMConfig(api_key="test-key", provider_name="openai", model_name="gpt-test"),
    )


@pytest.fixture
def llm_double():
    return FakeLLM(text="# Upgrade report\n\nRename gadgets to gizmos.")


@pytest.fixture
def mock_container(monkeypatch, llm_double):
    """Patch the CLI's Container with fakes; returns the fake forge and LLM."""
    forge = sample_forge()
    monkeypatch.setattr("changelog_scout.app.cli.Container", make_container_factory(forge, llm_double))
    return forge, llm_double
