"""Tests for provider selection."""

from __future__ import annotations

import asyncio

import pytest

from termbuddy.config import ProviderConfig, ProviderName
from termbuddy.core.llm import LLMManager, get_provider_class
from termbuddy.core.models import GenerationRequest, Message, Role
from termbuddy.errors import UnknownProviderError
from termbuddy.providers import (
    AnthropicProvider,
    GoogleProvider,
    GrokProvider,
    OllamaProvider,
    OpenAIProvider,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("openai", OpenAIProvider),
        ("anthropic", AnthropicProvider),
        ("google", GoogleProvider),
        ("grok", GrokProvider),
        ("ollama", OllamaProvider),
    ],
)
def test_every_supported_identifier_has_a_provider(name: str, expected) -> None:
    assert get_provider_class(name) is expected


def test_provider_table_covers_enum() -> None:
    for name in ProviderName:
        assert get_provider_class(name.value).name == name.value


@pytest.mark.parametrize("name", ["deepseek", "OpenAI", ""])
def test_unknown_identifier_raises(name: str) -> None:
    with pytest.raises(UnknownProviderError) as excinfo:
        get_provider_class(name)
    assert excinfo.value.provider == name


def test_manager_builds_provider_from_config(make_transport) -> None:
    transport = make_transport()
    config = ProviderConfig(provider="grok", model="grok-3-mini", api_key="xai-key")
    manager = LLMManager(config, timeout=5.0, transport=transport.transport)

    provider = manager.get_provider()

    assert isinstance(provider, GrokProvider)
    assert provider.api_key == "xai-key"
    assert provider.model == "grok-3-mini"
    assert provider.timeout == 5.0
    assert manager.get_provider() is provider


def test_manager_generate_returns_raw_text(make_transport, provider_config) -> None:
    transport = make_transport(body={"choices": [{"message": {"content": "```bash\nls\n```"}}]})
    manager = LLMManager(provider_config, transport=transport.transport)
    request = GenerationRequest(
        messages=[Message(Role.user, "list files")],
        provider_config=provider_config,
    )

    result = asyncio.run(manager.generate(request))

    assert result.raw_text == "```bash\nls\n```"
    assert result.provider == "openai"
    assert result.model == "gpt-5-nano"
    assert len(transport.requests) == 1
