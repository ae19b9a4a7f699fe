"""
Provider implementations, keyed by configured identifier
"""

from typing import Dict, Type

from termbuddy.config import ProviderName
from termbuddy.core.llm import LLMProvider

from .anthropic import AnthropicProvider
from .google import GoogleProvider
from .ollama import OllamaProvider
from .openai import GrokProvider, OpenAIProvider

PROVIDERS: Dict[str, Type[LLMProvider]] = {
    ProviderName.openai.value: OpenAIProvider,
    ProviderName.anthropic.value: AnthropicProvider,
    ProviderName.google.value: GoogleProvider,
    ProviderName.grok.value: GrokProvider,
    ProviderName.ollama.value: OllamaProvider,
}

__all__ = [
    "PROVIDERS",
    "AnthropicProvider",
    "GoogleProvider",
    "GrokProvider",
    "OllamaProvider",
    "OpenAIProvider",
]
