"""
Anthropic Messages API provider
"""

from typing import Any, Dict, List

from termbuddy.core.llm import LLMProvider, MAX_TOKENS, TEMPERATURE
from termbuddy.core.models import Message, conversation, system_message
from termbuddy.core.prompt import DEFAULT_SYSTEM_PROMPT

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(LLMProvider):
    """Anthropic LLM provider implementation.

    The system message travels in a dedicated ``system`` field rather than
    in the message list; when the caller supplies none, the default
    command-generation prompt is sent instead.
    """

    name = "anthropic"
    endpoint = "https://api.anthropic.com/v1/messages"

    def get_headers(self) -> Dict[str, str]:
        return {
            'Content-Type': 'application/json',
            'x-api-key': self.api_key,
            'anthropic-version': ANTHROPIC_VERSION,
        }

    def build_payload(self, messages: List[Message]) -> Dict[str, Any]:
        system = system_message(messages)
        return {
            "model": self.model,
            "system": system.content if system else DEFAULT_SYSTEM_PROMPT,
            "messages": [m.to_dict() for m in conversation(messages)],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        content = data.get('content')
        if not isinstance(content, list) or not content:
            raise self._unexpected(data)

        text = content[0].get('text') if isinstance(content[0], dict) else None
        if not isinstance(text, str):
            raise self._unexpected(data)

        return text
