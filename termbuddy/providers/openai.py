"""
OpenAI-compatible chat-completions providers (OpenAI, Grok)
"""

from typing import Any, Dict, List

from termbuddy.core.llm import LLMProvider, MAX_TOKENS, TEMPERATURE
from termbuddy.core.models import Message


class OpenAICompatibleProvider(LLMProvider):
    """Bearer-token chat-completions API with inline system message"""

    def get_headers(self) -> Dict[str, str]:
        return {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.api_key}',
        }

    def build_payload(self, messages: List[Message]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        choices = data.get('choices')
        if not isinstance(choices, list) or not choices:
            raise self._unexpected(data)

        message = choices[0].get('message') if isinstance(choices[0], dict) else None
        content = message.get('content') if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise self._unexpected(data)

        return content


class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI LLM provider implementation"""

    name = "openai"
    endpoint = "https://api.openai.com/v1/chat/completions"


class GrokProvider(OpenAICompatibleProvider):
    """xAI Grok, which speaks the OpenAI wire format"""

    name = "grok"
    endpoint = "https://api.x.ai/v1/chat/completions"
