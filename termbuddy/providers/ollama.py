"""
Ollama local chat provider
"""

from typing import Any, Dict, List

from termbuddy.core.llm import LLMProvider, MAX_TOKENS, TEMPERATURE
from termbuddy.core.models import Message, conversation, system_message


class OllamaProvider(LLMProvider):
    """Ollama provider; talks to the local daemon and needs no API key"""

    name = "ollama"
    endpoint = "http://localhost:11434/api/chat"

    def build_payload(self, messages: List[Message]) -> Dict[str, Any]:
        system = system_message(messages)
        chat = [system] if system else []
        chat.extend(conversation(messages))
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in chat],
            "stream": False,
            "options": {
                "temperature": TEMPERATURE,
                "num_predict": MAX_TOKENS,
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        message = data.get('message')
        content = message.get('content') if isinstance(message, dict) else None
        if not isinstance(content, str) or not content:
            raise self._unexpected(data, "Unexpected Ollama response")
        return content
