"""
Google Gemini generateContent provider
"""

from typing import Any, Dict, List

from termbuddy.core.llm import LLMProvider, TEMPERATURE
from termbuddy.core.models import Message, Role, system_message

MAX_OUTPUT_TOKENS = 8000


class GoogleProvider(LLMProvider):
    """Gemini provider.

    Sends a single prompt: the system and user content are concatenated,
    with no multi-turn roles.
    """

    name = "google"
    endpoint = "https://generativelanguage.googleapis.com/v1beta/models"

    def get_url(self) -> str:
        return f"{self.endpoint}/{self.model}:generateContent"

    def get_params(self) -> Dict[str, str]:
        return {'key': self.api_key}

    def build_prompt(self, messages: List[Message]) -> str:
        system = system_message(messages)
        user = next((m for m in messages if m.role == Role.user), None)
        user_content = user.content if user else ""
        if system:
            return f"{system.content}\n\n{user_content}"
        return user_content

    def build_payload(self, messages: List[Message]) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": self.build_prompt(messages)}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        candidates = data.get('candidates')
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise self._unexpected(data, "No candidates in response")

        candidate = candidates[0]

        # Parts inside content first
        content = candidate.get('content')
        parts = content.get('parts') if isinstance(content, dict) else None
        if isinstance(parts, list) and parts and isinstance(parts[0], dict):
            text = parts[0].get('text')
            if isinstance(text, str):
                return text

        # Then text directly on the candidate
        text = candidate.get('text')
        if isinstance(text, str):
            return text

        raise self._unexpected(data, "Cannot extract text from response")
