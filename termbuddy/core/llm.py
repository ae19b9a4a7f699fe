"""
LLM provider base class and provider selection for TermBuddy
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

import httpx

from termbuddy.config import ProviderConfig
from termbuddy.core.models import GenerationRequest, GenerationResult, Message
from termbuddy.errors import ResponseFormatError, UnknownProviderError, UpstreamError
from termbuddy.log import get_logger

logger = get_logger(__name__)

TEMPERATURE = 0.3
MAX_TOKENS = 4000


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider turns the normalized message list into its backend's wire
    format, performs exactly one HTTP call and extracts the generated text.
    Subclasses only describe the wire shape; transport and error handling
    live here.
    """

    name: str = "provider"
    endpoint: str = ""

    def __init__(self, api_key: str, model: str, **kwargs):
        self.api_key = api_key
        self.model = model
        self.timeout = kwargs.get('timeout', 120.0)
        self.transport: Optional[httpx.AsyncBaseTransport] = kwargs.get('transport')

    @abstractmethod
    def build_payload(self, messages: List[Message]) -> Dict[str, Any]:
        """JSON body for the request"""

    @abstractmethod
    def extract_text(self, data: Dict[str, Any]) -> str:
        """Generated text from a successful response body"""

    def get_url(self) -> str:
        return self.endpoint

    def get_headers(self) -> Dict[str, str]:
        return {'Content-Type': 'application/json'}

    def get_params(self) -> Dict[str, str]:
        return {}

    async def generate(self, messages: List[Message]) -> str:
        """Single attempt, no retries"""
        payload = self.build_payload(messages)
        logger.debug("POST %s (model=%s)", self.get_url(), self.model)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.get_url(),
                    headers=self.get_headers(),
                    params=self.get_params() or None,
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"{self.name} request failed: {e}",
                provider=self.name,
            ) from e

        data = self._decode(response)

        if not response.is_success:
            raise UpstreamError(
                self._error_detail(response, data),
                status_code=response.status_code,
                provider=self.name,
            )

        if not isinstance(data, dict):
            raise ResponseFormatError(
                f"Unexpected API response: {response.text}",
                status_code=response.status_code,
                provider=self.name,
            )

        return self.extract_text(data)

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _error_detail(self, response: httpx.Response, data: Any) -> str:
        """Upstream error message when present, else a status-coded one"""
        if isinstance(data, dict):
            error = data.get('error')
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
            if isinstance(error, str) and error:
                return error

        body = json.dumps(data) if data is not None else response.text
        return f"API error: {response.status_code} {body}".rstrip()

    def _unexpected(self, data: Dict[str, Any], reason: str = "Unexpected API response") -> ResponseFormatError:
        return ResponseFormatError(f"{reason}: {json.dumps(data)}", provider=self.name)


class LLMManager:
    """Selects the provider for a configuration and runs the generation"""

    def __init__(self, config: ProviderConfig, **provider_kwargs):
        self.config = config
        self.provider_kwargs = provider_kwargs
        self._provider: Optional[LLMProvider] = None

    def get_provider(self) -> LLMProvider:
        """Get the provider for the configured identifier"""
        if self._provider is None:
            provider_class = get_provider_class(self.config.provider)
            self._provider = provider_class(
                api_key=self.config.api_key,
                model=self.config.model,
                **self.provider_kwargs
            )
        return self._provider

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate raw text for a request using the configured provider"""
        provider = self.get_provider()
        raw_text = await provider.generate(request.messages)
        return GenerationResult(raw_text=raw_text, provider=provider.name, model=provider.model)


def get_provider_class(provider_name: str) -> Type[LLMProvider]:
    """Pure lookup from provider identifier to implementation"""
    from termbuddy.providers import PROVIDERS

    try:
        return PROVIDERS[provider_name]
    except KeyError:
        raise UnknownProviderError(provider_name) from None
