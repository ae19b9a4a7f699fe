"""
Command generation pipeline:
documentation probe -> prompt -> provider -> sanitizer -> history
"""

from typing import Optional

import httpx

from termbuddy.config import ProviderConfig, Settings
from termbuddy.core.docs import DocumentationProber, format_documentation
from termbuddy.core.history import HistoryStore
from termbuddy.core.llm import LLMManager
from termbuddy.core.models import GenerationRequest
from termbuddy.core.prompt import SystemContext, compose_messages
from termbuddy.core.sanitize import sanitize
from termbuddy.errors import UsageError
from termbuddy.log import get_logger

logger = get_logger(__name__)


class CommandGenerator:
    """Turns one natural-language request into one shell command"""

    def __init__(
        self,
        config: ProviderConfig,
        settings: Settings,
        prober: Optional[DocumentationProber] = None,
        history: Optional[HistoryStore] = None,
        context: Optional[SystemContext] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.settings = settings
        self.prober = prober or DocumentationProber(timeout=settings.probe_timeout)
        self.history = history or HistoryStore(settings.history_file, settings.history_limit)
        self.context = context or SystemContext.detect()
        self.llm_manager = LLMManager(
            config,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def generate(self, request: str) -> str:
        """Generate, sanitize and record a command for the request"""
        if not request.strip():
            raise UsageError("Request text is empty")

        # Fail on an unsupported provider before doing any work
        self.llm_manager.get_provider()

        entries = self.prober.collect(request)
        if entries:
            logger.info("Using help text for: %s", ", ".join(e.command_name for e in entries))
        documentation = format_documentation(entries)

        messages = compose_messages(request, self.context, documentation)
        generation = GenerationRequest(messages=messages, provider_config=self.config)

        logger.debug("Calling %s with model %s", self.config.provider, self.config.model)
        result = await self.llm_manager.generate(generation)

        command = sanitize(result.raw_text)
        self.history.record(request, command, self.context.cwd)

        return command
