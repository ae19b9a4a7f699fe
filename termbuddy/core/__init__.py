"""
Core functionality for TermBuddy
"""

from .models import Message, Role, DocumentationEntry, GenerationRequest, GenerationResult
from .sanitize import sanitize
from .prompt import SystemContext, compose_messages, get_system_prompt, DEFAULT_SYSTEM_PROMPT
from .docs import DocumentationProber, KNOWN_COMMANDS
from .history import HistoryStore, HistoryEntry
from .llm import LLMProvider, LLMManager, get_provider_class
from .generator import CommandGenerator

__all__ = [
    "Message",
    "Role",
    "DocumentationEntry",
    "GenerationRequest",
    "GenerationResult",
    "sanitize",
    "SystemContext",
    "compose_messages",
    "get_system_prompt",
    "DEFAULT_SYSTEM_PROMPT",
    "DocumentationProber",
    "KNOWN_COMMANDS",
    "HistoryStore",
    "HistoryEntry",
    "LLMProvider",
    "LLMManager",
    "get_provider_class",
    "CommandGenerator",
]
