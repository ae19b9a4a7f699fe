"""
Data types shared by the generation pipeline
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from termbuddy.config import ProviderConfig


class Role(str, Enum):
    """Message roles understood by every provider"""
    system = "system"
    user = "user"


@dataclass(frozen=True)
class Message:
    """A single chat message"""
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class DocumentationEntry:
    """Help text captured for one allow-listed command"""
    command_name: str
    help_text: str

    def render(self) -> str:
        return f"## {self.command_name}\n\n{self.help_text}"


@dataclass(frozen=True)
class GenerationRequest:
    """Everything one provider call needs"""
    messages: List[Message]
    provider_config: ProviderConfig


@dataclass
class GenerationResult:
    """Raw text returned by a provider, before sanitizing"""
    raw_text: str
    provider: str
    model: str


def system_message(messages: List[Message]) -> Optional[Message]:
    """Return the system message if present"""
    for message in messages:
        if message.role == Role.system:
            return message
    return None


def conversation(messages: List[Message]) -> List[Message]:
    """Messages without the system entry"""
    return [m for m in messages if m.role != Role.system]
