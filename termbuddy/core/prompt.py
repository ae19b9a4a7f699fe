"""
Prompt composition for command generation
"""

import os
import platform
import sys
from dataclasses import dataclass
from typing import List

from termbuddy.core.models import Message, Role

DOCUMENTATION_HEADER = "COMMAND DOCUMENTATION (use this first):"
DOCUMENTATION_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class SystemContext:
    """Shell and machine facts folded into the prompt"""
    shell: str
    system: str
    arch: str
    cwd: str

    @classmethod
    def detect(cls) -> "SystemContext":
        return cls(
            shell=os.environ.get("SHELL") or "unknown",
            system=sys.platform,
            arch=platform.machine() or "unknown",
            cwd=os.getcwd(),
        )


def get_system_prompt(shell: str, system: str) -> str:
    """Instruction block sent as the system message"""
    return f"""You are a command-generation assistant.
Your job is to review the user's request and output valid shell code that can be run directly on their system.

IMPORTANT: If help documentation is provided for a specific command mentioned in the request, you MUST use that command's documented options and subcommands. For example:
- If "claude --help" shows an "update" command, use "claude update" NOT package manager commands
- If "npm --help" shows "install", use "npm install" NOT generic package manager commands
- Always prefer the command's own built-in functionality when available

Your response must contain **only** the shell code — no explanations, no comments, no markdown fences, and no extra text.

The user is running:
- Shell: {shell}
- System: {system}

Generate commands appropriate for their shell and system. Always produce code that is ready to copy and paste into their terminal."""


# Used by providers that need a system prompt when the caller supplied none
DEFAULT_SYSTEM_PROMPT = get_system_prompt("unknown", "unknown")


def build_user_prompt(request: str, context: SystemContext, documentation: str = "") -> str:
    prefix = ""
    if documentation:
        prefix = f"{DOCUMENTATION_HEADER}\n{documentation}{DOCUMENTATION_SEPARATOR}"

    return (
        f"{prefix}USER REQUEST: {request}\n\n"
        f"User current path: {context.cwd}\n"
        f"Architecture: {context.arch}"
    )


def compose_messages(request: str, context: SystemContext, documentation: str = "") -> List[Message]:
    """System and user messages consumed by every provider"""
    return [
        Message(role=Role.system, content=get_system_prompt(context.shell, context.system)),
        Message(role=Role.user, content=build_user_prompt(request, context, documentation)),
    ]
