"""
Documentation prober

Finds allow-listed executables mentioned in a request and captures their
--help output so the model can prefer a tool's own subcommands.
"""

import re
import shutil
import subprocess
from typing import Callable, List, Optional, Sequence

from termbuddy.core.models import DocumentationEntry
from termbuddy.log import get_logger

logger = get_logger(__name__)

# Order matters: documentation is emitted in this order, not request order
KNOWN_COMMANDS = (
    "git",
    "npm",
    "docker",
    "pacman",
    "yay",
    "systemctl",
    "journalctl",
    "claude",
    "cargo",
    "python",
    "node",
    "curl",
    "wget",
)

HELP_FLAGS = ("--help", "-h")


class DocumentationProber:
    """Best-effort collection of help text for commands named in a request"""

    def __init__(
        self,
        known_commands: Sequence[str] = KNOWN_COMMANDS,
        timeout: Optional[float] = 10.0,
        which: Callable[[str], Optional[str]] = shutil.which,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.known_commands = tuple(known_commands)
        self.timeout = timeout
        self._which = which
        self._run = run

    def mentioned_commands(self, request: str) -> List[str]:
        """Allow-listed names appearing as whole words, in allow-list order"""
        mentioned = []
        for name in self.known_commands:
            pattern = rf"(?<![\w-]){re.escape(name)}(?![\w-])"
            if re.search(pattern, request, re.IGNORECASE):
                mentioned.append(name)
        return mentioned

    def help_text(self, name: str) -> Optional[str]:
        """Help output for one command, or None when unavailable"""
        try:
            if not self._which(name):
                logger.debug("Skipping %s: not on PATH", name)
                return None

            for flag in HELP_FLAGS:
                process = self._run(
                    [name, flag],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
                if process.returncode == 0:
                    output = process.stdout or ""
                    return output if output.strip() else None

            logger.debug("Skipping %s: no help flag succeeded", name)
            return None

        except Exception as e:
            logger.debug("Help probe for %s failed: %s", name, e)
            return None

    def collect(self, request: str) -> List[DocumentationEntry]:
        """Documentation entries for every mentioned command that answers"""
        entries = []
        for name in self.mentioned_commands(request):
            text = self.help_text(name)
            if text is not None:
                entries.append(DocumentationEntry(command_name=name, help_text=text))
        return entries

    def probe(self, request: str) -> str:
        """Concatenated documentation, or an empty string"""
        return format_documentation(self.collect(request))


def format_documentation(entries: List[DocumentationEntry]) -> str:
    return "\n\n".join(entry.render() for entry in entries)
