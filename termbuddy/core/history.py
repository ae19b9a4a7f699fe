"""
Directory-scoped history of generated commands.
Recording and reading are both best effort: failures never reach the caller.
"""

import json
import os
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List

from termbuddy.log import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 500


@dataclass
class HistoryEntry:
    """One generated command, as stored on disk"""
    path: str
    request: str
    command: str
    timestamp: int  # milliseconds since the epoch

    def summary(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "request": self.request,
            "timestamp": self.timestamp,
        }


class HistoryStore:
    """Append-only, bounded log persisted as a single JSON file"""

    def __init__(self, history_file: Path, max_entries: int = DEFAULT_LIMIT):
        self.history_file = history_file
        self.max_entries = max_entries

    def _current_timestamp(self) -> int:
        return int(time.time() * 1000)

    def _load_raw(self) -> List[Dict[str, Any]]:
        """Raw entries from disk; a missing or corrupt file is an empty history"""
        if not self.history_file.exists():
            return []

        try:
            with open(self.history_file, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.debug("Starting fresh history, could not read %s: %s", self.history_file, e)
            return []

        commands = data.get('commands') if isinstance(data, dict) else None
        if not isinstance(commands, list):
            return []
        return commands

    def _save_raw(self, commands: List[Dict[str, Any]]) -> None:
        self.history_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.history_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w') as f:
            json.dump({"commands": commands}, f, indent=2)

    def record(self, request: str, command: str, path: str) -> bool:
        """Append an entry, evicting the oldest beyond the limit.

        Returns False when the write failed; the failure is logged at debug
        level and otherwise ignored.
        """
        try:
            commands = self._load_raw()
            entry = HistoryEntry(
                path=path,
                request=request,
                command=command,
                timestamp=self._current_timestamp(),
            )
            commands.append(asdict(entry))

            # Keep only last N commands
            if len(commands) > self.max_entries:
                commands = commands[-self.max_entries:]

            self._save_raw(commands)
            return True

        except Exception as e:
            logger.debug("Could not save history: %s", e)
            return False

    def entries(self) -> List[HistoryEntry]:
        """All well-formed entries, oldest first"""
        entries = []
        for raw in self._load_raw():
            try:
                entries.append(HistoryEntry(
                    path=str(raw['path']),
                    request=str(raw['request']),
                    command=str(raw['command']),
                    timestamp=int(raw.get('timestamp', 0)),
                ))
            except (KeyError, TypeError, ValueError, AttributeError):
                continue
        return entries

    def query(self, path: str, text_filter: str = "") -> List[HistoryEntry]:
        """Entries for one directory, newest first, unique by command"""
        try:
            matches = [e for e in self.entries() if e.path == path]

            if text_filter:
                needle = text_filter.lower()
                matches = [
                    e for e in matches
                    if needle in e.command.lower() or needle in e.request.lower()
                ]

            matches.sort(key=lambda e: e.timestamp, reverse=True)

            seen = set()
            unique = []
            for entry in matches:
                if entry.command not in seen:
                    seen.add(entry.command)
                    unique.append(entry)
            return unique

        except Exception as e:
            logger.debug("Could not read history: %s", e)
            return []
