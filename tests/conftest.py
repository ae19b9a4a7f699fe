from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from termbuddy.config import ProviderConfig, Settings
from termbuddy.core.docs import DocumentationProber
from termbuddy.core.prompt import SystemContext


class FakeRun:
    """Stands in for subprocess.run; answers from a (command, flag) table."""

    def __init__(self, results: Dict[Tuple[str, str], object]) -> None:
        self.results = results
        self.calls: List[List[str]] = []

    def __call__(self, args, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(args))
        result = self.results.get(tuple(args), (127, ""))
        if isinstance(result, Exception):
            raise result
        returncode, stdout = result
        return subprocess.CompletedProcess(args, returncode, stdout=stdout)


class RecordingTransport:
    """httpx mock transport that records requests and replays one response."""

    def __init__(self, status: int = 200, body: object = None, text: Optional[str] = None,
                 error: Optional[Exception] = None) -> None:
        self.status = status
        self.body = body
        self.text = text
        self.error = error
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status, json=self.body)

    def payload(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        config_file=tmp_path / "config.json",
        history_file=tmp_path / "history.json",
    )


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(provider="openai", model="gpt-5-nano", api_key="sk-test-key")


@pytest.fixture
def context(tmp_path: Path) -> SystemContext:
    return SystemContext(shell="/bin/zsh", system="linux", arch="x86_64", cwd=str(tmp_path / "project"))


@pytest.fixture
def make_prober() -> Callable[..., Tuple[DocumentationProber, FakeRun]]:
    """Build a prober whose PATH holds `available` and whose processes answer from `results`."""

    def factory(available=(), results=None):
        run = FakeRun(results or {})
        which = lambda name: f"/usr/bin/{name}" if name in available else None
        return DocumentationProber(which=which, run=run), run

    return factory


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    return RecordingTransport
