"""Tests for the documentation prober."""

from __future__ import annotations

import subprocess

from termbuddy.core.docs import KNOWN_COMMANDS, DocumentationProber, format_documentation
from termbuddy.core.models import DocumentationEntry


def test_mentioned_commands_follow_allow_list_order() -> None:
    prober = DocumentationProber()
    assert prober.mentioned_commands("show docker logs then git status") == ["git", "docker"]


def test_mentioned_commands_are_case_insensitive_whole_words() -> None:
    prober = DocumentationProber()
    assert prober.mentioned_commands("restart the Docker daemon") == ["docker"]
    assert prober.mentioned_commands("bring up docker-compose services") == []
    assert prober.mentioned_commands("run python3 and gitk") == []
    assert prober.mentioned_commands("update npm, please") == ["npm"]


def test_no_mentioned_command_yields_empty_documentation(make_prober) -> None:
    prober, run = make_prober(available=KNOWN_COMMANDS)
    assert prober.probe("list files larger than 1GB") == ""
    assert run.calls == []


def test_command_absent_from_path_is_omitted(make_prober) -> None:
    prober, run = make_prober(
        available=("git",),
        results={("docker", "--help"): (0, "Usage: docker"), ("git", "--help"): (0, "usage: git")},
    )
    docs = prober.probe("docker and git")

    assert "docker" not in docs
    assert docs == "## git\n\nusage: git"
    assert ["docker", "--help"] not in run.calls


def test_falls_back_to_short_help_flag(make_prober) -> None:
    prober, run = make_prober(
        available=("yay",),
        results={("yay", "--help"): (1, "unknown option"), ("yay", "-h"): (0, "Usage: yay")},
    )
    assert prober.probe("yay update everything") == "## yay\n\nUsage: yay"
    assert run.calls == [["yay", "--help"], ["yay", "-h"]]


def test_both_help_flags_failing_omits_command(make_prober) -> None:
    prober, _ = make_prober(
        available=("cargo",),
        results={("cargo", "--help"): (2, "nope"), ("cargo", "-h"): (2, "nope")},
    )
    assert prober.collect("cargo build") == []


def test_empty_help_output_omits_command(make_prober) -> None:
    prober, _ = make_prober(available=("node",), results={("node", "--help"): (0, "  \n")})
    assert prober.probe("node version") == ""


def test_probe_failure_is_isolated_per_command(make_prober) -> None:
    prober, _ = make_prober(
        available=("git", "curl"),
        results={
            ("git", "--help"): subprocess.TimeoutExpired(["git", "--help"], 10),
            ("curl", "--help"): (0, "Usage: curl [options...] <url>"),
        },
    )
    entries = prober.collect("git clone then curl the readme")
    assert entries == [DocumentationEntry("curl", "Usage: curl [options...] <url>")]


def test_which_failure_is_swallowed() -> None:
    def broken_which(name):
        raise OSError("PATH lookup failed")

    prober = DocumentationProber(which=broken_which)
    assert prober.probe("git status") == ""


def test_help_output_is_not_truncated(make_prober) -> None:
    long_help = "\n".join(f"  option-{i}" for i in range(5000))
    prober, _ = make_prober(available=("git",), results={("git", "--help"): (0, long_help)})
    assert prober.probe("git") == f"## git\n\n{long_help}"


def test_entries_are_joined_with_blank_line() -> None:
    entries = [DocumentationEntry("git", "usage: git"), DocumentationEntry("docker", "Usage: docker")]
    assert format_documentation(entries) == "## git\n\nusage: git\n\n## docker\n\nUsage: docker"
