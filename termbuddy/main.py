#!/usr/bin/env python3
"""
TermBuddy - AI-powered terminal command assistant CLI
"""

import asyncio
import json
import os
from enum import Enum
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from termbuddy import __version__
from termbuddy.config import (
    DEFAULT_MODELS,
    ProviderConfig,
    ProviderName,
    Settings,
    load_provider_config,
    save_provider_config,
    show_config,
)
from termbuddy.core.generator import CommandGenerator
from termbuddy.core.history import HistoryStore
from termbuddy.errors import ConfigMissingError, TermBuddyError, UpstreamError
from termbuddy.integration import detect_shell, get_snippet, install_integration, rc_file_for
from termbuddy.log import err_console, setup_logging

# Interactive output for the companion commands
console = Console()

USAGE = "Usage: termbuddy <your request>"

# Create the generation CLI; request words may look like options (e.g. "-la")
app = typer.Typer(
    name="termbuddy",
    help="AI-powered terminal command assistant",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["--help"]}
)

# Companion CLI: setup, config, history, shell integration
ctl = typer.Typer(
    name="termbuddy-ctl",
    help="Set up and manage TermBuddy",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]}
)


class LogLevel(str, Enum):
    """Log levels"""
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


class HistoryMode(str, Enum):
    """History output formats"""
    commands = "commands"
    interactive = "interactive"
    json = "json"


class ShellName(str, Enum):
    """Shells with integration snippets"""
    zsh = "zsh"
    bash = "bash"
    fish = "fish"


def version_callback(value: bool):
    """Show version and exit"""
    if value:
        typer.echo(f"Terminal Buddy v{__version__}")
        raise typer.Exit()


def fail(message: str) -> NoReturn:
    """Print a one-line diagnostic to stderr and exit 1"""
    err_console.print(message, markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(1)


@app.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
def generate(
    request: Optional[List[str]] = typer.Argument(
        None,
        help="What you want to do, in plain words"
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level", "-l",
        help="Set logging level (diagnostics go to stderr)"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
):
    """
    Generate a shell command from a natural-language request

    Examples:
    \b
        termbuddy list running docker containers
        termbuddy "find files larger than 100MB here"
    """
    request_text = " ".join(request or []).strip()
    if not request_text:
        err_console.print(USAGE, markup=False, highlight=False)
        fail('Run "termbuddy-ctl setup" first to configure.')

    try:
        settings = Settings.from_env()
        setup_logging(log_level.value if log_level else settings.log_level)

        config = load_provider_config(settings)
        generator = CommandGenerator(config, settings)
        command = asyncio.run(generator.generate(request_text))

    except KeyboardInterrupt:
        fail("Cancelled")
    except UpstreamError as e:
        fail(f"Error calling AI: {e}")
    except TermBuddyError as e:
        fail(f"Error: {e}")

    # Nothing but the command goes to stdout
    typer.echo(command)


@ctl.callback()
def ctl_common(
    version: Optional[bool] = typer.Option(
        None,
        "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
):
    """Set up and manage TermBuddy"""
    pass


@ctl.command()
def setup(
    provider: Optional[ProviderName] = typer.Option(
        None,
        "--provider", "-p",
        help="LLM provider to use"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model", "-m",
        help="Model identifier"
    ),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        help="API key for the provider"
    ),
    integration: Optional[bool] = typer.Option(
        None,
        "--integration/--no-integration",
        help="Add shell integration to your shell config"
    ),
):
    """
    Configure provider, model and API key

    Examples:
    \b
        termbuddy-ctl setup
        termbuddy-ctl setup --provider ollama --model llama3.2 --no-integration
    """
    try:
        settings = Settings.from_env()
    except TermBuddyError as e:
        fail(f"Error: {e}")

    console.print("[bold]TermBuddy Setup[/bold]\n")

    if provider is None:
        choice = Prompt.ask(
            "Choose your AI provider",
            choices=[p.value for p in ProviderName],
            default=ProviderName.openai.value,
            console=console,
        )
        provider = ProviderName(choice)

    if model is None:
        model = Prompt.ask("Model", default=DEFAULT_MODELS[provider], console=console)

    # Ollama runs locally and needs no key
    if api_key is None:
        if provider == ProviderName.ollama:
            api_key = ""
        else:
            api_key = Prompt.ask(
                f"Enter your {provider.value.upper()} API key",
                password=True,
                console=console,
            )

    config = ProviderConfig(provider=provider.value, model=model, api_key=api_key.strip())
    try:
        path = save_provider_config(config, settings)
    except OSError as e:
        fail(f"Error saving config: {e}")
    console.print(f"[green]✅ Config saved to {path}[/green]")

    shell = detect_shell(os.environ.get("SHELL"))
    if shell is None:
        console.print(f"[yellow]Detected shell: {os.environ.get('SHELL') or 'unknown'}[/yellow]")
        console.print("[dim]Manual integration required: termbuddy-ctl init <shell>[/dim]")
    else:
        rc_file = rc_file_for(shell)
        if integration is None:
            integration = Confirm.ask(
                f"Add TermBuddy integration to your {shell} config ({rc_file})?",
                default=True,
                console=console,
            )
        if integration:
            if install_integration(shell, rc_file):
                console.print(f"[green]✅ Integration added to {rc_file}[/green]")
                console.print(f"[dim]Run: source {rc_file}[/dim]")
            else:
                console.print("[green]✓ Integration already present in your shell config[/green]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Type [cyan]::[/cyan] followed by your request, then press Enter.")


@ctl.command("config")
def config_show():
    """Show current configuration"""
    try:
        settings = Settings.from_env()
        try:
            config = load_provider_config(settings)
        except ConfigMissingError:
            config = None
    except TermBuddyError as e:
        fail(f"Error: {e}")

    show_config(config, settings)


@ctl.command()
def history(
    text_filter: Optional[List[str]] = typer.Argument(
        None,
        help="Only show entries whose command or request contains this text"
    ),
    mode: HistoryMode = typer.Option(
        HistoryMode.commands,
        "--mode", "-m",
        envvar="TERMBUDDY_HISTORY_MODE",
        help="Output format"
    ),
):
    """
    List commands generated in the current directory, newest first

    Examples:
    \b
        termbuddy-ctl history
        termbuddy-ctl history docker --mode interactive
    """
    try:
        settings = Settings.from_env()
    except TermBuddyError as e:
        fail(f"Error: {e}")

    store = HistoryStore(settings.history_file, settings.history_limit)
    entries = store.query(os.getcwd(), " ".join(text_filter or []))

    if mode == HistoryMode.json:
        typer.echo(json.dumps([e.summary() for e in entries], indent=2))
    elif mode == HistoryMode.interactive:
        for entry in entries:
            typer.echo(f"{entry.command}\t# {entry.request}")
    else:
        for entry in entries:
            typer.echo(entry.command)


@ctl.command()
def init(
    shell: ShellName = typer.Argument(
        ...,
        help="Shell to print the integration snippet for"
    ),
):
    """
    Print the shell integration snippet

    Examples:
    \b
        termbuddy-ctl init zsh >> ~/.zshrc
    """
    typer.echo(get_snippet(shell.value))


if __name__ == "__main__":
    app()
