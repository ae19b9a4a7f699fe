"""
Configuration management for TermBuddy
"""

import os
import json
from enum import Enum
from pathlib import Path
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console
from rich.table import Table
from dotenv import load_dotenv

from termbuddy.errors import ConfigInvalidError, ConfigMissingError

console = Console()


class ProviderName(str, Enum):
    """Supported LLM providers"""
    openai = "openai"
    anthropic = "anthropic"
    google = "google"
    grok = "grok"
    ollama = "ollama"


DEFAULT_MODELS: Dict[ProviderName, str] = {
    ProviderName.openai: "gpt-5-nano",
    ProviderName.anthropic: "claude-haiku-4-5",
    ProviderName.google: "gemini-2.5-flash",
    ProviderName.grok: "grok-3-mini",
    ProviderName.ollama: "llama3.2",
}

# Used when the persisted apiKey is empty
API_KEY_ENV: Dict[str, str] = {
    ProviderName.openai.value: "OPENAI_API_KEY",
    ProviderName.anthropic.value: "ANTHROPIC_API_KEY",
    ProviderName.google.value: "GOOGLE_API_KEY",
    ProviderName.grok.value: "XAI_API_KEY",
}


class ProviderConfig(BaseModel):
    """Provider, model and API key, as persisted by setup"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Kept as a plain string so unknown providers are rejected at selection
    provider: str
    model: str
    api_key: str = Field(default="", alias="apiKey")

    def to_json(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)

    def masked_key(self) -> str:
        key = self.api_key
        if not key:
            return "[dim]Not set[/dim]"
        return f"{key[:8]}{'*' * (len(key) - 8)}" if len(key) > 8 else "***"


class Settings(BaseModel):
    """Paths and tunables for a single invocation"""

    model_config = ConfigDict(frozen=True)

    config_file: Path = Path.home() / ".termbuddy-config.json"
    history_file: Path = Path.home() / ".termbuddy-history.json"
    log_level: str = "warning"
    request_timeout: float = 120.0
    probe_timeout: float = 10.0
    history_limit: int = 500

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from defaults overridden by environment variables"""
        # Load .env file if it exists
        load_dotenv()

        env_mapping = {
            'TERMBUDDY_CONFIG': 'config_file',
            'TERMBUDDY_HISTORY': 'history_file',
            'TERMBUDDY_LOG_LEVEL': 'log_level',
            'TERMBUDDY_TIMEOUT': 'request_timeout',
            'TERMBUDDY_PROBE_TIMEOUT': 'probe_timeout',
        }

        values = {}
        for env_var, key in env_mapping.items():
            value = os.getenv(env_var)
            if value:
                values[key] = value

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigInvalidError(f"Invalid environment settings: {e}") from e


def load_provider_config(settings: Settings) -> ProviderConfig:
    """Load the persisted provider configuration"""
    config_file = settings.config_file
    if not config_file.exists():
        raise ConfigMissingError(
            f"Config not found at {config_file}. Run \"termbuddy-ctl setup\" first."
        )

    try:
        with open(config_file, 'r') as f:
            data = json.load(f)
        config = ProviderConfig.model_validate(data)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigInvalidError(f"Could not read config file {config_file}: {e}") from e
    except ValidationError as e:
        raise ConfigInvalidError(f"Invalid config file {config_file}: {e}") from e

    if not config.api_key:
        env_var = API_KEY_ENV.get(config.provider)
        api_key = os.getenv(env_var) if env_var else None
        if api_key:
            config = config.model_copy(update={"api_key": api_key})

    return config


def save_provider_config(config: ProviderConfig, settings: Settings) -> Path:
    """Persist the provider configuration, readable only by the owner"""
    config_file = settings.config_file
    config_file.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(config_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, 'w') as f:
        json.dump(config.to_json(), f, indent=2)
    os.chmod(config_file, 0o600)

    return config_file


def show_config(config: Optional[ProviderConfig], settings: Settings) -> None:
    """Display current configuration"""
    table = Table(title="TermBuddy Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    if config is None:
        table.add_row("Provider", "[dim]Not configured[/dim]", "default")
    else:
        table.add_row("Provider", config.provider, "config")
        table.add_row("Model", config.model, "config")
        table.add_row("API Key", config.masked_key(), "config")

    table.add_row("Log Level", settings.log_level, "settings")
    table.add_row("Request Timeout", f"{settings.request_timeout:g}s", "settings")

    # Paths
    table.add_row("Config File", str(settings.config_file), "system")
    table.add_row("History File", str(settings.history_file), "system")

    console.print(table)
