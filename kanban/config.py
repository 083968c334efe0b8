"""Configuration loader for Kanban."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.constants import DEFAULT_API_URL, DEFAULT_TASKS_PATH, DEFAULT_TIMEOUT
from .core.exceptions import ConfigError

CONFIG_DIR = Path.home() / ".kanban"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yml"


class GatewayConfig(BaseModel):
    base_url: str = DEFAULT_API_URL
    tasks_path: str = DEFAULT_TASKS_PATH
    timeout: float = DEFAULT_TIMEOUT


class LoggingConfig(BaseModel):
    level: str = "info"
    # Empty string logs to stderr
    file: str = str(CONFIG_DIR / "kanban.log")


class DisplayConfig(BaseModel):
    user_name: str = ""


class Config(BaseModel):
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


_config: Optional[Config] = None


def load_config(config_path: Optional[str] = None, reload: bool = False) -> Config:
    """Load configuration from YAML file and environment variables."""
    global _config

    if _config is not None and not reload:
        return _config

    # Determine config path
    if config_path is None:
        config_path = os.environ.get("KANBAN_CONFIG", str(DEFAULT_CONFIG_PATH))

    config_data = {}

    # Load from file if exists
    if Path(config_path).exists():
        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    try:
        config = Config(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    # Override with environment variables
    if os.environ.get("KANBAN_API_URL"):
        config.gateway.base_url = os.environ["KANBAN_API_URL"]

    if os.environ.get("KANBAN_TIMEOUT"):
        try:
            config.gateway.timeout = float(os.environ["KANBAN_TIMEOUT"])
        except ValueError as e:
            raise ConfigError("KANBAN_TIMEOUT must be a number of seconds") from e

    if os.environ.get("KANBAN_LOG_LEVEL"):
        config.logging.level = os.environ["KANBAN_LOG_LEVEL"]

    if "KANBAN_LOG_FILE" in os.environ:
        config.logging.file = os.environ["KANBAN_LOG_FILE"]

    if os.environ.get("KANBAN_USER"):
        config.display.user_name = os.environ["KANBAN_USER"]

    if config.gateway.timeout <= 0:
        raise ConfigError("gateway.timeout must be greater than zero")

    _config = config
    return config


def get_config() -> Config:
    """Get the loaded configuration."""
    global _config
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration (next get_config() reloads)."""
    global _config
    _config = None
