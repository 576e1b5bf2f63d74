"""Configuration management for graphql-maple."""

from dataclasses import dataclass, field
from typing import Optional

import yaml

from . import utils

DEFAULT_SCHEMA_CACHE_DIR = "~/.graphql-maple/schemas"


@dataclass
class Config:
    """Configuration for graphql-maple."""

    default_url: Optional[str] = None
    token: Optional[str] = None
    auth_scheme: str = "Bearer"
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = 30
    schema_cache_dir: str = DEFAULT_SCHEMA_CACHE_DIR
    validate_operations: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = utils.expand_path(self.schema_cache_dir)


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.graphql-maple/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Merge with defaults
    return Config(
        default_url=data.get("default_url"),
        token=data.get("token"),
        auth_scheme=data.get("auth_scheme", "Bearer"),
        headers=data.get("headers") or {},
        timeout=data.get("timeout", 30),
        schema_cache_dir=data.get("schema_cache_dir", DEFAULT_SCHEMA_CACHE_DIR),
        validate_operations=bool(data.get("validate_operations", False)),
        log_level=str(data.get("log_level", "WARNING")).upper(),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://api.example.com/graphql",
        "token": None,
        "auth_scheme": "Bearer",
        "headers": {"User-Agent": "graphql-maple"},
        "timeout": 30,
        "schema_cache_dir": DEFAULT_SCHEMA_CACHE_DIR,
        "validate_operations": False,
        "log_level": "WARNING",
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
