"""Configuration data structures and loading.

Provides immutable configuration loaded once from ~/.restack/config.toml (or
the file named by RESTACK_CONFIG) at the CLI entry point. A missing file means
defaults.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from restack.core.errors import ConfigError

CONFIG_ENV_VAR = "RESTACK_CONFIG"


@dataclass(frozen=True)
class RestackConfig:
    """Immutable restack configuration.

    target_branch: Integration branch to rebase onto when --target is not given.
    fetch: Whether to `git fetch --prune` before pulling the target.
    """

    target_branch: str | None = None
    fetch: bool = True


def default_config_path() -> Path:
    """Return the config path, honouring RESTACK_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".restack" / "config.toml"


def load_config(path: Path | None = None) -> RestackConfig:
    """Load configuration from a TOML file.

    Args:
        path: Config file path (defaults to default_config_path())

    Returns:
        RestackConfig with loaded values, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or a key has the wrong type
    """
    config_path = path if path is not None else default_config_path()

    if not config_path.exists():
        return RestackConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    target_branch = data.get("target_branch")
    if target_branch is not None and (not isinstance(target_branch, str) or not target_branch):
        raise ConfigError(f"'target_branch' in {config_path} must be a non-empty string")

    fetch = data.get("fetch", True)
    if not isinstance(fetch, bool):
        raise ConfigError(f"'fetch' in {config_path} must be true or false")

    return RestackConfig(target_branch=target_branch, fetch=fetch)
