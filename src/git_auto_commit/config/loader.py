"""
Configuration loader for git_auto_commit.

The tool reads an optional TOML file named ``config.toml`` located in
``~/.config/git-auto-commit/``. It describes how the external generator
is invoked (command, flags, model, extra arguments) and which backend is
used. Every key is optional; a missing file yields the defaults.

If the file exists but is unreadable, is not valid TOML, or a key has the
wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging has not been configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


BACKENDS = ("cli", "ollama")


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""

    pass


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable settings for the external suggestion generator.

    Attributes
    ----------
    enabled : bool
        When False the fallback generator is used directly.
    backend : str
        ``"cli"`` runs ``command``; ``"ollama"`` talks to an Ollama server.
    command, prompt_flag, model_flag, model : str
        Command line of the ``cli`` backend.
    extra_args : Tuple[str, ...]
        Arguments appended after the model.
    timeout : float, optional
        Seconds to wait for the generator; ``None`` waits indefinitely.
    base_url, port
        Location of the Ollama server for the ``ollama`` backend.
    """

    enabled: bool = True
    backend: str = "cli"
    command: str = "gemini"
    prompt_flag: str = "-p"
    model_flag: str = "--model"
    model: str = "gemini-2.5-flash"
    extra_args: Tuple[str, ...] = ("--yolo",)
    timeout: Optional[float] = None
    base_url: str = "http://localhost"
    port: int = 11434


DEFAULT_CONFIG_TEMPLATE = """\
# git-auto-commit configuration

# Set to false to always use the built-in suggestions.
enabled = true

# "cli" runs an external command, "ollama" talks to an Ollama server.
backend = "cli"

# Command line: <command> <prompt_flag> <prompt> <model_flag> <model> <extra_args...>
command = "gemini"
prompt_flag = "-p"
model_flag = "--model"
model = "gemini-2.5-flash"
extra_args = ["--yolo"]

# Seconds to wait for the generator (omit to wait indefinitely).
# timeout = 60

# Ollama backend
base_url = "http://localhost"
port = 11434
"""


def _get_config_directory() -> Path:
    """Return the directory holding the user configuration file."""
    return Path.home() / ".config" / "git-auto-commit"


def default_config_path() -> Path:
    return _get_config_directory() / "config.toml"


def _validate(data: Dict[str, Any]) -> Dict[str, Any]:
    """Check types of known keys and return the keyword arguments for
    :class:`GeneratorConfig`. Unknown keys are ignored."""
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.debug("Ignoring unknown configuration keys: %s", unknown)
    values = {key: value for key, value in data.items() if key in known}

    if "enabled" in values and not isinstance(values["enabled"], bool):
        raise ConfigError("'enabled' must be a boolean")
    for key in ("backend", "command", "prompt_flag", "model_flag", "model", "base_url"):
        if key in values and not isinstance(values[key], str):
            raise ConfigError(f"'{key}' must be a string")
    if "backend" in values and values["backend"] not in BACKENDS:
        raise ConfigError(f"'backend' must be one of: {', '.join(BACKENDS)}")
    if "command" in values and not values["command"].strip():
        raise ConfigError("'command' must not be empty")
    if "extra_args" in values:
        extra = values["extra_args"]
        if not isinstance(extra, list) or not all(isinstance(arg, str) for arg in extra):
            raise ConfigError("'extra_args' must be a list of strings")
        values["extra_args"] = tuple(extra)
    if "timeout" in values:
        timeout = values["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("'timeout' must be a positive number")
        values["timeout"] = float(timeout)
    if "port" in values and (isinstance(values["port"], bool) or not isinstance(values["port"], int)):
        raise ConfigError("'port' must be an integer")
    return values


def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    """Load the generator configuration.

    Parameters
    ----------
    path : Path, optional
        Explicit configuration file. Defaults to
        ``~/.config/git-auto-commit/config.toml``.

    Returns
    -------
    GeneratorConfig
        The validated configuration, or the defaults if the file does not
        exist.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid TOML, or has fields of the
        wrong type.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        logger.debug("No configuration file at %s; using defaults", config_path)
        return GeneratorConfig()

    try:
        content = config_path.read_text(encoding="utf-8")
        data = tomllib.loads(content)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc

    config = GeneratorConfig(**_validate(data))
    logger.debug("Loaded configuration from %s: %s", config_path, config)
    return config


def write_default_config(path: Optional[Path] = None, force: bool = False) -> Path:
    """Write the default configuration file and return its path.

    Raises
    ------
    ConfigError
        If the file already exists and ``force`` is False, or it cannot be
        written.
    """
    config_path = path or default_config_path()
    if config_path.exists() and not force:
        raise ConfigError(
            f"Configuration file already exists: {config_path} (use --force to overwrite)"
        )
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot write {config_path}: {exc}") from exc
    logger.debug("Wrote default configuration to %s", config_path)
    return config_path
