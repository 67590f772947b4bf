"""
Configuration loading for git_auto_commit.

Provides the immutable :class:`GeneratorConfig` and a loader for the user
configuration file. See :mod:`git_auto_commit.config.loader` for
implementation details.
"""

from .loader import ConfigError, GeneratorConfig, load_config, write_default_config  # noqa: F401
