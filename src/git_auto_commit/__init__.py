"""
Top-level package for git_auto_commit.

This package exposes the main CLI entry point via the
``git_auto_commit.cli`` module and the programmatic entry point via
:func:`git_auto_commit.flow.run`.
"""

__all__ = ["__version__"]

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("git-auto-commit")
except PackageNotFoundError:
    # Running from a source checkout without an installed distribution
    __version__ = "0.1.0.dev0"
