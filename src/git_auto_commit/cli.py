"""
Command line interface for the git_auto_commit tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``git-auto-commit`` command. It checks that the
current directory is inside a Git repository with staged changes, loads
the generator configuration, and hands over to
:func:`git_auto_commit.flow.run`, which proposes commit messages and
branch names and performs the branch switch and commit the user picks.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

import click

from git_auto_commit import __version__
from git_auto_commit.config.loader import (
    ConfigError,
    GeneratorConfig,
    default_config_path,
    load_config,
    write_default_config,
)
from git_auto_commit.flow.runner import Prompter, run
from git_auto_commit.flow.state_machine import FlowReporter
from git_auto_commit.vcs.git_client import GitClient, GitError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_NO_CHANGES = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_CANCELLED = 8


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str, show_spinner: bool = True):
        self.message = message
        self.show_spinner = show_spinner
        self.spinner_chars = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        if self.show_spinner:
            click.echo(f"{self.spinner_chars[0]} {self.message}...", nl=False)
        else:
            click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - self.start_time
        if exc_type is not None:
            click.echo(f"\r✗ {self.message} (failed after {elapsed:.1f}s)")
        elif self.show_spinner:
            click.echo(f"\r✓ {self.message} (took {elapsed:.1f}s)")
        else:
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}" + click.style(f"✓ {message}", fg="green"))


def print_warning(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}" + click.style(f"⚠ {message}", fg="yellow"))


def print_error(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}" + click.style(f"✗ {message}", fg="red"), err=True)


# ---------------------------------------------------------------------------
# Terminal adapters for the selection flow
# ---------------------------------------------------------------------------

class ClickReporter(FlowReporter):
    """Print flow notices with the CLI display helpers."""

    def info(self, message: str) -> None:
        print_info(message)

    def success(self, message: str) -> None:
        print_success(message)

    def warning(self, message: str) -> None:
        print_warning(message)

    def error(self, message: str) -> None:
        print_error(message)


class ClickPrompter(Prompter):
    """Ask the user through numbered menus and ``click`` prompts."""

    def choose(self, message: str, labels: List[str]) -> int:
        click.echo("")
        for idx, label in enumerate(labels, start=1):
            click.echo(f"   {idx}. {label}")
        choice = click.prompt(
            f"   {message}",
            type=click.IntRange(1, len(labels)),
            default=1,
            show_default=True,
        )
        return choice - 1

    def text(self, message: str) -> str:
        # An empty default hands empty input back to the flow, which re-prompts.
        return click.prompt(f"   {message}", default="", show_default=False)

    def confirm(self, message: str) -> bool:
        click.echo("")
        return click.confirm(f"   {message}", default=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def detect_repository(start_dir: Path) -> GitClient:
    """Return a client for the Git repository containing ``start_dir``.

    Raises
    ------
    click.exceptions.Exit
        With code EXIT_NO_REPO if ``start_dir`` is not inside a repository.
    """
    repo_root = GitClient.find_repo_root(start_dir)
    client = GitClient(repo_root or start_dir)
    if repo_root is None and not client.is_inside_work_tree():
        print_error("The current directory is not a Git repository.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    print_success(f"Found Git repository at: {repo_root or start_dir}")
    return client


def load_generator_config(config_path: Optional[Path], no_llm: bool) -> GeneratorConfig:
    """Load the configuration, falling back to defaults on errors."""
    if config_path is not None and not config_path.exists():
        print_warning(f"Configuration file not found: {config_path}; using defaults")
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        print_warning(f"Configuration error: {exc}")
        print_info("Using default settings", indent=1)
        config = GeneratorConfig()

    if no_llm:
        config = dataclasses.replace(config, enabled=False)

    if not config.enabled:
        print_info("External generator disabled; using built-in suggestions", indent=1)
    elif config.backend == "ollama":
        print_info(f"Generator: Ollama at {config.base_url}:{config.port}", indent=1)
        print_info(f"Model: {config.model}", indent=1)
    else:
        print_info(f"Generator: {config.command}", indent=1)
        print_info(f"Model: {config.model}", indent=1)
    return config


def read_staged_changes(client: GitClient) -> Tuple[str, List[str]]:
    """Return the staged diff and file list.

    Raises
    ------
    click.exceptions.Exit
        With EXIT_NO_CHANGES if nothing is staged.
    GitError
        If Git cannot produce the diff.
    """
    with ProgressIndicator("Reading staged changes"):
        diff = client.get_staged_diff()
        files = client.get_staged_files() if diff.strip() else []

    if not diff.strip():
        print_warning("No staged changes. Use 'git add' to stage files first.")
        raise click.exceptions.Exit(EXIT_NO_CHANGES)

    print_success(f"Found {len(files)} staged file{'s' if len(files) != 1 else ''}")
    for path in files[:10]:
        print_info(path, indent=1)
    if len(files) > 10:
        print_info(f"... and {len(files) - 10} more", indent=1)
    return diff, files


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the configuration file (default: ~/.config/git-auto-commit/config.toml).",
)
@click.option("--no-llm", is_flag=True, help="Skip the external generator and use built-in suggestions.")
@click.option("--init-config", is_flag=True, help="Write a default configuration file and exit.")
@click.option("--force", is_flag=True, help="Overwrite an existing file with --init-config.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="git-auto-commit")
def main(
    config_path: Optional[Path],
    no_llm: bool,
    init_config: bool,
    force: bool,
    verbose: bool,
) -> None:
    """🚀 Suggest a commit message and branch name for your staged changes.

    Pick a branch (or stay on the current one), pick or write a commit
    message, confirm, and the commit is made for you.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    if init_config:
        try:
            written = write_default_config(config_path or default_config_path(), force=force)
        except ConfigError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        print_success(f"Wrote default configuration to {written}")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    click.echo("\n" + "=" * 60)
    click.echo("🚀 Git Auto Commit".center(60))
    click.echo("=" * 60)

    total_steps = 4

    try:
        print_step(1, total_steps, "Detecting Repository")
        client = detect_repository(Path.cwd())
        current_branch = client.get_current_branch()
        print_info(f"Current branch: {click.style(current_branch, fg='cyan', bold=True)}")

        print_step(2, total_steps, "Loading Configuration")
        config = load_generator_config(config_path, no_llm)

        print_step(3, total_steps, "Reading Staged Changes")
        try:
            diff, files = read_staged_changes(client)
        except GitError as exc:
            print_error(f"Cannot read staged changes: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_step(4, total_steps, "Branch and Commit")
        outcome = run(
            diff,
            files,
            current_branch,
            config,
            vcs=client,
            prompter=ClickPrompter(),
            reporter=ClickReporter(),
        )

        click.echo(f"\n{'='*60}")
        click.echo("✨ Summary")
        click.echo(f"{'='*60}\n")
        click.echo(f"  Branch: {outcome.final_branch}")

        if outcome.cancelled:
            click.echo("  Nothing was committed.\n")
            raise click.exceptions.Exit(EXIT_CANCELLED)
        if not outcome.committed:
            click.echo("  The commit failed; your changes are still staged.\n")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        click.echo(f"  Message: {outcome.final_message}")
        click.echo("\n🎉 All done! Your changes have been committed.\n")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except (click.exceptions.Exit, click.exceptions.Abort):
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
