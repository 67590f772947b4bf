"""
Git client implementation for git_auto_commit.

This module wraps the Git operations required by the commit assistant:
reading the staged diff and file list, querying the current branch, and
the two repository mutations (create-and-switch branch, commit). All
subprocess calls go through :meth:`GitClient._run` so that unit tests can
mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_BRANCH = "main"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be started, or the command exits with a non-zero
            status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as exc:
            logger.error("Git executable not found: %s", exc)
            raise GitError("git is not installed or not on PATH") from exc

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip() or "git command failed")
        return result

    def is_inside_work_tree(self) -> bool:
        """Return True if ``repo_root`` is inside a Git repository."""
        try:
            result = self._run(["rev-parse", "--git-dir"], check=False)
        except GitError:
            return False
        return result.returncode == 0

    # ------------------------------------------------------------------
    # Staged changes
    # ------------------------------------------------------------------
    def get_staged_diff(self) -> str:
        """Return the unified diff of the staged changes (may be empty)."""
        return self._run(["diff", "--staged"], check=True).stdout

    def get_staged_files(self) -> List[str]:
        """Return the staged file paths in the order Git reports them."""
        result = self._run(["diff", "--staged", "--name-only"], check=True)
        return [line for line in result.stdout.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Branch operations
    # ------------------------------------------------------------------
    def get_current_branch(self) -> str:
        """Return the current branch name, or ``"main"`` if it is unknown.

        A detached HEAD or a failing command both yield the default.
        """
        try:
            result = self._run(["branch", "--show-current"], check=True)
        except GitError as exc:
            logger.warning("Could not determine current branch: %s", exc)
            return DEFAULT_BRANCH
        return result.stdout.strip() or DEFAULT_BRANCH

    def branch_exists(self, branch_name: str) -> bool:
        """Return True if a local branch called ``branch_name`` exists."""
        result = self._run(["branch", "--list", branch_name], check=False)
        return bool(result.stdout.strip())

    def create_branch(self, branch_name: str) -> None:
        """Create ``branch_name`` from HEAD and switch to it.

        Raises
        ------
        GitError
            If the branch exists already or the checkout fails.
        """
        self._run(["checkout", "-b", branch_name], check=True)

    # ------------------------------------------------------------------
    # Committing
    # ------------------------------------------------------------------
    def commit(self, message: str) -> None:
        """Commit the staged changes with ``message``.

        Raises
        ------
        GitError
            If the commit fails (e.g. a failing hook or nothing staged).
        """
        self._run(["commit", "-m", message], check=True)
