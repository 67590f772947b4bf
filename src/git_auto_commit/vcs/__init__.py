"""
Version control system (VCS) integration.

This package contains the Git client used to read staged changes and to
perform the branch and commit mutations, plus the branch name validator
applied before any branch is created.
"""

from .branch_name import is_valid_branch_name  # noqa: F401
from .git_client import GitClient, GitError  # noqa: F401
