"""
Heuristics for classifying a staged change set.

The classifier inspects the unified diff for file creation, deletion and
change markers, and the staged paths for well-known file types. It is
intentionally simple and deterministic so that it can be unit tested
without requiring a language model, and it never fails: an empty diff or
an empty file list yields all-false signals.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Iterable, Pattern

from git_auto_commit.analysis.signals import CATEGORIES, ChangeSignals


NEW_FILE_MARKER = "new file mode"
DELETED_FILE_MARKER = "deleted file mode"
CHANGED_FILE_MARKER = "diff --git"

# Matched case-insensitively against each staged path.
CATEGORY_PATTERNS: Dict[str, Pattern[str]] = {
    "docs": re.compile(r"\.(md|txt|doc)$", re.IGNORECASE),
    "config": re.compile(r"\.(json|yaml|yml|toml|ini|conf)$", re.IGNORECASE),
    "scripts": re.compile(r"\.(sh|bash|bat|cmd)$", re.IGNORECASE),
    "code": re.compile(r"\.(js|ts|py|java|cpp|c|go|rb|php)$", re.IGNORECASE),
    "styles": re.compile(r"\.(css|scss|sass|less)$", re.IGNORECASE),
    "tests": re.compile(r"test|spec", re.IGNORECASE),
}


def matches_category(file_path: str, category: str) -> bool:
    """Return True if ``file_path`` belongs to ``category``."""
    return bool(CATEGORY_PATTERNS[category].search(file_path))


def classify_diff(diff: str, files: Iterable[str]) -> ChangeSignals:
    """Derive :class:`ChangeSignals` from a staged diff and its file list.

    Parameters
    ----------
    diff : str
        Unified diff of the staged changes, possibly empty.
    files : Iterable[str]
        Staged file paths relative to the repository root, possibly empty.

    Returns
    -------
    ChangeSignals
        The extracted signals.

    Notes
    -----
    ``has_modified_files`` only holds for a pure modification diff. A
    change set mixing one new file with modified files reports only
    ``has_new_files``.
    """
    diff = diff or ""
    paths = [path for path in files if path]

    has_new = NEW_FILE_MARKER in diff
    has_deleted = DELETED_FILE_MARKER in diff
    has_modified = CHANGED_FILE_MARKER in diff and not has_new and not has_deleted

    categories = {
        name: any(matches_category(path, name) for path in paths)
        for name in CATEGORIES
    }
    return ChangeSignals(
        has_new_files=has_new,
        has_deleted_files=has_deleted,
        has_modified_files=has_modified,
        categories=MappingProxyType(categories),
    )
