"""
Branch name validation.

Mirrors the subset of ``git check-ref-format`` rules that matter for
user-supplied branch names, so that an obviously malformed name is
rejected before ``git checkout -b`` is attempted.
"""

from __future__ import annotations

import re


_INVALID_CHARS = re.compile(r"[\s~^:?*\[\]\\]")
_INVALID_START = re.compile(r"^[/.]")


def is_valid_branch_name(name: str) -> bool:
    """Return True if ``name`` may be used as a new branch name.

    Rejects the empty string, any whitespace, any of ``~ ^ : ? * [ ] \\``
    and names starting with ``/`` or ``.``.

    >>> is_valid_branch_name("feature/x")
    True
    >>> is_valid_branch_name("bad branch")
    False
    """
    if not name:
        return False
    if _INVALID_CHARS.search(name):
        return False
    return not _INVALID_START.match(name)
