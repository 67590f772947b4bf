"""
Data models for commit and branch suggestions.

A suggestion set is an ordered tuple of exactly :data:`SUGGESTION_COUNT`
distinct, non-empty strings; position 0 is the default choice. The
:class:`Suggestions` record carries one set of commit messages and one set
of branch names, together with the source that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple


SUGGESTION_COUNT = 3

SOURCE_LLM = "llm"
SOURCE_FALLBACK = "fallback"


def unique_candidates(candidates: Iterable[str]) -> List[str]:
    """Return the non-empty candidates in order, dropping duplicates."""
    seen: List[str] = []
    for candidate in candidates:
        if candidate and candidate not in seen:
            seen.append(candidate)
    return seen


def fill_suggestions(
    candidates: Iterable[str],
    generic: Iterable[str],
    count: int = SUGGESTION_COUNT,
) -> Tuple[str, ...]:
    """Pad ``candidates`` from ``generic`` and truncate to ``count`` items.

    Generic entries already present are skipped. Candidates are kept in
    their original order; duplicates among them are dropped first.
    """
    result = unique_candidates(candidates)
    for suggestion in generic:
        if len(result) >= count:
            break
        if suggestion not in result:
            result.append(suggestion)
    return tuple(result[:count])


@dataclass(frozen=True)
class Suggestions:
    """Commit message and branch name suggestions for one invocation.

    Attributes
    ----------
    commit_messages : Tuple[str, ...]
        Candidate commit messages, best first.
    branch_names : Tuple[str, ...]
        Candidate branch names, best first.
    source : str
        ``"llm"`` or ``"fallback"``.
    fallback_reason : str, optional
        Why the external generator was not used. Not part of equality.
    """

    commit_messages: Tuple[str, ...]
    branch_names: Tuple[str, ...]
    source: str = SOURCE_FALLBACK
    fallback_reason: Optional[str] = field(default=None, compare=False)
