"""
Data model for the change signals extracted from a staged diff.

The :class:`ChangeSignals` record is derived once per invocation from the
raw diff and the staged file list and is never mutated afterwards. It is
the only input the fallback suggestion generator needs besides the file
list itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


#: Category names in the order they are reported.
CATEGORIES = ("docs", "config", "scripts", "code", "styles", "tests")


def _empty_categories() -> Mapping[str, bool]:
    return MappingProxyType({name: False for name in CATEGORIES})


@dataclass(frozen=True)
class ChangeSignals:
    """Boolean signals describing a staged change set.

    Attributes
    ----------
    has_new_files : bool
        The diff contains at least one file creation marker.
    has_deleted_files : bool
        The diff contains at least one file deletion marker.
    has_modified_files : bool
        The diff changes files and contains neither creation nor deletion
        markers anywhere.
    categories : Mapping[str, bool]
        Read-only mapping of category name (see :data:`CATEGORIES`) to
        whether at least one staged path falls into that category.
    """

    has_new_files: bool = False
    has_deleted_files: bool = False
    has_modified_files: bool = False
    categories: Mapping[str, bool] = field(default_factory=_empty_categories)

    def has(self, category: str) -> bool:
        """Return True if at least one staged file matches ``category``."""
        return bool(self.categories.get(category, False))
