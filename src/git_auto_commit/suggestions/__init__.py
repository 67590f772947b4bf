"""
Suggestion generation for git_auto_commit.

See :mod:`git_auto_commit.suggestions.fallback` for the template based
generator and :mod:`git_auto_commit.suggestions.orchestrator` for the
two-tier strategy that puts the external generator in front of it.
"""

from .fallback import FallbackSuggestionGenerator  # noqa: F401
from .model import Suggestions  # noqa: F401
