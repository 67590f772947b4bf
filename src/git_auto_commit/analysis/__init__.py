"""
Change analysis for git_auto_commit.

This package turns a staged diff and its file list into boolean change
signals. See :mod:`git_auto_commit.analysis.change_classifier` and
:mod:`git_auto_commit.analysis.signals` for details.
"""

from .change_classifier import classify_diff  # noqa: F401
from .signals import ChangeSignals  # noqa: F401
