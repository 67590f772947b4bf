"""
Interactive selection flow for git_auto_commit.

:class:`SelectionFlow` is the state machine; :func:`run` is the entry
point used by the CLI and by programmatic hosts.
"""

from .model import FlowError, FlowState, ProcessOutcome, SelectionOutcome  # noqa: F401
from .runner import Prompter, run  # noqa: F401
from .state_machine import FlowReporter, SelectionFlow  # noqa: F401
