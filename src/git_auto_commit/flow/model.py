"""
Data models for the interactive selection flow.

States, typed inputs, menu entries and the outcomes produced by
:class:`git_auto_commit.flow.state_machine.SelectionFlow`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FlowError(Exception):
    """Raised when an input does not fit the current state of the flow."""

    pass


class FlowState(Enum):
    CHOOSE_BRANCH = "choose_branch"
    CUSTOM_BRANCH_INPUT = "custom_branch_input"
    SWITCH_BRANCH = "switch_branch"
    CHOOSE_COMMIT_MESSAGE = "choose_commit_message"
    CUSTOM_COMMIT_INPUT = "custom_commit_input"
    CONFIRM = "confirm"
    COMMIT = "commit"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({FlowState.COMMIT, FlowState.CANCELLED})


class OptionKind(Enum):
    STAY = "stay"
    SUGGESTION = "suggestion"
    CUSTOM = "custom"


@dataclass(frozen=True)
class MenuOption:
    """One entry of a choice menu; ``value`` is set for suggestions."""

    kind: OptionKind
    label: str
    value: Optional[str] = None


# ---------------------------------------------------------------------------
# Transition inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectOption:
    """Pick entry ``index`` (0-based) of the current menu."""

    index: int


@dataclass(frozen=True)
class TextInput:
    text: str


@dataclass(frozen=True)
class ConfirmInput:
    accepted: bool


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectionOutcome:
    """What the user chose.

    Attributes
    ----------
    branch : str, optional
        Chosen or entered branch name; ``None`` means stay on the current
        branch.
    message : str
        Chosen or entered commit message.
    confirmed : bool
        Answer to the final confirmation.
    """

    branch: Optional[str]
    message: str
    confirmed: bool


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of one run of the tool.

    ``final_message`` is the committed message, or ``None`` when nothing
    was committed. ``cancelled`` is True when the user declined the final
    confirmation.
    """

    committed: bool
    final_branch: str
    final_message: Optional[str]
    cancelled: bool = False
