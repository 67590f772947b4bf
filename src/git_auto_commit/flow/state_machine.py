"""
Finite state machine for the interactive branch/commit selection.

The flow sequences::

    CHOOSE_BRANCH -> [CUSTOM_BRANCH_INPUT] -> [SWITCH_BRANCH]
        -> CHOOSE_COMMIT_MESSAGE -> [CUSTOM_COMMIT_INPUT] -> CONFIRM
        -> COMMIT | CANCELLED

Input states advance only through :meth:`SelectionFlow.send`. The two
side-effecting states (``SWITCH_BRANCH`` and ``COMMIT``) run as soon as
they are entered. A failed branch switch is reported and the flow goes on
with the repository on its previous branch; a failed commit is reported
and ends the flow. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from git_auto_commit.flow.model import (
    TERMINAL_STATES,
    ConfirmInput,
    FlowError,
    FlowState,
    MenuOption,
    OptionKind,
    ProcessOutcome,
    SelectionOutcome,
    SelectOption,
    TextInput,
)
from git_auto_commit.suggestions.model import Suggestions
from git_auto_commit.vcs.branch_name import is_valid_branch_name
from git_auto_commit.vcs.git_client import GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


FlowInput = Union[SelectOption, TextInput, ConfirmInput]


class FlowReporter:
    """Receives the notices emitted by the flow. Logs them by default."""

    def info(self, message: str) -> None:
        logger.info(message)

    def success(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)


class SelectionFlow:
    """Turn suggestions into a validated branch switch and commit.

    Parameters
    ----------
    suggestions : Suggestions
        Three commit messages and three branch names.
    current_branch : str
        Branch checked out when the flow starts.
    vcs
        Collaborator providing ``branch_exists(name)``,
        ``create_branch(name)`` and ``commit(message)``; they raise
        :class:`GitError` on failure.
    reporter : FlowReporter, optional
        Destination for user-facing notices.
    """

    def __init__(
        self,
        suggestions: Suggestions,
        current_branch: str,
        vcs,
        reporter: Optional[FlowReporter] = None,
    ) -> None:
        self.suggestions = suggestions
        self.current_branch = current_branch
        self.vcs = vcs
        self.reporter = reporter or FlowReporter()
        self.state = FlowState.CHOOSE_BRANCH
        self.branch: Optional[str] = None
        self.branch_switched = False
        self.message: Optional[str] = None
        self.confirmed = False
        self.committed = False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def options(self) -> List[MenuOption]:
        """Return the menu for the current choice state."""
        if self.state is FlowState.CHOOSE_BRANCH:
            menu = [MenuOption(OptionKind.STAY, f"Stay on current branch ({self.current_branch})")]
            menu.extend(
                MenuOption(OptionKind.SUGGESTION, name, name)
                for name in self.suggestions.branch_names
            )
            menu.append(MenuOption(OptionKind.CUSTOM, "Enter a custom branch name"))
            return menu
        if self.state is FlowState.CHOOSE_COMMIT_MESSAGE:
            menu = [
                MenuOption(OptionKind.SUGGESTION, message, message)
                for message in self.suggestions.commit_messages
            ]
            menu.append(MenuOption(OptionKind.CUSTOM, "Enter a custom commit message"))
            return menu
        raise FlowError(f"No menu in state {self.state.name}")

    @property
    def selection(self) -> SelectionOutcome:
        """The user's choices; only available once a message is chosen."""
        if self.message is None:
            raise FlowError("No commit message has been chosen yet")
        return SelectionOutcome(branch=self.branch, message=self.message, confirmed=self.confirmed)

    def outcome(self) -> ProcessOutcome:
        if not self.finished:
            raise FlowError(f"Flow has not finished (state {self.state.name})")
        final_branch = self.branch if self.branch_switched and self.branch else self.current_branch
        return ProcessOutcome(
            committed=self.committed,
            final_branch=final_branch,
            final_message=self.message if self.committed else None,
            cancelled=self.state is FlowState.CANCELLED,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def send(self, event: FlowInput) -> FlowState:
        """Apply one input and return the resulting state.

        Raises
        ------
        FlowError
            If the input does not fit the current state or the flow has
            finished.
        """
        if self.finished:
            raise FlowError(f"Flow already finished in state {self.state.name}")
        handler = {
            FlowState.CHOOSE_BRANCH: self._on_choose_branch,
            FlowState.CUSTOM_BRANCH_INPUT: self._on_custom_branch,
            FlowState.CHOOSE_COMMIT_MESSAGE: self._on_choose_message,
            FlowState.CUSTOM_COMMIT_INPUT: self._on_custom_message,
            FlowState.CONFIRM: self._on_confirm,
        }.get(self.state)
        if handler is None:
            raise FlowError(f"State {self.state.name} does not accept input")
        handler(event)
        return self.state

    def _pick(self, event: FlowInput) -> MenuOption:
        if not isinstance(event, SelectOption):
            raise FlowError(f"State {self.state.name} expects a menu selection")
        menu = self.options()
        if not 0 <= event.index < len(menu):
            raise FlowError(f"Selection {event.index} out of range (0-{len(menu) - 1})")
        return menu[event.index]

    @staticmethod
    def _text(event: FlowInput, state: FlowState) -> str:
        if not isinstance(event, TextInput):
            raise FlowError(f"State {state.name} expects text input")
        return (event.text or "").strip()

    def _on_choose_branch(self, event: FlowInput) -> None:
        option = self._pick(event)
        if option.kind is OptionKind.STAY:
            self.branch = None
            self.state = FlowState.CHOOSE_COMMIT_MESSAGE
        elif option.kind is OptionKind.CUSTOM:
            self.state = FlowState.CUSTOM_BRANCH_INPUT
        else:
            self._accept_branch(option.value or "")

    def _on_custom_branch(self, event: FlowInput) -> None:
        name = self._text(event, self.state)
        if not name:
            self.reporter.warning("Branch name cannot be empty")
            return
        self._accept_branch(name)

    def _accept_branch(self, name: str) -> None:
        if not is_valid_branch_name(name):
            self.reporter.error(f"Invalid branch name: {name}")
            return
        self.branch = name
        self.state = FlowState.SWITCH_BRANCH
        self._switch_branch()

    def _switch_branch(self) -> None:
        name = self.branch
        if name is None:
            raise FlowError("No branch has been chosen")
        self.branch_switched = False
        try:
            if self.vcs.branch_exists(name):
                self.reporter.error(
                    f"Branch '{name}' already exists; staying on {self.current_branch}"
                )
            else:
                self.vcs.create_branch(name)
                self.branch_switched = True
        except GitError as exc:
            logger.debug("Branch creation failed", exc_info=True)
            self.reporter.error(f"Failed to switch branch: {exc}")
        if self.branch_switched:
            self.reporter.success(f"Switched to new branch: {name}")
        self.state = FlowState.CHOOSE_COMMIT_MESSAGE

    def _on_choose_message(self, event: FlowInput) -> None:
        option = self._pick(event)
        if option.kind is OptionKind.CUSTOM:
            self.state = FlowState.CUSTOM_COMMIT_INPUT
            return
        self.message = option.value
        self.state = FlowState.CONFIRM

    def _on_custom_message(self, event: FlowInput) -> None:
        message = self._text(event, self.state)
        if not message:
            self.reporter.warning("Commit message cannot be empty")
            return
        self.message = message
        self.state = FlowState.CONFIRM

    def _on_confirm(self, event: FlowInput) -> None:
        if not isinstance(event, ConfirmInput):
            raise FlowError("State CONFIRM expects a yes/no answer")
        self.confirmed = bool(event.accepted)
        if not self.confirmed:
            self.state = FlowState.CANCELLED
            self.reporter.warning("Commit cancelled")
            return
        self.state = FlowState.COMMIT
        self._commit()

    def _commit(self) -> None:
        selection = self.selection
        if not selection.confirmed:
            raise FlowError("The commit message has not been confirmed")
        try:
            self.vcs.commit(selection.message)
        except GitError as exc:
            logger.debug("Commit failed", exc_info=True)
            self.reporter.error(f"Commit failed: {exc}")
            self.committed = False
        else:
            self.committed = True
            self.reporter.success("Commit created")
