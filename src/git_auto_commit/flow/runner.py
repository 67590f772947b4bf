"""
Host-facing entry point of the commit assistant.

:func:`run` generates suggestions for a staged change set and drives the
:class:`SelectionFlow` with answers obtained from a :class:`Prompter`.
The CLI supplies a click based prompter; tests supply scripted ones.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence

from git_auto_commit.config.loader import GeneratorConfig
from git_auto_commit.flow.model import (
    ConfirmInput,
    FlowState,
    ProcessOutcome,
    SelectOption,
    TextInput,
)
from git_auto_commit.flow.state_machine import FlowReporter, SelectionFlow
from git_auto_commit.suggestions.model import SOURCE_LLM, Suggestions
from git_auto_commit.suggestions.orchestrator import SuggestionOrchestrator


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class Prompter:
    """Source of user answers for the selection flow."""

    def choose(self, message: str, labels: List[str]) -> int:
        """Return the 0-based index of the chosen label."""
        raise NotImplementedError

    def text(self, message: str) -> str:
        raise NotImplementedError

    def confirm(self, message: str) -> bool:
        raise NotImplementedError


PROMPTS = {
    FlowState.CHOOSE_BRANCH: "Choose a branch",
    FlowState.CUSTOM_BRANCH_INPUT: "Enter the branch name",
    FlowState.CHOOSE_COMMIT_MESSAGE: "Choose a commit message",
    FlowState.CUSTOM_COMMIT_INPUT: "Enter the commit message",
}


def drive(flow: SelectionFlow, prompter: Prompter) -> ProcessOutcome:
    """Feed answers from ``prompter`` into ``flow`` until it finishes."""
    while not flow.finished:
        state = flow.state
        if state in (FlowState.CHOOSE_BRANCH, FlowState.CHOOSE_COMMIT_MESSAGE):
            labels = [option.label for option in flow.options()]
            flow.send(SelectOption(prompter.choose(PROMPTS[state], labels)))
        elif state in (FlowState.CUSTOM_BRANCH_INPUT, FlowState.CUSTOM_COMMIT_INPUT):
            flow.send(TextInput(prompter.text(PROMPTS[state])))
        else:
            flow.send(ConfirmInput(prompter.confirm(f"Commit with this message?\n  {flow.message}")))
    return flow.outcome()


def run(
    diff: str,
    files: Sequence[str],
    current_branch: str,
    generator_config: GeneratorConfig,
    vcs,
    prompter: Prompter,
    reporter: Optional[FlowReporter] = None,
    today: Optional[date] = None,
    orchestrator: Optional[SuggestionOrchestrator] = None,
) -> ProcessOutcome:
    """Suggest, select, switch branch and commit.

    Parameters
    ----------
    diff : str
        Staged diff; callers must have checked it is not empty.
    files : Sequence[str]
        Staged file paths.
    current_branch : str
        Branch checked out before the run.
    generator_config : GeneratorConfig
        External generator settings.
    vcs
        Collaborator with ``branch_exists``, ``create_branch`` and ``commit``.
    prompter : Prompter
        Source of user answers.
    reporter : FlowReporter, optional
        Destination for notices.
    today : date, optional
        Date stamp for branch suggestions.
    orchestrator : SuggestionOrchestrator, optional
        Overrides the orchestrator built from ``generator_config``.

    Returns
    -------
    ProcessOutcome
        Whether a commit was made, the final branch and the committed
        message.
    """
    reporter = reporter or FlowReporter()
    orchestrator = orchestrator or SuggestionOrchestrator(generator_config, today=today)

    reporter.info("Generating suggestions...")
    suggestions: Suggestions = orchestrator.generate(diff, files)
    if suggestions.source == SOURCE_LLM:
        reporter.success("Suggestions generated by the external generator")
    elif suggestions.fallback_reason:
        reporter.warning(f"External generator failed: {suggestions.fallback_reason}")
        reporter.info("Using built-in suggestions")

    flow = SelectionFlow(suggestions, current_branch, vcs, reporter)
    outcome = drive(flow, prompter)
    logger.debug("Flow finished: %s", outcome)
    return outcome
