"""
Two-tier suggestion generation.

The :class:`SuggestionOrchestrator` asks the external generator first and
falls back to the deterministic templates when it is disabled or fails.
One source wins for the whole invocation: commit messages and branch
names always come from the same tier.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from git_auto_commit.analysis.change_classifier import classify_diff
from git_auto_commit.config.loader import GeneratorConfig
from git_auto_commit.llm.errors import LLMError
from git_auto_commit.llm.suggestion_generator import SuggestionGenerator, create_client
from git_auto_commit.suggestions.fallback import FallbackSuggestionGenerator
from git_auto_commit.suggestions.model import Suggestions


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class SuggestionOrchestrator:
    """Produce suggestions from the external generator or the fallback.

    Parameters
    ----------
    config : GeneratorConfig
        Generator settings, loaded once at startup.
    generator : SuggestionGenerator, optional
        Overrides the generator built from ``config``.
    today : date, optional
        Date used for branch name stamps; defaults to the current date.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        generator: Optional[SuggestionGenerator] = None,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.today = today
        if generator is None and config.enabled:
            generator = SuggestionGenerator(create_client(config), today=today)
        self.generator = generator
        self.fallback = FallbackSuggestionGenerator(today=today)

    def generate(self, diff: str, files: Sequence[str]) -> Suggestions:
        """Return three commit messages and three branch names. Never raises."""
        reason: Optional[str] = None
        if self.generator is not None and self.config.enabled:
            try:
                return self.generator.generate(diff, files)
            except LLMError as exc:
                reason = str(exc)
                logger.warning(
                    "External generator failed: %s; using built-in suggestions.", exc
                )
        else:
            logger.debug("External generator disabled; using built-in suggestions.")

        signals = classify_diff(diff, files)
        return self.fallback.generate(signals, files, reason=reason)
