"""
Client that runs a command line text generator.

The default backend of the external generator: a CLI such as ``gemini``
invoked as ``<command> <prompt_flag> <prompt> <model_flag> <model>
[extra args...]``. The call is synchronous. Every failure mode (missing
executable, non-zero exit, timeout, empty output) is reported as
:class:`LLMError`.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from git_auto_commit.llm.errors import LLMError, strip_thinking_tags


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class CliGeneratorClient:
    """Run an external generator process and return its standard output."""

    command: str
    prompt_flag: str = "-p"
    model_flag: str = "--model"
    model: str = ""
    extra_args: Tuple[str, ...] = field(default_factory=tuple)
    timeout: Optional[float] = None

    def build_command(self, prompt: str) -> List[str]:
        cmd = [self.command]
        if self.prompt_flag:
            cmd.append(self.prompt_flag)
        cmd.append(prompt)
        if self.model:
            if self.model_flag:
                cmd.append(self.model_flag)
            cmd.append(self.model)
        cmd.extend(self.extra_args)
        return cmd

    def generate(self, prompt: str) -> str:
        """Run the generator with ``prompt`` and return its trimmed output.

        Raises
        ------
        LLMError
            If the command cannot be run, fails, times out or prints nothing.
        """
        cmd = self.build_command(prompt)
        logger.debug(
            "Executing generator command: %s (prompt of %d chars)",
            " ".join(part for part in cmd if part != prompt),
            len(prompt),
        )
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            logger.error("Generator command not found: %s", self.command)
            raise LLMError(
                f"Cannot run '{self.command}'; make sure the {self.command} CLI is installed"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            logger.error("Generator command timed out after %ss", self.timeout)
            raise LLMError(f"'{self.command}' timed out after {self.timeout}s") from exc
        except OSError as exc:
            logger.error("Failed to start generator command: %s", exc)
            raise LLMError(f"Failed to run '{self.command}': {exc}") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.error(
                "Generator command failed with status %s: %s", result.returncode, stderr
            )
            raise LLMError(f"'{self.command}' failed: {stderr or f'exit status {result.returncode}'}")

        output = strip_thinking_tags(result.stdout or "")
        if not output:
            raise LLMError(f"'{self.command}' returned no output")
        return output
