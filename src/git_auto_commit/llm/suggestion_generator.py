"""
Commit message and branch name suggestions from an external generator.

This module provides the :class:`SuggestionGenerator` class, which asks
the configured generator backend (see :func:`create_client`) for three
commit messages and three branch names, and parses the free-form text it
returns into clean candidate lists. Any problem, including output that
does not yield three usable candidates, is raised as :class:`LLMError`;
no other exception leaves :meth:`SuggestionGenerator.generate`.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from textwrap import dedent
from typing import Callable, List, Optional, Sequence, Tuple

from git_auto_commit.config.loader import GeneratorConfig
from git_auto_commit.llm.cli_client import CliGeneratorClient
from git_auto_commit.llm.errors import LLMError
from git_auto_commit.llm.ollama_client import OllamaClient
from git_auto_commit.suggestions.model import (
    SOURCE_LLM,
    SUGGESTION_COUNT,
    Suggestions,
    unique_candidates,
)
from git_auto_commit.vcs.branch_name import is_valid_branch_name


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


#: Diffs are cut to this many characters before they are put in a prompt.
MAX_DIFF_CHARS = 3000

_LIST_MARKER = re.compile(r"^(?:\d+[.)、]|[-*•])\s*")
_QUOTES = "\"'`「」“”"


def create_client(config: GeneratorConfig):
    """Return the generator client selected by ``config.backend``."""
    if config.backend == "ollama":
        return OllamaClient(
            base_url=config.base_url,
            port=config.port,
            model=config.model,
            request_timeout=config.timeout,
        )
    return CliGeneratorClient(
        command=config.command,
        prompt_flag=config.prompt_flag,
        model_flag=config.model_flag,
        model=config.model,
        extra_args=tuple(config.extra_args),
        timeout=config.timeout,
    )


def parse_candidates(
    raw_response: str,
    accept: Optional[Callable[[str], bool]] = None,
) -> Tuple[str, ...]:
    """Parse generator output into exactly three candidates.

    Blank lines and code fences are dropped, list markers and surrounding
    quotes are stripped, and duplicates removed. If ``accept`` is given,
    candidates it rejects are discarded.

    Raises
    ------
    LLMError
        If fewer than three candidates remain.
    """
    cleaned: List[str] = []
    for line in (raw_response or "").splitlines():
        candidate = line.strip()
        if not candidate or candidate.startswith("```"):
            continue
        candidate = _LIST_MARKER.sub("", candidate).strip().strip(_QUOTES).strip()
        if not candidate:
            continue
        if accept is not None and not accept(candidate):
            logger.debug("Discarding unusable candidate: %r", candidate)
            continue
        cleaned.append(candidate)

    candidates = unique_candidates(cleaned)
    if len(candidates) < SUGGESTION_COUNT:
        raise LLMError(
            f"Expected {SUGGESTION_COUNT} suggestions from the generator, got {len(candidates)}"
        )
    return tuple(candidates[:SUGGESTION_COUNT])


class SuggestionGenerator:
    """Generate suggestions with an external text generator."""

    def __init__(self, client, today: Optional[date] = None) -> None:
        self.client = client
        self.today = today

    def _build_commit_prompt(self, diff: str, files: Sequence[str]) -> str:
        diff_preview = diff[:MAX_DIFF_CHARS]
        files_list = ", ".join(files)
        prompt = dedent(
            """
            你是一個 Git commit 訊息專家。請根據以下 git diff 內容和檔案列表，生成 3 個簡潔的繁體中文 commit 訊息建議。

            檔案列表：
            {files}

            Git diff：
            ```
            {diff}
            ```

            要求：
            1. 每個建議一行
            2. 使用繁體中文
            3. 格式：「類型：簡短描述」（例如：「修復：修正登入錯誤」、「新增：添加使用者管理功能」）
            4. 常用類型包括：新增、修復、更新、重構、文檔、測試、優化、配置、刪除、清理
            5. 描述要簡潔明瞭，不超過 50 字
            6. 只回傳 3 個建議，每行一個，不要有其他說明文字
            7. 不要使用 markdown 格式，不要編號
            """
        ).strip()
        # Formatted after dedent so multi-line diffs do not break the indentation.
        return prompt.format(files=files_list, diff=diff_preview)

    def _build_branch_prompt(self, files: Sequence[str]) -> str:
        stamp = (self.today or date.today()).strftime("%Y%m%d")
        files_list = ", ".join(files)
        return dedent(
            f"""
            你是一個 Git 分支命名專家。請根據以下檔案列表，生成 3 個符合規範的分支名稱建議。

            檔案列表：
            {files_list}

            要求：
            1. 每個建議一行
            2. 格式：「類型/描述-{stamp}」（例如：「feature/add-user-auth-{stamp}」、「fix/login-bug-{stamp}」）
            3. 常用類型：feature（新功能）、fix（修復）、refactor（重構）、docs（文檔）、test（測試）、chore（維護）、config（配置）
            4. 描述使用英文小寫，單字之間用連字號 - 連接
            5. 描述要簡潔，不超過 30 字元
            6. 只回傳 3 個建議，每行一個，不要有其他說明文字
            7. 不要使用 markdown 格式，不要編號
            """
        ).strip()

    def _ask(self, prompt: str) -> str:
        try:
            return self.client.generate(prompt)
        except LLMError:
            raise
        except Exception as exc:
            # Backends are third-party code; keep their failures inside the adapter.
            raise LLMError(f"Generator failed: {exc}") from exc

    def generate(self, diff: str, files: Sequence[str]) -> Suggestions:
        """Return three commit messages and three branch names.

        Raises
        ------
        LLMError
            If either request fails or its output cannot be parsed.
        """
        commit_raw = self._ask(self._build_commit_prompt(diff, files))
        commit_messages = parse_candidates(commit_raw)
        branch_raw = self._ask(self._build_branch_prompt(files))
        branch_names = parse_candidates(branch_raw, accept=is_valid_branch_name)
        logger.debug("Generator suggestions: %s / %s", commit_messages, branch_names)
        return Suggestions(
            commit_messages=commit_messages,
            branch_names=branch_names,
            source=SOURCE_LLM,
        )
