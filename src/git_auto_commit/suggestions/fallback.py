"""
Deterministic, template based suggestions.

This is the second tier of suggestion generation and is used whenever the
external generator is disabled or fails. It maps :class:`ChangeSignals`
to fixed Traditional Chinese commit message templates and to
``<category>/<slug>-<YYYYMMDD>`` branch names. It is a pure function of
its inputs (and the supplied date) and always returns exactly three
distinct suggestions of each kind.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

from git_auto_commit.analysis.signals import ChangeSignals
from git_auto_commit.suggestions.model import (
    SOURCE_FALLBACK,
    Suggestions,
    fill_suggestions,
)


GENERIC_COMMIT_MESSAGES = (
    "更新：更新專案檔案",
    "改進：改善程式碼品質",
    "維護：日常維護更新",
    "調整：調整檔案內容",
    "修改：修改專案檔案",
)

# Category specific follow-up for added files, in precedence order.
ADDITION_MESSAGES = (
    ("docs", "文檔：新增專案文檔"),
    ("config", "配置：新增設定檔"),
    ("code", "功能：新增功能模組"),
)

# Templates for a pure modification diff, in precedence order.
MODIFICATION_MESSAGES = (
    ("docs", ("文檔：更新專案說明文件", "文檔：修正文檔內容")),
    ("config", ("配置：調整專案設定", "配置：更新設定檔")),
    ("tests", ("測試：更新測試案例", "測試：修正測試程式")),
    ("code", ("修復：修正程式錯誤", "優化：改善程式效能", "重構：重構程式碼結構")),
    ("styles", ("樣式：調整介面樣式", "UI：更新使用者介面")),
)

FEATURE_KEYWORDS = ("feature", "新增", "add")
FIX_KEYWORDS = ("fix", "修復", "bug")


def date_stamp(today: Optional[date] = None) -> str:
    """Return ``today`` (default: the current local date) as ``YYYYMMDD``."""
    return (today or date.today()).strftime("%Y%m%d")


def generate_commit_suggestions(
    signals: ChangeSignals, files: Sequence[str]
) -> Tuple[str, ...]:
    """Return exactly three commit message suggestions for ``signals``."""
    suggestions: List[str] = []

    if signals.has_new_files:
        if len(files) == 1:
            suggestions.append(f"新增：添加 {files[0]}")
        else:
            suggestions.append("新增：添加新檔案")
        for category, message in ADDITION_MESSAGES:
            if signals.has(category):
                suggestions.append(message)
                break
    elif signals.has_deleted_files:
        if len(files) == 1:
            suggestions.append(f"刪除：移除 {files[0]}")
        else:
            suggestions.append("刪除：移除不需要的檔案")
        suggestions.append("清理：清理過時的程式碼")
        suggestions.append("重構：移除冗餘檔案")
    elif signals.has_modified_files:
        for category, messages in MODIFICATION_MESSAGES:
            if signals.has(category):
                suggestions.extend(messages)
                break

    return fill_suggestions(suggestions, GENERIC_COMMIT_MESSAGES)


def generate_branch_suggestions(
    signals: ChangeSignals, files: Sequence[str], today: Optional[date] = None
) -> Tuple[str, ...]:
    """Return exactly three branch name suggestions.

    Every generated name carries the same date stamp.
    """
    stamp = date_stamp(today)
    suggestions: List[str] = []

    if any(keyword in path for path in files for keyword in FEATURE_KEYWORDS):
        suggestions.append(f"feature/new-feature-{stamp}")
    if any(keyword in path for path in files for keyword in FIX_KEYWORDS):
        suggestions.append(f"fix/bug-fix-{stamp}")
    if signals.has("docs"):
        suggestions.append(f"docs/update-docs-{stamp}")
    if signals.has("config"):
        suggestions.append(f"config/update-config-{stamp}")
    if signals.has("tests"):
        suggestions.append(f"test/update-tests-{stamp}")

    generic = (
        f"feature/update-{stamp}",
        f"refactor/improve-code-{stamp}",
        f"chore/maintenance-{stamp}",
    )
    return fill_suggestions(suggestions, generic)


class FallbackSuggestionGenerator:
    """Rule based suggestion source used when the external generator fails."""

    def __init__(self, today: Optional[date] = None) -> None:
        self.today = today

    def generate(
        self,
        signals: ChangeSignals,
        files: Sequence[str],
        reason: Optional[str] = None,
    ) -> Suggestions:
        commit_messages = generate_commit_suggestions(signals, files)
        branch_names = generate_branch_suggestions(signals, files, self.today)
        return Suggestions(
            commit_messages=commit_messages,
            branch_names=branch_names,
            source=SOURCE_FALLBACK,
            fallback_reason=reason,
        )
