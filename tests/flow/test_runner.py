"""Tests for the host-facing run() entry point."""

import unittest
from datetime import date
from unittest.mock import Mock, patch

from git_auto_commit.config.loader import GeneratorConfig
from git_auto_commit.flow.runner import Prompter, run
from git_auto_commit.flow.state_machine import FlowReporter
from git_auto_commit.llm.errors import LLMError
from git_auto_commit.suggestions.model import Suggestions
from git_auto_commit.suggestions.orchestrator import SuggestionOrchestrator
from git_auto_commit.vcs.git_client import GitError


TODAY = date(2024, 3, 5)
DIFF = "diff --git a/test.txt b/test.txt\nnew file mode 100644\n--- /dev/null\n+++ b/test.txt\n+hi\n"
FILES = ["test.txt"]


class ScriptedPrompter(Prompter):
    """Answer prompts from fixed scripts and record what was asked."""

    def __init__(self, choices=(), texts=(), confirms=()):
        self.choices = list(choices)
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.menus = []
        self.text_prompts = []
        self.confirm_prompts = []

    def choose(self, message, labels):
        self.menus.append((message, labels))
        return self.choices.pop(0)

    def text(self, message):
        self.text_prompts.append(message)
        return self.texts.pop(0)

    def confirm(self, message):
        self.confirm_prompts.append(message)
        return self.confirms.pop(0)


class DummyVCS:
    def __init__(self):
        self.created = []
        self.commits = []

    def branch_exists(self, name):
        return False

    def create_branch(self, name):
        self.created.append(name)

    def commit(self, message):
        self.commits.append(message)


def offline_config():
    return GeneratorConfig(enabled=False)


class TestRun(unittest.TestCase):
    def test_full_scenario_with_custom_message(self) -> None:
        vcs = DummyVCS()
        prompter = ScriptedPrompter(choices=[2, 3], texts=["", "fix: x"], confirms=[True])
        outcome = run(DIFF, FILES, "main", offline_config(), vcs, prompter, today=TODAY)

        self.assertTrue(outcome.committed)
        self.assertEqual(outcome.final_message, "fix: x")
        self.assertEqual(vcs.commits, ["fix: x"])
        # The empty answer was asked again
        self.assertEqual(len(prompter.text_prompts), 2)
        self.assertEqual(outcome.final_branch, vcs.created[0])
        self.assertEqual(prompter.menus[0][1][2], vcs.created[0])

    def test_first_fallback_suggestion_names_the_file(self) -> None:
        prompter = ScriptedPrompter(choices=[0, 0], confirms=[False])
        run(DIFF, FILES, "main", offline_config(), DummyVCS(), prompter, today=TODAY)
        commit_labels = prompter.menus[1][1]
        self.assertIn("新增", commit_labels[0])
        self.assertIn("test.txt", commit_labels[0])
        self.assertEqual(len(commit_labels), 4)
        branch_labels = prompter.menus[0][1]
        self.assertEqual(len(branch_labels), 5)
        self.assertTrue(all(label.endswith("-20240305") for label in branch_labels[1:4]))

    def test_confirm_no(self) -> None:
        vcs = DummyVCS()
        prompter = ScriptedPrompter(choices=[0, 1], confirms=[False])
        outcome = run(DIFF, FILES, "develop", offline_config(), vcs, prompter, today=TODAY)
        self.assertFalse(outcome.committed)
        self.assertTrue(outcome.cancelled)
        self.assertEqual(outcome.final_branch, "develop")
        self.assertEqual(vcs.commits, [])
        self.assertIn(prompter.menus[1][1][1], prompter.confirm_prompts[0])

    def test_commit_failure_outcome(self) -> None:
        vcs = Mock()
        vcs.commit.side_effect = GitError("pre-commit hook failed")
        prompter = ScriptedPrompter(choices=[0, 0], confirms=[True])
        outcome = run(DIFF, FILES, "main", offline_config(), vcs, prompter, today=TODAY)
        self.assertFalse(outcome.committed)
        self.assertFalse(outcome.cancelled)
        vcs.create_branch.assert_not_called()

    def test_degradation_is_reported(self) -> None:
        reporter = Mock(spec=FlowReporter)
        generator = Mock()
        generator.generate.side_effect = LLMError("gemini failed")
        orchestrator = SuggestionOrchestrator(GeneratorConfig(), generator=generator, today=TODAY)
        prompter = ScriptedPrompter(choices=[0, 0], confirms=[True])
        outcome = run(DIFF, FILES, "main", GeneratorConfig(), DummyVCS(), prompter,
                      reporter=reporter, orchestrator=orchestrator)
        self.assertTrue(outcome.committed)
        warnings = [call.args[0] for call in reporter.warning.call_args_list]
        self.assertTrue(any("gemini failed" in w for w in warnings))

    def test_external_suggestions_are_offered(self) -> None:
        generator = Mock()
        generator.generate.return_value = Suggestions(
            ("修復：一", "修復：二", "修復：三"), ("fix/a", "fix/b", "fix/c"), source="llm"
        )
        orchestrator = SuggestionOrchestrator(GeneratorConfig(), generator=generator)
        vcs = DummyVCS()
        prompter = ScriptedPrompter(choices=[3, 2], confirms=[True])
        outcome = run(DIFF, FILES, "main", GeneratorConfig(), vcs, prompter, orchestrator=orchestrator)
        self.assertEqual(vcs.created, ["fix/c"])
        self.assertEqual(outcome.final_message, "修復：三")

    def test_builds_orchestrator_from_config(self) -> None:
        prompter = ScriptedPrompter(choices=[0, 0], confirms=[False])
        with patch(
            "git_auto_commit.llm.cli_client.subprocess.run",
            side_effect=FileNotFoundError("gemini"),
        ) as mock_run:
            run(DIFF, FILES, "main", GeneratorConfig(), DummyVCS(), prompter, today=TODAY)
        mock_run.assert_called_once()
        self.assertIn("test.txt", prompter.menus[1][1][0])


if __name__ == "__main__":
    unittest.main()
