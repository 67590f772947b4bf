"""Tests for the external generator adapter."""

import unittest
from datetime import date
from unittest.mock import Mock

from git_auto_commit.config.loader import GeneratorConfig
from git_auto_commit.llm.cli_client import CliGeneratorClient
from git_auto_commit.llm.errors import LLMError
from git_auto_commit.llm.ollama_client import OllamaClient
from git_auto_commit.llm.suggestion_generator import (
    MAX_DIFF_CHARS,
    SuggestionGenerator,
    create_client,
    parse_candidates,
)
from git_auto_commit.vcs.branch_name import is_valid_branch_name


TODAY = date(2024, 3, 5)


class TestParseCandidates(unittest.TestCase):
    def test_plain_lines(self) -> None:
        self.assertEqual(parse_candidates("a\nb\nc\n"), ("a", "b", "c"))

    def test_strips_markers_quotes_and_fences(self) -> None:
        raw = "```\n1. 「修復：修正錯誤」\n2) `新增：添加功能`\n- \"更新：更新文件\"\n* 重構：整理\n```"
        self.assertEqual(parse_candidates(raw), ("修復：修正錯誤", "新增：添加功能", "更新：更新文件"))

    def test_deduplicates_before_counting(self) -> None:
        with self.assertRaises(LLMError):
            parse_candidates("a\na\n  a  \nb\n")
        self.assertEqual(parse_candidates("a\na\nb\nc\nd"), ("a", "b", "c"))

    def test_empty_output_fails(self) -> None:
        for raw in ("", "   \n\n", None):
            with self.subTest(raw=raw):
                with self.assertRaises(LLMError):
                    parse_candidates(raw)

    def test_accept_filter(self) -> None:
        raw = "feature/a\nbad name\n/rooted\nfix/b\ndocs/c"
        self.assertEqual(
            parse_candidates(raw, accept=is_valid_branch_name),
            ("feature/a", "fix/b", "docs/c"),
        )


class TestSuggestionGenerator(unittest.TestCase):
    def test_generate_success(self) -> None:
        client = Mock()
        client.generate.side_effect = [
            "修復：修正登入錯誤\n新增：添加使用者管理\n文檔：更新說明",
            "fix/login-bug-20240305\nfeature/user-admin-20240305\ndocs/readme-20240305",
        ]
        generator = SuggestionGenerator(client, today=TODAY)
        result = generator.generate("diff --git a/x b/x\n", ["x.py"])
        self.assertEqual(result.source, "llm")
        self.assertEqual(result.commit_messages[0], "修復：修正登入錯誤")
        self.assertEqual(result.branch_names[2], "docs/readme-20240305")
        self.assertEqual(client.generate.call_count, 2)

    def test_prompts_carry_context(self) -> None:
        client = Mock()
        client.generate.side_effect = ["a\nb\nc", "x/1\nx/2\nx/3"]
        generator = SuggestionGenerator(client, today=TODAY)
        long_diff = "+" + "y" * (MAX_DIFF_CHARS * 2)
        generator.generate(long_diff, ["one.py", "two.md"])

        commit_prompt = client.generate.call_args_list[0][0][0]
        branch_prompt = client.generate.call_args_list[1][0][0]
        self.assertIn("one.py, two.md", commit_prompt)
        self.assertIn("y" * 100, commit_prompt)
        self.assertNotIn("y" * (MAX_DIFF_CHARS + 1), commit_prompt)
        self.assertIn("one.py, two.md", branch_prompt)
        self.assertIn("20240305", branch_prompt)

    def test_diff_with_braces_is_safe(self) -> None:
        client = Mock()
        client.generate.side_effect = ["a\nb\nc", "x/1\nx/2\nx/3"]
        SuggestionGenerator(client, today=TODAY).generate("+def f(): return {'k': 1}\n", ["f.py"])
        self.assertIn("{'k': 1}", client.generate.call_args_list[0][0][0])

    def test_too_few_branch_names_fails(self) -> None:
        client = Mock()
        client.generate.side_effect = ["a\nb\nc", "feature/ok\nnot valid\nanother bad one"]
        with self.assertRaises(LLMError):
            SuggestionGenerator(client, today=TODAY).generate("d", ["f"])

    def test_client_error_propagates_as_llm_error(self) -> None:
        client = Mock()
        client.generate.side_effect = LLMError("exit 1")
        with self.assertRaises(LLMError):
            SuggestionGenerator(client).generate("d", ["f"])

    def test_unexpected_client_exception_is_wrapped(self) -> None:
        client = Mock()
        client.generate.side_effect = RuntimeError("boom")
        with self.assertRaises(LLMError) as ctx:
            SuggestionGenerator(client).generate("d", ["f"])
        self.assertIn("boom", str(ctx.exception))


class TestCreateClient(unittest.TestCase):
    def test_cli_backend(self) -> None:
        config = GeneratorConfig(command="llm", extra_args=("--a", "--b"), timeout=9.0)
        client = create_client(config)
        self.assertIsInstance(client, CliGeneratorClient)
        self.assertEqual(client.extra_args, ("--a", "--b"))
        self.assertEqual(client.timeout, 9.0)

    def test_ollama_backend(self) -> None:
        config = GeneratorConfig(backend="ollama", base_url="http://host", port=1234, model="llama3")
        client = create_client(config)
        self.assertIsInstance(client, OllamaClient)
        self.assertEqual(client._endpoint(), "http://host:1234/api/generate")


if __name__ == "__main__":
    unittest.main()
