import tempfile
import tomllib
import unittest
from pathlib import Path
from unittest.mock import patch

from git_auto_commit.config.loader import (
    DEFAULT_CONFIG_TEMPLATE,
    ConfigError,
    GeneratorConfig,
    default_config_path,
    load_config,
    write_default_config,
)


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def test_missing_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config = load_config(Path(tmp) / "config.toml")
        self.assertEqual(config, GeneratorConfig())
        self.assertEqual(config.command, "gemini")
        self.assertEqual(config.prompt_flag, "-p")
        self.assertEqual(config.model_flag, "--model")
        self.assertEqual(config.model, "gemini-2.5-flash")
        self.assertEqual(config.extra_args, ("--yolo",))
        self.assertIsNone(config.timeout)

    def test_load_config_success(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.toml"
            path.write_text(
                'command = "llm"\n'
                'prompt_flag = "--prompt"\n'
                'model = "gpt-x"\n'
                'extra_args = ["--quiet", "--no-color"]\n'
                "timeout = 30\n",
                encoding="utf-8",
            )
            config = load_config(path)
        self.assertEqual(config.command, "llm")
        self.assertEqual(config.prompt_flag, "--prompt")
        self.assertEqual(config.model_flag, "--model")
        self.assertEqual(config.model, "gpt-x")
        self.assertEqual(config.extra_args, ("--quiet", "--no-color"))
        self.assertEqual(config.timeout, 30.0)

    def test_default_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_dir = Path(tmp)
            (config_dir / "config.toml").write_text('model = "m"\n', encoding="utf-8")
            with patch("git_auto_commit.config.loader._get_config_directory", return_value=config_dir):
                self.assertEqual(default_config_path(), config_dir / "config.toml")
                self.assertEqual(load_config().model, "m")

    def test_unknown_keys_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.toml"
            path.write_text('colour = "blue"\nmodel = "m"\n', encoding="utf-8")
            self.assertEqual(load_config(path).model, "m")

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.toml"
            path.write_text("command = [unclosed", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(path)

    def test_wrong_types(self) -> None:
        cases = [
            "enabled = 1",
            "command = 5",
            'command = "  "',
            'backend = "openai"',
            'extra_args = "--yolo"',
            "extra_args = [1, 2]",
            'timeout = "soon"',
            "timeout = 0",
            "timeout = true",
            'port = "11434"',
        ]
        for content in cases:
            with self.subTest(content=content):
                with tempfile.TemporaryDirectory() as tmp:
                    path = Path(tmp) / "config.toml"
                    path.write_text(content + "\n", encoding="utf-8")
                    with self.assertRaises(ConfigError):
                        load_config(path)

    def test_config_is_immutable(self) -> None:
        config = GeneratorConfig()
        with self.assertRaises(Exception):
            config.command = "other"  # type: ignore[misc]

    def test_template_matches_defaults(self) -> None:
        self.assertIsInstance(tomllib.loads(DEFAULT_CONFIG_TEMPLATE), dict)
        with tempfile.TemporaryDirectory() as tmp:
            path = write_default_config(Path(tmp) / "nested" / "config.toml")
            self.assertTrue(path.exists())
            self.assertEqual(load_config(path), GeneratorConfig())

    def test_write_refuses_to_overwrite(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.toml"
            path.write_text('model = "mine"\n', encoding="utf-8")
            with self.assertRaises(ConfigError):
                write_default_config(path)
            self.assertEqual(load_config(path).model, "mine")
            write_default_config(path, force=True)
            self.assertEqual(load_config(path).model, "gemini-2.5-flash")


if __name__ == "__main__":
    unittest.main()
