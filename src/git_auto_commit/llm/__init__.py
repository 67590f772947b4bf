"""
External generator integration for git_auto_commit.

This package contains the generator backends (:class:`CliGeneratorClient`
for command line tools and :class:`OllamaClient` for an Ollama server) and
the :class:`SuggestionGenerator`, which turns their output into commit
message and branch name suggestions.
"""

from .cli_client import CliGeneratorClient  # noqa: F401
from .errors import LLMError  # noqa: F401
from .ollama_client import OllamaClient  # noqa: F401
from .suggestion_generator import SuggestionGenerator, create_client  # noqa: F401
