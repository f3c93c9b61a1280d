"""Pytest fixtures for triage-swarm tests."""

import sys

import pytest

from triage_swarm.agents.base import BaseInvestigator
from triage_swarm.models import InvestigationResult


class ScriptInvestigator(BaseInvestigator):
    """Investigator that runs a Python snippet instead of a real CLI.

    The full prompt is passed as ``sys.argv[1]`` to the snippet, the same
    single-argument contract the real CLIs get.
    """

    default_binary = sys.executable

    def __init__(self, name: str, script: str, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.script = script
        self.commands: list[list[str]] = []

    def build_command(self, prompt: str) -> list[str]:
        command = [self.get_cli_command(), "-c", self.script, prompt]
        self.commands.append(command)
        return command


@pytest.fixture
def script_investigator():
    """Factory for investigators backed by a Python snippet."""

    def make(name: str = "claude", script: str = "print('ok')", **kwargs) -> ScriptInvestigator:
        return ScriptInvestigator(name, script, **kwargs)

    return make


@pytest.fixture
def make_result():
    """Factory for InvestigationResult with sensible defaults."""

    def make(
        source: str = "claude",
        output: str = "Found the issue",
        error: str = "",
        exit_code: int = 0,
        duration_ms: int = 1500,
    ) -> InvestigationResult:
        return InvestigationResult(
            source=source,
            output=output,
            error=error,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    return make


@pytest.fixture
def sample_results(make_result):
    """Three results in dispatch order, the last one failed."""
    return [
        make_result("claude", output="Claude findings", duration_ms=1500),
        make_result("gemini", output="Gemini findings", duration_ms=2300),
        make_result("codex", output="partial codex notes", error="codex crashed", exit_code=1, duration_ms=900),
    ]
