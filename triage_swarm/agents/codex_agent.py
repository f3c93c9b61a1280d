"""Codex CLI investigator."""

from .base import BaseInvestigator
from ..models import InvestigatorId


class CodexInvestigator(BaseInvestigator):
    """Wrapper for ``codex exec`` with a read-only sandbox.

    The git repository check is skipped so investigations also work
    outside a version-controlled directory.
    """

    name = InvestigatorId.CODEX.value
    investigator_id = InvestigatorId.CODEX
    default_binary = "codex"

    def build_command(self, prompt: str) -> list[str]:
        return [
            self.get_cli_command(),
            "exec",
            "--sandbox",
            "read-only",
            "--skip-git-repo-check",
            prompt,
        ]
