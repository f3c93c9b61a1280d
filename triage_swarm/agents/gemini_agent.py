"""Gemini CLI investigator."""

from .base import BaseInvestigator
from ..models import InvestigatorId


class GeminiInvestigator(BaseInvestigator):
    """Wrapper for Gemini CLI in sandboxed one-shot mode."""

    name = InvestigatorId.GEMINI.value
    investigator_id = InvestigatorId.GEMINI
    default_binary = "gemini"

    def build_command(self, prompt: str) -> list[str]:
        """Build the Gemini CLI command (``-s`` runs inside the sandbox)."""
        return [self.get_cli_command(), "-s", prompt]
