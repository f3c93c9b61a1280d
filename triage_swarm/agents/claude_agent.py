"""Claude Code CLI investigator."""

from .base import BaseInvestigator
from ..models import InvestigatorId


class ClaudeInvestigator(BaseInvestigator):
    """Wrapper for Claude Code CLI in plan mode.

    Plan permission mode lets Claude read and search the project but
    refuses every edit or write tool call.
    """

    name = InvestigatorId.CLAUDE.value
    investigator_id = InvestigatorId.CLAUDE
    default_binary = "claude"

    def build_command(self, prompt: str) -> list[str]:
        """Build the Claude CLI command.

        Args:
            prompt: Full prompt including the read-only prefix

        Returns:
            Command as list of strings
        """
        return [
            self.get_cli_command(),
            "--permission-mode",
            "plan",
            "-p",
            prompt,
        ]
