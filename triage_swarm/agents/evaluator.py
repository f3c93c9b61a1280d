"""Claude evaluator that synthesizes the investigation reports."""

from typing import Optional, Sequence

from .base import DEFAULT_TIMEOUT_MS, BaseAgent
from ..formatting import format_all_results
from ..models import EVALUATOR_SOURCE, InvestigationResult

EVALUATOR_SYSTEM_PROMPT = """You are a senior software architect evaluating investigation reports from three AI assistants. Each assistant investigated the same problem independently. The assistants are identified only by neutral labels (Investigator A, B and C).

Your task is to synthesize their findings and produce:

1. **PRIMARY PATH**: Choose the best approach from the investigations. Explain why this approach is preferred.

2. **BACKUP PATH**: Identify an alternative approach in case the primary fails. Explain when to switch to this.

3. **VERIFICATION STEPS**: List specific checks to validate the solution works:
   - What tests to run
   - What behavior to verify
   - What edge cases to check

4. **IMPLEMENTATION PLAN**: Provide a step-by-step plan:
   - Each step should be concrete and actionable
   - Include file paths when known
   - Note any dependencies between steps
   - Estimate complexity (simple/medium/complex) for each step

Be concise but thorough. Focus on actionable guidance."""

EVALUATION_INSTRUCTIONS = """Please synthesize the above investigations and provide:
1. PRIMARY PATH - Best approach and rationale
2. BACKUP PATH - Alternative approach
3. VERIFICATION STEPS - How to confirm the fix works
4. IMPLEMENTATION PLAN - Step-by-step instructions with file paths, dependencies between steps, and a simple/medium/complex estimate per step"""


def build_evaluator_prompt(original_prompt: str, results: Sequence[InvestigationResult]) -> str:
    """Build the full evaluator prompt.

    Embeds the original task verbatim and the anonymized reports, so
    the evaluator never sees which tool wrote which report.
    """
    return (
        "# Original Task\n\n"
        f"{original_prompt}\n\n"
        "# Investigation Reports\n\n"
        f"{format_all_results(results, anonymize=True)}\n\n"
        "# Your Evaluation\n\n"
        f"{EVALUATION_INSTRUCTIONS}"
    )


class EvaluatorAgent(BaseAgent):
    """Claude Code CLI acting as the synthesis step.

    Runs without the read-only prefix: it only receives text and is
    asked for a recommendation, not an investigation.
    """

    name = EVALUATOR_SOURCE
    default_binary = "claude"

    def __init__(self, *args, system_prompt: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.system_prompt = system_prompt or EVALUATOR_SYSTEM_PROMPT

    def build_command(self, prompt: str) -> list[str]:
        """Build the Claude CLI command with the evaluator persona."""
        return [
            self.get_cli_command(),
            "--system-prompt",
            self.system_prompt,
            "-p",
            prompt,
        ]

    def run(
        self,
        original_prompt: str,
        results: Sequence[InvestigationResult],
        timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS,
    ) -> InvestigationResult:
        """Synthesize the investigation results.

        Args:
            original_prompt: The user's problem statement
            results: Investigation results in dispatch order
            timeout_ms: Budget for the evaluator in milliseconds

        Returns:
            InvestigationResult with source "evaluator"
        """
        return self.execute(build_evaluator_prompt(original_prompt, results), timeout_ms)
