"""Fallback display for non-interactive environments.

Provides is_interactive() detection and PlaintextReportDisplay for
CI pipelines, piped output and ``--plain``.
"""

import os
import sys
from typing import Optional, Sequence, TextIO

from ..formatting import format_all_results, format_summary_line
from ..models import InvestigationResult


def is_interactive(stream: Optional[TextIO] = None) -> bool:
    """Detect if reports are written to an interactive terminal.

    Plain output is chosen for TRIAGE_PLAIN_OUTPUT=1, CI runners, NO_COLOR,
    a non-TTY stream and a dumb or missing TERM.

    Args:
        stream: Stream the reports go to (default: sys.stdout)
    """
    if os.environ.get("TRIAGE_PLAIN_OUTPUT", "").lower() in ("true", "1"):
        return False

    ci_vars = (
        "CI",
        "CONTINUOUS_INTEGRATION",
        "GITHUB_ACTIONS",
        "GITLAB_CI",
        "CIRCLECI",
        "JENKINS_URL",
        "BUILDKITE",
        "TRAVIS",
        "TF_BUILD",  # Azure DevOps
    )
    if any(os.environ.get(var) for var in ci_vars):
        return False

    if os.environ.get("NO_COLOR") is not None:
        return False

    isatty = getattr(stream or sys.stdout, "isatty", None)
    if not (isatty and isatty()):
        return False

    return os.environ.get("TERM", "dumb") not in ("", "dumb")


class PlaintextReportDisplay:
    """Plain text report output.

    Provides the same interface as RichReportDisplay but writes the
    unadorned report layout, suitable for piping into other tools.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def show_summary(self, results: Sequence[InvestigationResult]) -> None:
        """Print one status line per investigator."""
        self._print("\n=== INVESTIGATION SUMMARY ===\n")
        for result in results:
            self._print(format_summary_line(result))
        self._print()

    def show_reports(self, results: Sequence[InvestigationResult]) -> None:
        """Print the full reports under the real tool names."""
        self._print("\n=== INVESTIGATION REPORTS ===\n")
        self._print(format_all_results(results))

    def show_evaluation(self, evaluation: InvestigationResult) -> None:
        """Print the evaluator's synthesis, or its error."""
        self._print("\n=== EVALUATION ===\n")
        if evaluation.success:
            self._print(evaluation.output)
        else:
            self._print("Evaluation failed:")
            self._print(evaluation.error)
        self._print()

    def show_availability(self, availability: dict[str, bool]) -> None:
        """Print which CLIs could be found."""
        for name, available in availability.items():
            self._print(f"  {name}: {'available' if available else 'NOT FOUND'}")
