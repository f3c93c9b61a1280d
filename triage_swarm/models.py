"""Data model shared by agents, formatting and the pipeline."""

from dataclasses import dataclass
from enum import Enum

# Sentinel exit codes for calls that never produced a real exit status
LAUNCH_FAILURE_EXIT_CODE = -1
TIMEOUT_EXIT_CODE = -2

EVALUATOR_SOURCE = "evaluator"


class InvestigatorId(str, Enum):
    """The fixed set of investigators, in dispatch order."""

    CLAUDE = "claude"
    GEMINI = "gemini"
    CODEX = "codex"


@dataclass(frozen=True)
class InvestigationResult:
    """Result from a single CLI invocation.

    Attributes:
        source: Which agent produced this result (investigator id or "evaluator")
        output: Captured stdout, whitespace-trimmed
        error: Captured stderr, or a synthetic message if the call never ran
        exit_code: Process exit status (-1 launch failure, -2 timeout)
        duration_ms: Wall-clock duration measured around launch and wait
    """

    source: str
    output: str = ""
    error: str = ""
    exit_code: int = 0
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def launch_failed(self) -> bool:
        return self.exit_code == LAUNCH_FAILURE_EXIT_CODE

    @property
    def timed_out(self) -> bool:
        return self.exit_code == TIMEOUT_EXIT_CODE

    @property
    def duration_seconds(self) -> float:
        return self.duration_ms / 1000.0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "source": self.source,
            "output": self.output,
            "error": self.error,
            "exit_code": self.exit_code,
            "duration_ms": self.duration_ms,
        }
