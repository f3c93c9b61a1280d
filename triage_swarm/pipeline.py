"""Triage pipeline: parallel investigation followed by synthesis."""

from dataclasses import dataclass
from typing import Optional, Sequence

from .agents import BaseInvestigator, EvaluatorAgent, create_evaluator, create_investigators
from .config import (
    DEFAULT_EVALUATION_TIMEOUT_MS,
    DEFAULT_INVESTIGATION_TIMEOUT_MS,
    TriageConfig,
)
from .dispatch import run_investigators_parallel
from .models import InvestigationResult
from .utils.logging import LogLevel, TriageLogger


@dataclass(frozen=True)
class TriageReport:
    """Everything a triage run produced.

    ``evaluation`` is None when the run was investigations-only.
    """

    original_prompt: str
    investigations: tuple[InvestigationResult, ...]
    evaluation: Optional[InvestigationResult] = None

    @property
    def succeeded(self) -> bool:
        """True when the evaluation succeeded, or no evaluation was requested."""
        if self.evaluation is None:
            return True
        return self.evaluation.success

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_prompt": self.original_prompt,
            "investigations": [r.to_dict() for r in self.investigations],
            "evaluation": self.evaluation.to_dict() if self.evaluation else None,
        }


class TriagePipeline:
    """Runs the investigators in parallel, then the evaluator.

    The evaluator starts only after every investigator has returned, and
    it receives all results including failed ones. In investigations-only
    mode no evaluator is created at all.
    """

    def __init__(
        self,
        config: Optional[TriageConfig] = None,
        logger: Optional[TriageLogger] = None,
        investigators: Optional[Sequence[BaseInvestigator]] = None,
        evaluator: Optional[EvaluatorAgent] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Run configuration (defaults if None)
            logger: Progress logger (quiet unless config.verbose)
            investigators: Override the default investigators
            evaluator: Override the default evaluator
        """
        self.config = config or TriageConfig()
        self.logger = logger or TriageLogger(
            min_level=LogLevel.INFO if self.config.verbose else LogLevel.WARNING,
        )
        self._investigators = list(investigators) if investigators is not None else None
        self._evaluator = evaluator

    @property
    def investigators(self) -> list[BaseInvestigator]:
        if self._investigators is None:
            self._investigators = create_investigators(self.config)
        return self._investigators

    @property
    def evaluator(self) -> EvaluatorAgent:
        if self._evaluator is None:
            self._evaluator = create_evaluator(self.config)
        return self._evaluator

    def investigate(self, prompt: str) -> list[InvestigationResult]:
        """Run all investigators concurrently and log their outcomes."""
        self.logger.info("Starting parallel investigations...")
        for investigator in self.investigators:
            self.logger.agent_start(investigator.name, "read-only investigation")

        results = run_investigators_parallel(
            prompt,
            timeout_ms=self.config.timeouts.investigation_ms,
            investigators=self.investigators,
        )

        for result in results:
            if result.success:
                self.logger.agent_complete(result.source, result.duration_ms)
            else:
                self.logger.agent_error(
                    result.source,
                    _first_line(result.error) or f"exit code {result.exit_code}",
                    exit_code=result.exit_code,
                )
        return results

    def evaluate(self, prompt: str, results: Sequence[InvestigationResult]) -> InvestigationResult:
        """Synthesize the investigation results with the evaluator."""
        self.logger.info("Investigations complete. Running evaluator...")
        evaluation = self.evaluator.run(
            prompt,
            results,
            timeout_ms=self.config.timeouts.evaluation_ms,
        )
        if evaluation.success:
            self.logger.agent_complete(evaluation.source, evaluation.duration_ms)
        else:
            self.logger.agent_error(
                evaluation.source,
                _first_line(evaluation.error) or f"exit code {evaluation.exit_code}",
                exit_code=evaluation.exit_code,
            )
        return evaluation

    def run(self, prompt: str) -> TriageReport:
        """Run the complete triage pipeline.

        1. Run investigators in parallel
        2. Feed all results to the evaluator (unless investigations-only)
        3. Return the combined report

        Args:
            prompt: Raw problem statement

        Returns:
            TriageReport with investigations and optional evaluation
        """
        results = self.investigate(prompt)

        if self.config.investigations_only:
            return TriageReport(original_prompt=prompt, investigations=tuple(results))

        evaluation = self.evaluate(prompt, results)
        return TriageReport(
            original_prompt=prompt,
            investigations=tuple(results),
            evaluation=evaluation,
        )


def _first_line(text: str) -> str:
    stripped = text.strip()
    return stripped.splitlines()[0] if stripped else ""


def run_triage(
    prompt: str,
    investigation_timeout_ms: int = DEFAULT_INVESTIGATION_TIMEOUT_MS,
    evaluation_timeout_ms: int = DEFAULT_EVALUATION_TIMEOUT_MS,
    verbose: bool = False,
    investigations_only: bool = False,
) -> TriageReport:
    """Run a triage with default agents.

    Convenience wrapper around TriagePipeline for library callers.
    """
    config = TriageConfig(verbose=verbose, investigations_only=investigations_only)
    config.timeouts.investigation_ms = investigation_timeout_ms
    config.timeouts.evaluation_ms = evaluation_timeout_ms
    return TriagePipeline(config).run(prompt)
