"""Triage swarm.

Runs Claude Code, Gemini CLI and Codex CLI as read-only investigators in
parallel, then has a Claude evaluator synthesize their reports.
"""

from .__version__ import __version__
from .models import InvestigationResult, InvestigatorId
from .pipeline import TriagePipeline, TriageReport, run_triage

__all__ = [
    "InvestigationResult",
    "InvestigatorId",
    "TriagePipeline",
    "TriageReport",
    "run_triage",
    "__version__",
]
