"""Agent wrappers for the investigator and evaluator CLIs.

- ClaudeInvestigator: Claude Code in plan permission mode
- GeminiInvestigator: Gemini CLI in sandboxed one-shot mode
- CodexInvestigator: codex exec with a read-only sandbox
- EvaluatorAgent: Claude Code with a synthesis system prompt

Every agent exposes ``run(...) -> InvestigationResult`` and never raises
for subprocess failures.
"""

from typing import Optional

from ..config import TriageConfig
from ..models import InvestigatorId
from .base import (
    DEFAULT_TIMEOUT_MS,
    READ_ONLY_PREFIX,
    BaseAgent,
    BaseInvestigator,
    build_investigation_prompt,
)
from .claude_agent import ClaudeInvestigator
from .codex_agent import CodexInvestigator
from .evaluator import (
    EVALUATOR_SYSTEM_PROMPT,
    EvaluatorAgent,
    build_evaluator_prompt,
)
from .gemini_agent import GeminiInvestigator

# Dispatch order; results are always returned in this order.
INVESTIGATOR_CLASSES: dict[InvestigatorId, type[BaseInvestigator]] = {
    InvestigatorId.CLAUDE: ClaudeInvestigator,
    InvestigatorId.GEMINI: GeminiInvestigator,
    InvestigatorId.CODEX: CodexInvestigator,
}


def _agent_kwargs(config: TriageConfig) -> dict:
    return {
        "project_dir": config.project_dir,
        "launch_retries": config.retry.launch_retries,
        "retry_interval": config.retry.initial_interval,
        "backoff_factor": config.retry.backoff_factor,
    }


def create_investigators(config: Optional[TriageConfig] = None) -> list[BaseInvestigator]:
    """Create one investigator per InvestigatorId, in dispatch order."""
    config = config or TriageConfig()
    return [
        cls(binary=getattr(config.binaries, investigator_id.value), **_agent_kwargs(config))
        for investigator_id, cls in INVESTIGATOR_CLASSES.items()
    ]


def create_evaluator(config: Optional[TriageConfig] = None) -> EvaluatorAgent:
    """Create the evaluator agent."""
    config = config or TriageConfig()
    return EvaluatorAgent(binary=config.binaries.evaluator, **_agent_kwargs(config))


__all__ = [
    # Base classes
    "BaseAgent",
    "BaseInvestigator",
    "DEFAULT_TIMEOUT_MS",
    "READ_ONLY_PREFIX",
    "build_investigation_prompt",
    # Investigators
    "ClaudeInvestigator",
    "GeminiInvestigator",
    "CodexInvestigator",
    "INVESTIGATOR_CLASSES",
    "create_investigators",
    # Evaluator
    "EvaluatorAgent",
    "EVALUATOR_SYSTEM_PROMPT",
    "build_evaluator_prompt",
    "create_evaluator",
]
