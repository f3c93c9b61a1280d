"""Utility modules for triage-swarm."""

from .logging import LogLevel, TriageLogger
from .safe_env import agent_env

__all__ = [
    # Logging
    "LogLevel",
    "TriageLogger",
    # Subprocess environment
    "agent_env",
]
