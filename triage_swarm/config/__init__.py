"""Configuration package for triage runs.

Provides dataclass settings for timeouts, launch retries and CLI
binaries, loaded from .triage-config.json and TRIAGE_* variables.
"""

from .settings import (
    CONFIG_FILENAME,
    DEFAULT_EVALUATION_TIMEOUT_MS,
    DEFAULT_INVESTIGATION_TIMEOUT_MS,
    BinaryConfig,
    ConfigValidationError,
    RetryConfig,
    TimeoutConfig,
    TriageConfig,
    load_config,
    validate_config,
)

__all__ = [
    "TriageConfig",
    "TimeoutConfig",
    "RetryConfig",
    "BinaryConfig",
    "CONFIG_FILENAME",
    "DEFAULT_INVESTIGATION_TIMEOUT_MS",
    "DEFAULT_EVALUATION_TIMEOUT_MS",
    "load_config",
    "validate_config",
    "ConfigValidationError",
]
