"""Run settings: timeouts, launch retries and CLI binaries.

Values are merged in increasing priority from the dataclass defaults,
``.triage-config.json`` in the project directory, and ``TRIAGE_*``
environment variables. Command-line flags are applied on top by the CLI.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".triage-config.json"

# Path to JSON schema for validation
_SCHEMA_PATH = Path(__file__).parent / "triage-config.schema.json"
_SCHEMA_CACHE: Optional[dict] = None

DEFAULT_INVESTIGATION_TIMEOUT_MS = 600_000
DEFAULT_EVALUATION_TIMEOUT_MS = 600_000


class ConfigValidationError(Exception):
    """Raised when configuration fails validation."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


@dataclass
class TimeoutConfig:
    """Budgets for the two pipeline stages, in milliseconds."""

    investigation_ms: int = DEFAULT_INVESTIGATION_TIMEOUT_MS
    evaluation_ms: int = DEFAULT_EVALUATION_TIMEOUT_MS


@dataclass
class RetryConfig:
    """Retry policy for CLIs that fail to launch.

    Only launch failures are retried. A CLI that ran and exited non-zero,
    or was killed on timeout, is reported as is.
    """

    launch_retries: int = 0
    initial_interval: float = 1.0  # seconds
    backoff_factor: float = 2.0


@dataclass
class BinaryConfig:
    """Executable names or paths for each CLI."""

    claude: str = "claude"
    gemini: str = "gemini"
    codex: str = "codex"
    evaluator: str = "claude"


@dataclass
class TriageConfig:
    """Complete configuration for one triage run."""

    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    binaries: BinaryConfig = field(default_factory=BinaryConfig)
    project_dir: Optional[Path] = None
    verbose: bool = False
    investigations_only: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timeouts": {
                "investigation_ms": self.timeouts.investigation_ms,
                "evaluation_ms": self.timeouts.evaluation_ms,
            },
            "retry": {
                "launch_retries": self.retry.launch_retries,
                "initial_interval": self.retry.initial_interval,
                "backoff_factor": self.retry.backoff_factor,
            },
            "binaries": {
                "claude": self.binaries.claude,
                "gemini": self.binaries.gemini,
                "codex": self.binaries.codex,
                "evaluator": self.binaries.evaluator,
            },
            "project_dir": str(self.project_dir) if self.project_dir else None,
            "verbose": self.verbose,
            "investigations_only": self.investigations_only,
        }


_SECTIONS = {
    "timeouts": TimeoutConfig,
    "retry": RetryConfig,
    "binaries": BinaryConfig,
}

# Environment variable -> (dotted path, parser)
ENV_OVERRIDES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "TRIAGE_TIMEOUT_MS": ("timeouts.investigation_ms", int),
    "TRIAGE_EVAL_TIMEOUT_MS": ("timeouts.evaluation_ms", int),
    "TRIAGE_LAUNCH_RETRIES": ("retry.launch_retries", int),
    "TRIAGE_CLAUDE_BIN": ("binaries.claude", str),
    "TRIAGE_GEMINI_BIN": ("binaries.gemini", str),
    "TRIAGE_CODEX_BIN": ("binaries.codex", str),
    "TRIAGE_EVALUATOR_BIN": ("binaries.evaluator", str),
}


def _get_schema() -> dict:
    """Load and cache the JSON schema."""
    global _SCHEMA_CACHE
    if _SCHEMA_CACHE is None:
        if _SCHEMA_PATH.exists():
            _SCHEMA_CACHE = json.loads(_SCHEMA_PATH.read_text())
        else:
            logger.warning(f"Schema file not found: {_SCHEMA_PATH}")
            _SCHEMA_CACHE = {}
    return _SCHEMA_CACHE


def _schema_errors(config_data: Any) -> list[ValidationError]:
    """All schema violations in ``config_data``, in document order."""
    schema = _get_schema()
    if not schema:
        return []

    try:
        jsonschema.validate(instance=config_data, schema=schema, cls=Draft202012Validator)
        return []
    except ValidationError:
        validator = Draft202012Validator(schema)
        return sorted(validator.iter_errors(config_data), key=lambda e: [str(p) for p in e.absolute_path])


def _format_error(error: ValidationError) -> str:
    path = ".".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{path}: {error.message}"


def validate_config(config_data: dict, raise_on_error: bool = False) -> tuple[bool, list[str]]:
    """Validate configuration data against the JSON schema.

    Args:
        config_data: Configuration dictionary to validate
        raise_on_error: If True, raise ConfigValidationError on failure

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = [_format_error(e) for e in _schema_errors(config_data)]

    if errors and raise_on_error:
        raise ConfigValidationError(
            f"Configuration validation failed with {len(errors)} error(s)",
            errors=errors,
        )

    return len(errors) == 0, errors


def _apply(config: TriageConfig, data: dict, errors: list[ValidationError]) -> None:
    """Copy the values of ``data`` that passed validation onto ``config``.

    An unknown key only rejects itself, so its section's known keys
    still apply.
    """
    rejected = {
        tuple(error.absolute_path)
        for error in errors
        if error.validator != "additionalProperties"
    }

    for section, section_type in _SECTIONS.items():
        values = data.get(section)
        if not isinstance(values, dict) or () in rejected or (section,) in rejected:
            continue
        target = getattr(config, section)
        for f in fields(section_type):
            if f.name in values and (section, f.name) not in rejected:
                setattr(target, f.name, values[f.name])


def _load_layer(config: TriageConfig, data: Any, origin: str) -> None:
    """Validate one configuration layer, warn about problems, apply the rest."""
    errors = _schema_errors(data)
    if errors:
        logger.warning(
            f"Config validation warnings for {origin}:\n"
            + "\n".join(f"  - {_format_error(e)}" for e in errors)
        )
    if isinstance(data, dict):
        _apply(config, data, errors)


def _env_data(environ: Optional[dict] = None) -> dict:
    """Collect TRIAGE_* overrides from the environment as a nested dict."""
    environ = os.environ if environ is None else environ
    data: dict[str, dict] = {}

    for var, (path, parse) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            value = parse(raw)
        except ValueError:
            logger.warning(f"Ignoring {var}={raw!r}: not a valid value")
            continue
        section, key = path.split(".")
        data.setdefault(section, {})[key] = value

    return data


def load_config(
    project_dir: Optional[str | Path] = None,
    environ: Optional[dict] = None,
) -> TriageConfig:
    """Load configuration for a project.

    Invalid entries are reported as warnings and replaced by defaults,
    so a broken config file never stops a run.

    Args:
        project_dir: Directory containing .triage-config.json (default: cwd)
        environ: Environment mapping (default: os.environ)

    Returns:
        TriageConfig with merged settings
    """
    project_dir = Path(project_dir) if project_dir else Path.cwd()
    config = TriageConfig(project_dir=project_dir)

    config_file = project_dir / CONFIG_FILENAME
    if config_file.exists():
        try:
            custom = json.loads(config_file.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read {config_file}: {e}")
        else:
            _load_layer(config, custom, str(config_file))

    env_data = _env_data(environ)
    if env_data:
        _load_layer(config, env_data, "TRIAGE_* environment variables")

    return config
