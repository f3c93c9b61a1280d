"""Progress logging for triage runs."""

import json
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, TextIO


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"
    AGENT = "AGENT"


# ANSI color codes
COLORS = {
    LogLevel.DEBUG: "\033[90m",      # Gray
    LogLevel.INFO: "\033[37m",       # White
    LogLevel.WARNING: "\033[93m",    # Yellow
    LogLevel.ERROR: "\033[91m",      # Red
    LogLevel.SUCCESS: "\033[92m",    # Green
    LogLevel.AGENT: "\033[95m",      # Magenta
}
RESET = "\033[0m"
BOLD = "\033[1m"
BANNER = "\033[96m"  # Cyan

# SUCCESS and AGENT are progress messages and rank with INFO
_RANK = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.SUCCESS: 1,
    LogLevel.AGENT: 1,
    LogLevel.WARNING: 2,
    LogLevel.ERROR: 3,
}

TEXT_LOG_NAME = "triage.log"
JSON_LOG_NAME = "triage.jsonl"


class TriageLogger:
    """Logger for investigator and evaluator progress.

    Console lines go to stderr so that reports written to stdout stay
    pipeable. When ``log_dir`` is given, every record is also appended to
    ``triage.log`` (plain text) and ``triage.jsonl`` (one JSON object per line).
    """

    def __init__(
        self,
        log_dir: Optional[str | Path] = None,
        console_output: bool = True,
        min_level: LogLevel = LogLevel.INFO,
        stream: Optional[TextIO] = None,
        use_color: Optional[bool] = None,
    ):
        """Initialize the logger.

        Args:
            log_dir: Directory for log files, or None for console only
            console_output: Whether to print to the console
            min_level: Least severe level that is recorded
            stream: Console stream (sys.stderr at log time if None)
            use_color: Force ANSI colors on or off (auto-detect if None)
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.console_output = console_output
        self.min_level = min_level
        self._stream = stream
        self._use_color = use_color

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def log_file(self) -> Optional[Path]:
        return self.log_dir / TEXT_LOG_NAME if self.log_dir else None

    @property
    def json_log_file(self) -> Optional[Path]:
        return self.log_dir / JSON_LOG_NAME if self.log_dir else None

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stderr

    @property
    def use_color(self) -> bool:
        if self._use_color is not None:
            return self._use_color
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def enabled_for(self, level: LogLevel) -> bool:
        return _RANK[level] >= _RANK[self.min_level]

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_color else text

    def _tags(self, level: LogLevel, agent: Optional[str], colored: bool) -> list[str]:
        tags = [(f"[{agent}]", COLORS[LogLevel.AGENT])] if agent else []
        tags.append((f"[{level.value}]", COLORS[level]))
        if colored:
            return [self._paint(tag, color) for tag, color in tags]
        return [tag for tag, _ in tags]

    def log(
        self,
        level: LogLevel,
        message: str,
        agent: Optional[str] = None,
        extra: Optional[dict] = None,
    ) -> None:
        """Record one message on the console and in the log files.

        Args:
            level: Log level
            message: Message text
            agent: Source tag (claude, gemini, codex, evaluator)
            extra: Structured fields, written to the JSON log only
        """
        if not self.enabled_for(level):
            return

        now = datetime.now()

        if self.console_output:
            clock = self._paint(f"[{now:%H:%M:%S}]", COLORS[LogLevel.DEBUG])
            line = " ".join([clock, *self._tags(level, agent, colored=True), message])
            print(line, file=self.stream, flush=True)

        if self.log_dir:
            line = " ".join([f"[{now:%Y-%m-%d %H:%M:%S}]", *self._tags(level, agent, colored=False), message])
            entry = {"timestamp": now.isoformat(), "level": level.value, "message": message}
            if agent:
                entry["agent"] = agent
            if extra:
                entry["extra"] = extra

            with open(self.log_file, "a") as f:
                f.write(line + "\n")
            with open(self.json_log_file, "a") as f:
                f.write(json.dumps(entry) + "\n")

    def debug(self, message: str, **kwargs) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log(LogLevel.ERROR, message, **kwargs)

    def agent_start(self, agent: str, task: str) -> None:
        """Log that an investigator or the evaluator was launched."""
        self.log(LogLevel.AGENT, f"Agent starting: {task}", agent=agent)

    def agent_complete(self, agent: str, duration_ms: int) -> None:
        """Log a zero exit together with the elapsed time."""
        self.log(
            LogLevel.SUCCESS,
            f"Agent completed in {duration_ms / 1000.0:.1f}s",
            agent=agent,
            extra={"duration_ms": duration_ms},
        )

    def agent_error(self, agent: str, error: str, exit_code: Optional[int] = None) -> None:
        """Log a failed run. The exit code goes to the JSON log."""
        self.log(
            LogLevel.ERROR,
            f"Agent error: {error}",
            agent=agent,
            extra={"exit_code": exit_code} if exit_code is not None else None,
        )

    def banner(self, text: str) -> None:
        """Print a boxed heading on the console."""
        if not (self.console_output and self.enabled_for(LogLevel.INFO)):
            return
        rule = self._paint("=" * 60, BOLD + BANNER)
        title = self._paint(text.center(60), BOLD + BANNER)
        print(f"\n{rule}\n{title}\n{rule}\n", file=self.stream, flush=True)
