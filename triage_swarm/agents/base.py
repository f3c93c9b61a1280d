"""Base agent class for read-only CLI wrappers."""

import logging
import os
import signal
import subprocess
import threading
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..models import (
    LAUNCH_FAILURE_EXIT_CODE,
    TIMEOUT_EXIT_CODE,
    InvestigationResult,
    InvestigatorId,
)
from ..utils.safe_env import agent_env

logger = logging.getLogger(__name__)

# Default budget for a single CLI call (10 minutes)
DEFAULT_TIMEOUT_MS = 600_000

READ_ONLY_PREFIX = """You are a read-only investigator. DO NOT make any changes.
Only analyze, search, read files, and provide findings.
Do not use Edit, Write, or any modification tools.
Focus on understanding the problem and proposing solutions.

TASK:
"""


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


# Upper bound for collecting output after a kill
KILL_DRAIN_SECONDS = 5.0


class AgentCancelled(Exception):
    """Raised when a launch is attempted after terminate()."""


def _kill_process_tree(process: subprocess.Popen) -> None:
    """SIGKILL the process group started for ``process``."""
    if hasattr(os, "killpg"):
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            pass
    if process.poll() is None:
        process.kill()


def _decode(data) -> str:
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data or ""


def _drain(process: subprocess.Popen) -> tuple[str, str]:
    """Collect output left in the pipes of a killed process, within KILL_DRAIN_SECONDS.

    A descendant that escaped the process group can hold the pipes open.
    In that case the pipes are closed and whatever was read is returned.
    """
    try:
        return process.communicate(timeout=KILL_DRAIN_SECONDS)
    except subprocess.TimeoutExpired as e:
        logger.warning(f"Output of killed process {process.pid} still open, closing pipes")
        for pipe in (process.stdout, process.stderr):
            if pipe:
                pipe.close()
        process.wait()
        return _decode(e.stdout), _decode(e.stderr)


class BaseAgent(ABC):
    """Base class for CLI agent wrappers.

    Provides the subprocess contract shared by every agent:
    - stdin bound to /dev/null so a CLI can never wait for interactive input
    - stdout/stderr captured as text
    - non-zero exits, launch failures and timeouts returned as data
    - optional retry with backoff when the binary cannot be launched
    - termination of in-flight processes for cancellation
    """

    name: str = "base"
    default_binary: str = ""

    def __init__(
        self,
        project_dir: Optional[str | Path] = None,
        binary: Optional[str] = None,
        launch_retries: int = 0,
        retry_interval: float = 1.0,
        backoff_factor: float = 2.0,
    ):
        """Initialize the agent.

        Args:
            project_dir: Working directory for the CLI (default: current directory)
            binary: Executable name or path overriding ``default_binary``
            launch_retries: Extra attempts when the process cannot be started
            retry_interval: Delay in seconds before the first retry
            backoff_factor: Multiplier applied to the delay after each retry
        """
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.binary = binary or self.default_binary
        self.launch_retries = launch_retries
        self.retry_interval = retry_interval
        self.backoff_factor = backoff_factor

        self._lock = threading.Lock()
        self._processes: set[subprocess.Popen] = set()
        self._cancelled = threading.Event()

    def get_cli_command(self) -> str:
        """Get the main CLI command name."""
        return self.binary

    @abstractmethod
    def build_command(self, prompt: str) -> list[str]:
        """Build the CLI command to execute.

        Args:
            prompt: The full prompt, passed as a single argument

        Returns:
            Command as list of strings
        """

    def check_available(self) -> bool:
        """Check if the CLI tool is available."""
        try:
            result = subprocess.run(
                [self.get_cli_command(), "--version"],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=10,
            )
            return result.returncode == 0
        except (OSError, subprocess.TimeoutExpired):
            return False

    def terminate(self) -> None:
        """Kill every process this agent currently has in flight.

        Children the CLI spawned are killed with it. Pending launch retries
        stop and no further process is started by this agent. Calls already
        running return their result normally, with the signal's exit status.
        """
        self._cancelled.set()
        with self._lock:
            processes = list(self._processes)
        for process in processes:
            logger.debug(f"Killing {self.name} process group {process.pid}")
            _kill_process_tree(process)

    def execute(self, prompt: str, timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS) -> InvestigationResult:
        """Run the CLI with the given prompt and capture its result.

        Never raises: every outcome, including a binary that cannot be
        started, comes back as an InvestigationResult.

        Args:
            prompt: Full prompt passed to ``build_command``
            timeout_ms: Kill the process after this many milliseconds (None = no limit)

        Returns:
            InvestigationResult for this call
        """
        start = time.monotonic()
        attempt = 0

        if not self.project_dir.is_dir():
            return self._failure(
                f"Failed to invoke {self.name}: working directory not found: {self.project_dir}",
                start,
            )

        while True:
            try:
                command = self.build_command(prompt)
                exit_code, stdout, stderr, timed_out = self._communicate(command, timeout_ms)
                break
            except AgentCancelled:
                return self._failure(f"Failed to invoke {self.name}: cancelled before launch", start)
            except OSError as e:
                if attempt < self.launch_retries:
                    delay = self.retry_interval * (self.backoff_factor ** attempt)
                    attempt += 1
                    logger.warning(
                        f"Failed to launch {self.get_cli_command()} ({e}), "
                        f"retry {attempt}/{self.launch_retries} in {delay:.1f}s"
                    )
                    if self._cancelled.wait(delay):
                        return self._failure(
                            f"Failed to invoke {self.name}: cancelled while retrying launch: {e}",
                            start,
                        )
                    continue
                return self._failure(self._describe_launch_error(e), start)
            except ValueError as e:
                # Popen rejects arguments such as prompts with embedded NUL bytes
                return self._failure(f"Failed to invoke {self.name}: invalid arguments: {e}", start)
            except Exception as e:
                logger.error(f"Unexpected error in {self.get_cli_command()}: {type(e).__name__}: {e}")
                return self._failure(
                    f"Failed to invoke {self.name}: unexpected error: {type(e).__name__}: {e}",
                    start,
                )

        if timed_out:
            seconds = timeout_ms / 1000.0
            message = f"Command timed out after {seconds:g} seconds"
            if stderr:
                message = f"{message}\n{stderr}"
            return InvestigationResult(
                source=self.name,
                output=stdout.strip(),
                error=message,
                exit_code=TIMEOUT_EXIT_CODE,
                duration_ms=_elapsed_ms(start),
            )

        return InvestigationResult(
            source=self.name,
            output=stdout.strip(),
            error=stderr,
            exit_code=exit_code,
            duration_ms=_elapsed_ms(start),
        )

    def _communicate(
        self,
        command: list[str],
        timeout_ms: Optional[int],
    ) -> tuple[int, str, str, bool]:
        """Start the process, wait for it and collect its output.

        The CLI runs in its own session so that a kill reaches every
        process it spawned. Those children would otherwise keep the output
        pipes open past the timeout.

        Raises:
            AgentCancelled: terminate() was called before the launch

        Returns:
            Tuple of (exit code, stdout, stderr, timed out)
        """
        timeout = timeout_ms / 1000.0 if timeout_ms is not None else None

        with self._lock:
            if self._cancelled.is_set():
                raise AgentCancelled(self.name)
            process = subprocess.Popen(
                command,
                cwd=self.project_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                env=agent_env(),
                start_new_session=True,
            )
            self._processes.add(process)

        timed_out = False
        try:
            try:
                stdout, stderr = process.communicate(timeout=timeout)
            except subprocess.TimeoutExpired:
                timed_out = True
                _kill_process_tree(process)
                stdout, stderr = _drain(process)
        finally:
            with self._lock:
                self._processes.discard(process)

        return process.returncode, stdout or "", stderr or "", timed_out

    def _describe_launch_error(self, error: OSError) -> str:
        cli_cmd = self.get_cli_command()
        if isinstance(error, FileNotFoundError):
            return f"Failed to invoke {self.name}: CLI not found: {cli_cmd}. Is it installed? Error: {error}"
        if isinstance(error, PermissionError):
            return f"Failed to invoke {self.name}: permission denied executing {cli_cmd}: {error}"
        return f"Failed to invoke {self.name}: OS error executing {cli_cmd}: {error}"

    def _failure(self, message: str, start: float) -> InvestigationResult:
        return InvestigationResult(
            source=self.name,
            output="",
            error=message,
            exit_code=LAUNCH_FAILURE_EXIT_CODE,
            duration_ms=_elapsed_ms(start),
        )


class BaseInvestigator(BaseAgent):
    """An agent that analyzes a task without modifying anything.

    Subclasses only supply the binary name and the read-only flags.
    """

    investigator_id: InvestigatorId

    def run(self, prompt: str, timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS) -> InvestigationResult:
        """Investigate ``prompt`` in read-only mode.

        Args:
            prompt: Raw problem statement from the user
            timeout_ms: Budget for this investigator in milliseconds

        Returns:
            InvestigationResult for this investigator
        """
        return self.execute(build_investigation_prompt(prompt), timeout_ms)


def build_investigation_prompt(prompt: str) -> str:
    """Prepend the read-only instruction block to a raw prompt."""
    return READ_ONLY_PREFIX + prompt
