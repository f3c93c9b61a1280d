"""Command-line entry point for triage-swarm."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .__version__ import __version__
from .agents import create_evaluator, create_investigators
from .config import TriageConfig, load_config
from .pipeline import TriagePipeline
from .ui import PlaintextReportDisplay, create_display
from .utils.env_loader import load_env
from .utils.logging import LogLevel, TriageLogger

DESCRIPTION = """\
Runs Claude, Gemini, and Codex in parallel to investigate a problem.
Each investigator operates in read-only mode (no file modifications).
Results are synthesized by a Claude evaluator that produces:
  - Primary path recommendation
  - Backup path
  - Verification steps
  - Implementation plan"""

EPILOG = """\
Examples:
  # Investigate a bug
  triage-swarm "Why is the API returning 500 errors on /users?"

  # With verbose output
  triage-swarm -v "Analyze the authentication flow"

  # Run investigations only (no evaluation)
  triage-swarm -i "Search for memory leaks"

  # From stdin
  echo "Fix the login bug" | triage-swarm
"""


def _positive_int(value: str) -> int:
    """argparse type for millisecond budgets."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError("Must be a positive number")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="triage-swarm",
        usage="%(prog)s [options] PROMPT\n       echo PROMPT | %(prog)s [options]",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "prompt",
        nargs="*",
        help="Problem statement (read from stdin when omitted)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=_positive_int,
        metavar="MILLISECONDS",
        help="Investigation timeout in milliseconds (default: 600000)",
    )
    parser.add_argument(
        "-e",
        "--eval-timeout",
        type=_positive_int,
        metavar="MILLISECONDS",
        help="Evaluation timeout in milliseconds (default: 600000)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress messages",
    )
    parser.add_argument(
        "-i",
        "--investigations-only",
        action="store_true",
        help="Run investigations only (skip evaluation)",
    )
    parser.add_argument(
        "--project-dir",
        type=str,
        default=None,
        help="Directory the investigators run in (default: current)",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Plain text output without colors or panels",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Also write progress logs to this directory",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that the investigator and evaluator CLIs are installed",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def has_stdin_data() -> bool:
    """Check if stdin is piped rather than an interactive terminal."""
    try:
        return sys.stdin is not None and not sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def get_prompt(arguments: Sequence[str]) -> Optional[str]:
    """Get the prompt from command-line arguments or stdin.

    Returns:
        The prompt, or None if neither source provided any text
    """
    if arguments:
        prompt = " ".join(arguments).strip()
    elif has_stdin_data():
        prompt = sys.stdin.read().strip()
    else:
        return None
    return prompt or None


def build_config(args: argparse.Namespace) -> TriageConfig:
    """Load file and environment configuration, then apply CLI flags."""
    config = load_config(args.project_dir)

    if args.timeout is not None:
        config.timeouts.investigation_ms = args.timeout
    if args.eval_timeout is not None:
        config.timeouts.evaluation_ms = args.eval_timeout
    config.verbose = args.verbose
    config.investigations_only = args.investigations_only

    return config


def check_clis(config: TriageConfig) -> dict[str, bool]:
    """Report whether each configured CLI can be executed."""
    agents = [*create_investigators(config), create_evaluator(config)]
    return {
        f"{agent.name} ({agent.get_cli_command()})": agent.check_available()
        for agent in agents
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Process exit code: 0 on success, 1 on usage errors or a failed evaluation
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.project_dir and not Path(args.project_dir).is_dir():
        print(f"Error: Project directory not found: {args.project_dir}", file=sys.stderr)
        return 1

    load_env(start=Path(args.project_dir) if args.project_dir else None)
    config = build_config(args)

    if args.debug:
        log_level = LogLevel.DEBUG
    elif args.verbose:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.WARNING
    logger = TriageLogger(log_dir=args.log_dir, min_level=log_level)

    display = PlaintextReportDisplay() if args.plain else create_display()

    if args.check:
        availability = check_clis(config)
        display.show_availability(availability)
        return 0 if all(availability.values()) else 1

    prompt = get_prompt(args.prompt)
    if not prompt:
        print("Error: No prompt provided", file=sys.stderr)
        print("Provide a prompt as an argument or via stdin", file=sys.stderr)
        print(file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    logger.banner(f"triage-swarm {__version__}")
    if args.investigations_only:
        logger.info("Running investigations in parallel...")

    pipeline = TriagePipeline(config, logger=logger)
    try:
        report = pipeline.run(prompt)
    except KeyboardInterrupt:
        logger.error("Interrupted, investigators terminated")
        return 130

    if report.evaluation is None:
        display.show_summary(report.investigations)
        display.show_reports(report.investigations)
        return 0

    if config.verbose:
        display.show_summary(report.investigations)
    display.show_evaluation(report.evaluation)

    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
