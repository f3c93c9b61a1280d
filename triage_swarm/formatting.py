"""Plain-text rendering of investigation results.

The same block layout serves two audiences. People see the real tool
names; the evaluator sees neutral aliases so that its synthesis is not
swayed by what it believes about a particular model.
"""

from typing import Callable, Iterable

from .models import InvestigationResult, InvestigatorId

NameResolver = Callable[[str], str]

ALIASES: dict[str, str] = {
    InvestigatorId.CLAUDE.value: "Investigator A",
    InvestigatorId.GEMINI.value: "Investigator B",
    InvestigatorId.CODEX.value: "Investigator C",
}
UNKNOWN_ALIAS = "Unknown"

SEPARATOR = "\n---\n\n"


def real_name(source: str) -> str:
    """Header name showing the actual tool."""
    return source.upper()


def alias_name(source: str) -> str:
    """Header name hiding the actual tool."""
    return ALIASES.get(source, UNKNOWN_ALIAS)


def format_duration(duration_ms: int) -> str:
    """Render milliseconds as seconds with one decimal, e.g. 1500 -> "1.5s"."""
    return f"{duration_ms / 1000.0:.1f}s"


def format_body(result: InvestigationResult) -> str:
    """Report body for one result.

    Only the exit code decides between the plain and the ERROR branch;
    a failed call still shows whatever output it produced.
    """
    if result.exit_code == 0:
        return result.output
    return f"ERROR: {result.error}\n{result.output}"


def format_result(result: InvestigationResult, resolve_name: NameResolver = real_name) -> str:
    """Render one result as a report block."""
    return (
        f"## {resolve_name(result.source)} Investigation\n"
        f"Duration: {format_duration(result.duration_ms)} | Exit: {result.exit_code}\n"
        f"\n"
        f"{format_body(result)}\n"
    )


def format_all_results(results: Iterable[InvestigationResult], anonymize: bool = False) -> str:
    """Render every result, separated by a horizontal rule.

    Args:
        results: Results in dispatch order
        anonymize: Replace tool names with aliases (for the evaluator)

    Returns:
        The joined report text
    """
    resolve_name = alias_name if anonymize else real_name
    return SEPARATOR.join(format_result(result, resolve_name) for result in results)


def format_summary_line(result: InvestigationResult) -> str:
    """One status line per investigator, e.g. "  CLAUDE: OK (1.5s)"."""
    status = "OK" if result.success else "FAILED"
    return f"  {real_name(result.source)}: {status} ({format_duration(result.duration_ms)})"
