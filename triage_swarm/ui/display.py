"""Rich-based report display.

Renders the investigation summary as a table, each report in its own
panel, and the evaluator's synthesis as Markdown.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..formatting import format_body, format_duration, real_name
from ..models import InvestigationResult


def _border(result: InvestigationResult) -> str:
    return "green" if result.success else "red"


class RichReportDisplay:
    """Report display for interactive terminals."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the display.

        Args:
            console: Rich console to render to (a stdout console if None)
        """
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def show_summary(self, results: Sequence[InvestigationResult]) -> None:
        """Render the per-investigator status table."""
        table = Table(title="Investigation Summary", title_style="bold cyan")
        table.add_column("Investigator", style="bold")
        table.add_column("Status")
        table.add_column("Duration", justify="right")
        table.add_column("Exit", justify="right")

        for result in results:
            status = Text("OK", style="green") if result.success else Text("FAILED", style="bold red")
            table.add_row(
                real_name(result.source),
                status,
                format_duration(result.duration_ms),
                str(result.exit_code),
            )

        self._console.print(table)

    def show_reports(self, results: Sequence[InvestigationResult]) -> None:
        """Render each report in a panel under the real tool name."""
        self._console.rule("[bold cyan]Investigation Reports[/bold cyan]")
        for result in results:
            # Text() keeps brackets in CLI output from being read as markup
            self._console.print(
                Panel(
                    Text(format_body(result)),
                    title=f"[bold]{real_name(result.source)} Investigation[/bold]",
                    subtitle=f"[dim]Duration: {format_duration(result.duration_ms)} | Exit: {result.exit_code}[/dim]",
                    border_style=_border(result),
                )
            )

    def show_evaluation(self, evaluation: InvestigationResult) -> None:
        """Render the synthesis as Markdown, or the failure text."""
        if evaluation.success:
            self._console.print(
                Panel(
                    Markdown(evaluation.output),
                    title="[bold cyan]Evaluation[/bold cyan]",
                    subtitle=f"[dim]{format_duration(evaluation.duration_ms)}[/dim]",
                    border_style="cyan",
                )
            )
        else:
            self._console.print(
                Panel(
                    Text(evaluation.error or f"Exit code: {evaluation.exit_code}"),
                    title="[bold red]Evaluation failed[/bold red]",
                    border_style="red",
                )
            )

    def show_availability(self, availability: dict[str, bool]) -> None:
        """Render which CLIs could be found."""
        table = Table(title="CLI Availability", title_style="bold cyan")
        table.add_column("CLI", style="bold")
        table.add_column("Status")
        for name, available in availability.items():
            table.add_row(
                name,
                Text("available", style="green") if available else Text("NOT FOUND", style="bold red"),
            )
        self._console.print(table)
