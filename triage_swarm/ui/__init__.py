"""UI module for rendering triage reports."""

from typing import Optional

from .display import RichReportDisplay
from .fallback import PlaintextReportDisplay, is_interactive


def create_display(
    interactive: Optional[bool] = None,
) -> "PlaintextReportDisplay | RichReportDisplay":
    """
    Create appropriate display based on environment.

    Args:
        interactive: Force interactive mode (auto-detect if None)

    Returns:
        Display instance
    """
    if interactive is None:
        interactive = is_interactive()

    if interactive:
        return RichReportDisplay()
    else:
        return PlaintextReportDisplay()


__all__ = [
    "create_display",
    "is_interactive",
    "PlaintextReportDisplay",
    "RichReportDisplay",
]
