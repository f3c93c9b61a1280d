"""Parallel dispatch of the investigators."""

import concurrent.futures
import logging
from typing import Optional, Sequence

from .agents import DEFAULT_TIMEOUT_MS, BaseInvestigator, create_investigators
from .models import LAUNCH_FAILURE_EXIT_CODE, InvestigationResult

logger = logging.getLogger(__name__)


def run_investigators_parallel(
    prompt: str,
    timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS,
    investigators: Optional[Sequence[BaseInvestigator]] = None,
) -> list[InvestigationResult]:
    """Run all investigators concurrently against the same prompt.

    One thread per investigator; each thread owns its subprocess. The
    call blocks until every investigator has returned, and a failing
    investigator never cancels the others.

    Each investigator enforces ``timeout_ms`` on its own process, so the
    join below needs no timeout of its own.

    On KeyboardInterrupt every in-flight subprocess is killed before the
    interrupt propagates.

    Args:
        prompt: Raw problem statement
        timeout_ms: Per-investigator budget in milliseconds
        investigators: Investigators to run (default: claude, gemini, codex)

    Returns:
        One result per investigator, in the order the investigators were
        given, independent of completion order
    """
    investigators = list(investigators) if investigators is not None else create_investigators()
    if not investigators:
        return []

    results: list[Optional[InvestigationResult]] = [None] * len(investigators)

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=len(investigators),
        thread_name_prefix="investigator",
    ) as executor:
        future_to_slot = {
            executor.submit(investigator.run, prompt, timeout_ms): slot
            for slot, investigator in enumerate(investigators)
        }

        try:
            concurrent.futures.wait(
                future_to_slot.keys(),
                return_when=concurrent.futures.ALL_COMPLETED,
            )
        except KeyboardInterrupt:
            logger.warning("Interrupted, terminating investigators")
            for investigator in investigators:
                investigator.terminate()
            raise

        for future, slot in future_to_slot.items():
            investigator = investigators[slot]
            try:
                results[slot] = future.result()
            except Exception as e:
                # run() converts subprocess failures itself; this only
                # guards against bugs in an investigator implementation
                logger.error(f"{investigator.name} investigation failed: {type(e).__name__}: {e}")
                results[slot] = InvestigationResult(
                    source=investigator.name,
                    error=f"Investigation failed: {type(e).__name__}: {e}",
                    exit_code=LAUNCH_FAILURE_EXIT_CODE,
                )

    return results
