"""Report lines and batch summaries."""

from collections import Counter
from typing import Dict, Iterable

from .pipeline import FileResult
from .policy import Outcome

LABEL_WIDTH = 8


def format_report_line(result: FileResult) -> str:
    """Format one result as ``<label right-aligned to 8> - <file name>``.
    
    Failures carry the error message after the name.
    
    Example: an OK result for "a[A1B2C3D4].zip" gives
    "      OK - a[A1B2C3D4].zip".
    """
    line = f"{result.outcome.value:>{LABEL_WIDTH}} - {result.name}"
    if result.failed and result.error:
        line = f"{line}: {result.error}"
    return line


def summarize(results: Iterable[FileResult]) -> Dict[str, int]:
    """Count results per outcome.
    
    Returns:
        Dict with one key per outcome (lowercase) plus 'total'
    """
    counts = Counter(result.outcome for result in results)
    summary = {outcome.value.lower(): counts.get(outcome, 0) for outcome in Outcome}
    summary['total'] = sum(counts.values())
    return summary


def format_summary(summary: Dict[str, int], cancelled: int = 0) -> str:
    """Format a summary dict as a single human-readable line."""
    parts = [f"{summary['total']} files"]
    parts.extend(
        f"{summary[outcome.value.lower()]} {outcome.value.lower()}"
        for outcome in Outcome
        if summary[outcome.value.lower()]
    )
    if cancelled:
        parts.append(f"{cancelled} cancelled")
    return ", ".join(parts)
