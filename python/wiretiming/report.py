"""Console reporting for summary statistics and intermediate tables."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .summary_statistics import SummaryStats
from .table import Table


def format_summary(label: str, stats: SummaryStats, *, include_range: bool = True) -> str:
    lines: List[str] = [
        label,
        f"Mean  = {stats.mean:.6g}",
        f"Sd    = {stats.sd:.6g}",
        f"N     = {stats.n}",
        f"Error = {stats.margin:.6g}",
        f"Lower = {stats.lower:.6g}",
        f"Upper = {stats.upper:.6g}",
    ]
    if include_range:
        lines.append(f"Min   = {stats.minimum:.6g}")
        lines.append(f"Max   = {stats.maximum:.6g}")
    return "\n".join(lines)


def report_summary(
    label: str,
    stats: SummaryStats,
    verbose: bool,
    stream: Optional[TextIO] = None,
    *,
    include_range: bool = True,
) -> None:
    """Write the summary block for ``label`` when ``verbose`` is set."""

    if not verbose:
        return
    out = stream if stream is not None else sys.stdout
    out.write("\n" + format_summary(label, stats, include_range=include_range) + "\n")


def report_table(
    label: str,
    table: Table,
    verbose: bool,
    stream: Optional[TextIO] = None,
    n: int = 6,
) -> None:
    """Write the first ``n`` rows of an intermediate table when ``verbose`` is set."""

    if not verbose:
        return
    out = stream if stream is not None else sys.stdout
    out.write(f"\n{label} ({len(table)} rows)\n{table.head(n).to_text()}\n")


__all__ = ["format_summary", "report_summary", "report_table"]
