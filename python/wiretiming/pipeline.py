"""End-to-end timing analysis over a pair of packet-dissection exports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .config import AnalysisConfig, Window
from .packet_table import load_packet_csv
from .report import report_summary, report_table
from .summary_statistics import SummaryStats, summarize
from .table import Table
from .transactions import (
    DELTA_COLUMN,
    Role,
    check_alignment,
    inter_request_intervals,
    join_transactions,
    normalize,
    response_times,
)
from .visualizer import plot_histogram, save_figure

logger = logging.getLogger(__name__)

INTERVAL_LABEL = "Transmission DeltaT Results"
RESPONSE_LABEL = "Online Command Response DeltaT Results"


@dataclass
class AnalysisResult:
    xmit: Table
    recv: Table
    transactions: Table
    intervals: Table
    responses: Table
    interval_stats: SummaryStats
    response_stats: SummaryStats
    interval_figure: Optional[Figure] = None
    response_figure: Optional[Figure] = None


def run_analysis(config: AnalysisConfig, stream: Optional[TextIO] = None) -> AnalysisResult:
    """Load both exports, pair them, and summarize both timing distributions."""

    config.validate()
    verbose = config.verbose

    xmit_packets = load_packet_csv(config.xmit_path)
    report_table("Transmitted packets", xmit_packets, verbose, stream)
    recv_packets = load_packet_csv(config.recv_path)
    report_table("Received packets", recv_packets, verbose, stream)
    logger.info(
        "Loaded %d transmitted and %d received packets",
        len(xmit_packets),
        len(recv_packets),
    )

    xmit = normalize(xmit_packets, Role.XMIT)
    report_table("Transmit data", xmit, verbose, stream)
    recv = normalize(recv_packets, Role.RECV)
    report_table("Receive data", recv, verbose, stream)

    check_alignment(xmit, recv, strict=config.strict_alignment)
    transactions = join_transactions(xmit, recv)
    report_table("Transactions", transactions, verbose, stream)

    intervals = inter_request_intervals(xmit, config.interval_cutoff_ms)
    report_table("Transmit deltaT", intervals, verbose, stream)
    interval_stats = summarize(
        intervals.column(Role.XMIT.time_column), config.margin_mode, config.confidence
    )
    report_summary(INTERVAL_LABEL, interval_stats, verbose, stream)

    responses = response_times(transactions, config.response_ceiling_ms)
    report_table("Online response times", responses, verbose, stream)
    response_stats = summarize(
        responses.column(DELTA_COLUMN), config.margin_mode, config.confidence
    )
    report_summary(RESPONSE_LABEL, response_stats, verbose, stream)
    logger.info(
        "Paired %d transactions; %d intervals and %d responses kept",
        len(transactions),
        len(intervals),
        len(responses),
    )

    interval_figure = plot_histogram(
        intervals.column(Role.XMIT.time_column),
        bin_width=config.interval_bin_width,
        window=_window(config.interval_window, interval_stats),
        title="Time Difference Distribution",
        subtitle="Transmission of Online Commands",
    )
    response_figure = plot_histogram(
        responses.column(DELTA_COLUMN),
        bin_width=config.response_bin_width,
        window=_window(config.response_window, response_stats),
        title="Response Time Distribution",
        subtitle="Response Time of Online Commands",
    )

    if config.save_dir is not None:
        save_figure(interval_figure, config.save_dir / "inter_request_intervals.png")
        save_figure(response_figure, config.save_dir / "response_times.png")
    if config.show:
        plt.show()

    return AnalysisResult(
        xmit=xmit,
        recv=recv,
        transactions=transactions,
        intervals=intervals,
        responses=responses,
        interval_stats=interval_stats,
        response_stats=response_stats,
        interval_figure=interval_figure,
        response_figure=response_figure,
    )


def _window(explicit: Optional[Window], stats: SummaryStats) -> Window:
    if explicit is not None:
        return explicit
    return (stats.lower, stats.upper)


__all__ = ["AnalysisResult", "INTERVAL_LABEL", "RESPONSE_LABEL", "run_analysis"]
