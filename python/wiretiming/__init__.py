"""Timing analysis of paired command/response packets from Wireshark exports."""

from .config import AnalysisConfig
from .packet_table import PacketRecord, PacketSchemaError, load_packet_csv, packet_records
from .pipeline import AnalysisResult, run_analysis
from .report import format_summary, report_summary, report_table
from .summary_statistics import (
    MarginMode,
    SummaryStatistics,
    SummaryStats,
    confidence_margin,
    critical_value,
    summarize,
)
from .table import MissingColumnError, Table
from .transactions import (
    NormalizedRecord,
    Role,
    TransactionAlignmentError,
    TransactionRecord,
    check_alignment,
    filter_threshold,
    inter_request_intervals,
    join_transactions,
    normalize,
    normalized_records,
    response_times,
    successive_differences,
    transaction_records,
)
from .visualizer import histogram_edges, plot_histogram, save_figure

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "MarginMode",
    "MissingColumnError",
    "NormalizedRecord",
    "PacketRecord",
    "PacketSchemaError",
    "Role",
    "SummaryStatistics",
    "SummaryStats",
    "Table",
    "TransactionAlignmentError",
    "TransactionRecord",
    "check_alignment",
    "confidence_margin",
    "critical_value",
    "filter_threshold",
    "format_summary",
    "histogram_edges",
    "inter_request_intervals",
    "join_transactions",
    "load_packet_csv",
    "normalize",
    "normalized_records",
    "packet_records",
    "plot_histogram",
    "report_summary",
    "report_table",
    "response_times",
    "run_analysis",
    "save_figure",
    "successive_differences",
    "summarize",
    "transaction_records",
]
