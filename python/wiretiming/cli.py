"""Command-line entry point for transmit/receive timing analysis."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_RECV_PATH, DEFAULT_XMIT_PATH, AnalysisConfig
from .packet_table import PacketSchemaError
from .pipeline import run_analysis
from .summary_statistics import MarginMode
from .transactions import TransactionAlignmentError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Pair Wireshark packet-dissection exports of transmitted commands and "
            "received responses, then summarize inter-request and response times."
        ),
    )
    parser.add_argument(
        "xmit_path",
        type=Path,
        nargs="?",
        default=DEFAULT_XMIT_PATH,
        help=f"CSV export of transmitted command packets (default: {DEFAULT_XMIT_PATH}).",
    )
    parser.add_argument(
        "recv_path",
        type=Path,
        nargs="?",
        default=DEFAULT_RECV_PATH,
        help=f"CSV export of received response packets (default: {DEFAULT_RECV_PATH}).",
    )
    parser.add_argument(
        "--interval-cutoff",
        type=float,
        default=200.0,
        metavar="MS",
        help="Discard inter-request gaps above this many ms (default: 200).",
    )
    parser.add_argument(
        "--no-interval-cutoff",
        action="store_true",
        help="Keep every inter-request gap.",
    )
    parser.add_argument(
        "--response-ceiling",
        type=float,
        default=1000.0,
        metavar="MS",
        help="Discard response times above this many ms (default: 1000).",
    )
    parser.add_argument(
        "--interval-bin-width",
        type=float,
        default=0.02,
        metavar="MS",
        help="Histogram bin width for inter-request gaps (default: 0.02).",
    )
    parser.add_argument(
        "--response-bin-width",
        type=float,
        default=0.01,
        metavar="MS",
        help="Histogram bin width for response times (default: 0.01).",
    )
    parser.add_argument(
        "--interval-window",
        type=float,
        nargs=2,
        metavar=("LOW", "HIGH"),
        help="Fixed x-axis window for the inter-request histogram.",
    )
    parser.add_argument(
        "--response-window",
        type=float,
        nargs=2,
        metavar=("LOW", "HIGH"),
        help="Fixed x-axis window for the response time histogram.",
    )
    parser.add_argument(
        "--margin-mode",
        choices=[mode.value for mode in MarginMode],
        default=MarginMode.NORMAL.value,
        help="'normal' for z*sd/sqrt(N); 'legacy' for the historical constant margin.",
    )
    parser.add_argument(
        "--confidence",
        type=float,
        default=0.95,
        help="Confidence level of the margin around the mean (default: 0.95).",
    )
    parser.add_argument(
        "--strict-alignment",
        action="store_true",
        help="Fail when the two exports have different row counts.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress the console summary report.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not open the histogram windows.",
    )
    parser.add_argument(
        "--save-dir",
        type=Path,
        help="Directory to write the histogram PNGs to.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Log level for diagnostic output.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> AnalysisConfig:
    return AnalysisConfig(
        xmit_path=args.xmit_path,
        recv_path=args.recv_path,
        interval_cutoff_ms=None if args.no_interval_cutoff else args.interval_cutoff,
        response_ceiling_ms=args.response_ceiling,
        interval_bin_width=args.interval_bin_width,
        response_bin_width=args.response_bin_width,
        interval_window=tuple(args.interval_window) if args.interval_window else None,
        response_window=tuple(args.response_window) if args.response_window else None,
        margin_mode=MarginMode(args.margin_mode),
        confidence=args.confidence,
        strict_alignment=args.strict_alignment,
        verbose=not args.quiet,
        show=not args.no_show,
        save_dir=args.save_dir,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    config = config_from_args(args)
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))

    try:
        run_analysis(config)
    except FileNotFoundError as exc:
        logger.error("Input file not found: %s", exc.filename or exc)
        return 1
    except (PacketSchemaError, TransactionAlignmentError) as exc:
        logger.error(str(exc))
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
