"""Run configuration for the timing analysis."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .summary_statistics import MarginMode

DEFAULT_XMIT_PATH = Path("./AWRT_Transmit_PacketDissections.csv")
DEFAULT_RECV_PATH = Path("./AWRT_Receive_PacketDissections.csv")

Window = Tuple[float, float]


@dataclass
class AnalysisConfig:
    """Settings for one run.

    A window of ``None`` zooms the histogram to the computed lower/upper
    confidence bounds. Thresholds of ``None`` disable the corresponding
    filter.
    """

    xmit_path: Path = DEFAULT_XMIT_PATH
    recv_path: Path = DEFAULT_RECV_PATH
    interval_cutoff_ms: Optional[float] = 200.0
    response_ceiling_ms: Optional[float] = 1000.0
    interval_bin_width: float = 0.02
    response_bin_width: float = 0.01
    interval_window: Optional[Window] = None
    response_window: Optional[Window] = None
    margin_mode: MarginMode = MarginMode.NORMAL
    confidence: float = 0.95
    strict_alignment: bool = False
    verbose: bool = True
    show: bool = True
    save_dir: Optional[Path] = None

    def validate(self) -> None:
        if self.interval_bin_width <= 0 or self.response_bin_width <= 0:
            raise ValueError("histogram bin widths must be greater than 0")
        if not 0.0 < self.confidence < 1.0:
            raise ValueError("confidence must lie strictly between 0 and 1")
        for name, window in (
            ("interval window", self.interval_window),
            ("response window", self.response_window),
        ):
            if window is not None and window[0] >= window[1]:
                raise ValueError(f"{name} lower bound must be below its upper bound")


__all__ = ["AnalysisConfig", "DEFAULT_RECV_PATH", "DEFAULT_XMIT_PATH", "Window"]
