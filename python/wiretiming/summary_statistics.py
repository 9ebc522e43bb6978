"""Descriptive statistics and normal-approximation confidence margins."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import nan, sqrt
from typing import Iterable, Optional

from scipy.stats import norm


class MarginMode(Enum):
    """How the confidence margin around the mean is computed.

    ``NORMAL`` is the usual ``z * sd / sqrt(N)`` half-width. ``LEGACY``
    reproduces the R expression ``qnorm(0.025, lower.tail = FALSE * sd /
    sqrt(N))`` the timing script historically used: the scaling term
    collapses into the ``lower.tail`` flag, so the margin is the bare
    quantile ``z`` regardless of spread or sample size.
    """

    NORMAL = "normal"
    LEGACY = "legacy"


@dataclass(frozen=True)
class SummaryStats:
    mean: float
    sd: float
    n: int
    margin: float
    lower: float
    upper: float
    minimum: float
    maximum: float


class SummaryStatistics:
    """Incremental aggregator for count, mean, sample variance and range."""

    __slots__ = ("_count", "_sum", "_sum_sq", "_min", "_max")

    def __init__(self) -> None:
        self._count: int = 0
        self._sum: float = 0.0
        self._sum_sq: float = 0.0
        self._min: Optional[float] = None
        self._max: Optional[float] = None

    def add_value(self, value: float) -> None:
        value = float(value)
        self._count += 1
        self._sum += value
        self._sum_sq += value * value
        self._min = value if self._min is None else min(self._min, value)
        self._max = value if self._max is None else max(self._max, value)

    def add_values(self, values: Iterable[float]) -> "SummaryStatistics":
        for value in values:
            self.add_value(value)
        return self

    @property
    def n(self) -> int:
        return self._count

    @property
    def mean(self) -> float:
        if self._count == 0:
            return nan
        return self._sum / self._count

    @property
    def variance(self) -> float:
        if self._count < 2:
            return nan
        mean_sq = (self._sum * self._sum) / self._count
        # Rounding can push the difference just below zero for constant input.
        return max(self._sum_sq - mean_sq, 0.0) / (self._count - 1)

    @property
    def standard_deviation(self) -> float:
        return sqrt(self.variance)

    @property
    def minimum(self) -> float:
        return nan if self._min is None else self._min

    @property
    def maximum(self) -> float:
        return nan if self._max is None else self._max

    def describe(
        self,
        margin_mode: MarginMode = MarginMode.NORMAL,
        confidence: float = 0.95,
    ) -> SummaryStats:
        mean = self.mean
        sd = self.standard_deviation
        margin = confidence_margin(sd, self._count, margin_mode, confidence)
        return SummaryStats(
            mean=mean,
            sd=sd,
            n=self._count,
            margin=margin,
            lower=mean - margin,
            upper=mean + margin,
            minimum=self.minimum,
            maximum=self.maximum,
        )


def critical_value(confidence: float = 0.95) -> float:
    """Two-sided standard normal quantile, 1.959964 for 95 %."""

    if not 0.0 < confidence < 1.0:
        raise ValueError("confidence must lie strictly between 0 and 1")
    alpha = 1.0 - confidence
    return float(norm.ppf(1.0 - alpha / 2.0))


def confidence_margin(
    sd: float,
    n: int,
    margin_mode: MarginMode = MarginMode.NORMAL,
    confidence: float = 0.95,
) -> float:
    z = critical_value(confidence)
    if n < 2 or sd != sd:
        return nan
    if margin_mode is MarginMode.LEGACY:
        return z
    return z * sd / sqrt(n)


def summarize(
    values: Iterable[float],
    margin_mode: MarginMode = MarginMode.NORMAL,
    confidence: float = 0.95,
) -> SummaryStats:
    return SummaryStatistics().add_values(values).describe(margin_mode, confidence)


__all__ = [
    "MarginMode",
    "SummaryStatistics",
    "SummaryStats",
    "confidence_margin",
    "critical_value",
    "summarize",
]
