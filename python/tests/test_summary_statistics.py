import math

import pytest

from wiretiming.summary_statistics import (
    MarginMode,
    SummaryStatistics,
    confidence_margin,
    critical_value,
    summarize,
)


def test_summarize_known_fixture():
    stats = summarize([1.0, 2.0, 3.0, 4.0, 5.0])

    assert stats.mean == pytest.approx(3.0)
    assert stats.sd == pytest.approx(1.5811, abs=1e-4)
    assert stats.n == 5
    assert stats.minimum == 1.0
    assert stats.maximum == 5.0

    expected_margin = 1.959964 * math.sqrt(2.5) / math.sqrt(5)
    assert stats.margin == pytest.approx(expected_margin, rel=1e-6)
    assert stats.lower == pytest.approx(3.0 - expected_margin)
    assert stats.upper == pytest.approx(3.0 + expected_margin)


def test_legacy_margin_ignores_spread_and_sample_size():
    narrow = summarize([10.0, 10.1, 9.9], MarginMode.LEGACY)
    wide = summarize([0.0, 100.0, 50.0, 25.0, 75.0], MarginMode.LEGACY)

    assert narrow.margin == pytest.approx(1.959964, rel=1e-6)
    assert wide.margin == pytest.approx(narrow.margin)
    assert narrow.lower == pytest.approx(narrow.mean - 1.959964, rel=1e-6)


def test_critical_value_follows_confidence():
    assert critical_value(0.95) == pytest.approx(1.959964, rel=1e-6)
    assert critical_value(0.99) == pytest.approx(2.575829, rel=1e-6)
    with pytest.raises(ValueError):
        critical_value(1.0)


def test_empty_input_yields_nan():
    stats = summarize([])

    assert stats.n == 0
    for value in (stats.mean, stats.sd, stats.margin, stats.lower, stats.upper, stats.minimum, stats.maximum):
        assert math.isnan(value)


def test_single_value_has_no_spread():
    stats = summarize([4.2])

    assert stats.mean == pytest.approx(4.2)
    assert math.isnan(stats.sd)
    assert math.isnan(stats.margin)
    assert math.isnan(confidence_margin(stats.sd, stats.n, MarginMode.LEGACY))


def test_constant_input_has_zero_deviation():
    stats = summarize([100.0] * 50)

    assert stats.sd == 0.0
    assert stats.margin == 0.0
    assert stats.lower == stats.upper == 100.0


def test_incremental_aggregator_matches_batch():
    aggregator = SummaryStatistics()
    for value in (3.0, 1.0, 2.0):
        aggregator.add_value(value)

    assert aggregator.n == 3
    assert aggregator.mean == pytest.approx(2.0)
    assert aggregator.variance == pytest.approx(1.0)
    assert aggregator.minimum == 1.0
    assert aggregator.maximum == 3.0
    assert aggregator.describe() == summarize([3.0, 1.0, 2.0])
