import io

import pytest

from wiretiming.config import AnalysisConfig
from wiretiming.pipeline import INTERVAL_LABEL, RESPONSE_LABEL, run_analysis
from wiretiming.summary_statistics import MarginMode
from wiretiming.transactions import TransactionAlignmentError


def _config(tmp_path, write_export, xmit_times, recv_times, **overrides) -> AnalysisConfig:
    xmit = write_export(tmp_path / "xmit.csv", xmit_times, start_no=1)
    recv = write_export(tmp_path / "recv.csv", recv_times, start_no=2, info="AWRT e")
    settings = dict(xmit_path=xmit, recv_path=recv, verbose=False, show=False)
    settings.update(overrides)
    return AnalysisConfig(**settings)


def test_end_to_end_scenario(tmp_path, write_export):
    config = _config(
        tmp_path,
        write_export,
        [0.000, 0.100, 0.200],
        [0.0005, 0.1006, 0.2004],
    )

    result = run_analysis(config)

    assert result.transactions.column("DeltaTms").tolist() == pytest.approx([0.5, 0.6, 0.4])
    assert result.intervals.column("XmitTimeMs").tolist() == pytest.approx([100.0, 100.0])
    assert result.response_stats.n == 3
    assert result.response_stats.mean == pytest.approx(0.5)
    assert result.interval_stats.mean == pytest.approx(100.0)
    assert result.interval_figure is not None
    assert result.response_figure is not None


def test_response_window_defaults_to_confidence_bounds(tmp_path, write_export):
    config = _config(
        tmp_path,
        write_export,
        [0.000, 0.100, 0.200, 0.300],
        [0.0005, 0.1006, 0.2004, 0.3005],
        interval_window=(99.0, 101.0),
    )

    result = run_analysis(config)

    response_xlim = result.response_figure.axes[0].get_xlim()
    assert response_xlim == pytest.approx(
        (result.response_stats.lower, result.response_stats.upper)
    )
    assert result.interval_figure.axes[0].get_xlim() == pytest.approx((99.0, 101.0))


def test_filters_drop_outliers(tmp_path, write_export):
    config = _config(
        tmp_path,
        write_export,
        [0.0, 0.1, 0.6, 0.7],
        [0.001, 0.102, 2.0, 0.7015],
        response_ceiling_ms=5.0,
    )

    result = run_analysis(config)

    assert result.intervals.column("XmitTimeMs").tolist() == pytest.approx([100.0, 100.0])
    assert result.responses.column("TransactionIndex").tolist() == [1, 2, 4]
    assert result.response_stats.maximum == pytest.approx(2.0)


def test_verbose_report_includes_both_sections(tmp_path, write_export):
    config = _config(
        tmp_path,
        write_export,
        [0.0, 0.1, 0.2],
        [0.001, 0.101, 0.201],
        verbose=True,
        margin_mode=MarginMode.LEGACY,
    )
    stream = io.StringIO()

    result = run_analysis(config, stream)

    output = stream.getvalue()
    assert INTERVAL_LABEL in output
    assert RESPONSE_LABEL in output
    assert "Transactions (3 rows)" in output
    assert result.response_stats.margin == pytest.approx(1.959964, rel=1e-6)


def test_mismatched_exports_pair_leading_rows(tmp_path, write_export):
    config = _config(tmp_path, write_export, [0.0, 0.1, 0.2], [0.001, 0.101])

    result = run_analysis(config)

    assert len(result.transactions) == 2


def test_strict_alignment_rejects_mismatched_exports(tmp_path, write_export):
    config = _config(
        tmp_path,
        write_export,
        [0.0, 0.1, 0.2],
        [0.001, 0.101],
        strict_alignment=True,
    )

    with pytest.raises(TransactionAlignmentError):
        run_analysis(config)


def test_invalid_configuration_is_rejected(tmp_path, write_export):
    config = _config(tmp_path, write_export, [0.0], [0.001], response_bin_width=0.0)

    with pytest.raises(ValueError, match="bin widths"):
        run_analysis(config)


def test_save_dir_receives_both_histograms(tmp_path, write_export):
    out_dir = tmp_path / "plots"
    config = _config(
        tmp_path,
        write_export,
        [0.0, 0.1, 0.2],
        [0.001, 0.1012, 0.2009],
        save_dir=out_dir,
    )

    run_analysis(config)

    assert (out_dir / "inter_request_intervals.png").exists()
    assert (out_dir / "response_times.png").exists()
