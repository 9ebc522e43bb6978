import io

from wiretiming.report import format_summary, report_summary, report_table
from wiretiming.summary_statistics import summarize
from wiretiming.table import Table


def test_format_summary_lists_every_statistic():
    text = format_summary("Response Results", summarize([1.0, 2.0, 3.0, 4.0, 5.0]))
    lines = text.splitlines()

    assert lines[0] == "Response Results"
    assert lines[1] == "Mean  = 3"
    assert lines[3] == "N     = 5"
    assert [line.split("=")[0].strip() for line in lines[1:]] == [
        "Mean",
        "Sd",
        "N",
        "Error",
        "Lower",
        "Upper",
        "Min",
        "Max",
    ]


def test_format_summary_without_range():
    text = format_summary("x", summarize([1.0, 2.0]), include_range=False)
    assert "Min" not in text
    assert "Max" not in text


def test_verbose_flag_gates_console_output():
    stats = summarize([1.0, 2.0])
    table = Table.from_columns({"a": [1, 2]})

    quiet = io.StringIO()
    report_summary("label", stats, False, quiet)
    report_table("label", table, False, quiet)
    assert quiet.getvalue() == ""

    loud = io.StringIO()
    report_summary("label", stats, True, loud)
    report_table("Transactions", table, True, loud, n=1)
    output = loud.getvalue()
    assert "Mean  = 1.5" in output
    assert "Transactions (2 rows)" in output
