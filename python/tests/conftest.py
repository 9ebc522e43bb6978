import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

HEADER = '"No.","Time","Source","Destination","Protocol","Length","Info"'


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def write_export():
    """Write a Wireshark-style packet-dissection CSV with the given timestamps."""

    def _write(path, times, *, start_no=1, step=2, info="AWRT K0"):
        lines = [HEADER]
        for offset, time in enumerate(times):
            lines.append(
                f'"{start_no + offset * step}","{time:.9f}","192.168.1.10",'
                f'"192.168.1.20","TCP","66","{info}"'
            )
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
