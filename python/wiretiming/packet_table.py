"""CSV ingestion for Wireshark packet-dissection exports.

Wireshark's "Export Packet Dissections -> As CSV" writes one row per packet
with the summary columns ``No.``, ``Time``, ``Source``, ``Destination``,
``Protocol``, ``Length`` and ``Info``. Only ``No.`` and ``Time`` feed the
timing analysis; the descriptive columns are carried along as text so the
debug output still shows what each packet was.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Tuple, Union

import numpy as np

from .table import Table

logger = logging.getLogger(__name__)

SEQ_COLUMN = "No."
TIME_COLUMN = "Time"
DESCRIPTIVE_COLUMNS = ("Source", "Destination", "Protocol", "Length", "Info")
EXPECTED_COLUMNS = (SEQ_COLUMN, TIME_COLUMN) + DESCRIPTIVE_COLUMNS


class PacketSchemaError(ValueError):
    """Raised when an export does not carry the columns or values we need."""


@dataclass(frozen=True)
class PacketRecord:
    """One row of a packet-dissection export."""

    seq_no: int
    time: float
    source: str = ""
    destination: str = ""
    protocol: str = ""
    length: str = ""
    info: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> "PacketRecord":
        return cls(
            seq_no=int(row[SEQ_COLUMN]),
            time=float(row[TIME_COLUMN]),
            source=str(row.get("Source", "")),
            destination=str(row.get("Destination", "")),
            protocol=str(row.get("Protocol", "")),
            length=str(row.get("Length", "")),
            info=str(row.get("Info", "")),
        )


def load_packet_csv(path: Union[str, Path]) -> Table:
    """Read a packet-dissection CSV into a :class:`Table`.

    ``No.`` is parsed to integers and ``Time`` to floating point seconds.
    Column order in the file is irrelevant; columns are looked up by name.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    with path.open("r", newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise PacketSchemaError(f"CSV {path} is missing a header row")
        columns = tuple(name.strip() for name in reader.fieldnames)
        _check_columns(path, columns)

        values: Dict[str, List[object]] = {name: [] for name in columns}
        for line_no, row in enumerate(reader, start=2):
            for raw_name, name in zip(reader.fieldnames, columns):
                values[name].append(_convert(path, line_no, name, row.get(raw_name)))

    table = Table.from_columns(_typed_columns(columns, values))
    logger.debug("Loaded %s: %d packets, %d columns", path, len(table), len(columns))
    return table


def packet_records(table: Table) -> List[PacketRecord]:
    return [PacketRecord.from_row(row) for row in table.rows()]


def _check_columns(path: Path, columns: Tuple[str, ...]) -> None:
    missing = [name for name in (SEQ_COLUMN, TIME_COLUMN) if name not in columns]
    if missing:
        raise PacketSchemaError(
            f"CSV {path} is missing required column(s): {', '.join(missing)}"
        )
    absent = [name for name in DESCRIPTIVE_COLUMNS if name not in columns]
    if absent:
        logger.warning("CSV %s lacks descriptive column(s): %s", path, ", ".join(absent))


def _convert(path: Path, line_no: int, name: str, raw: object) -> object:
    text = raw.strip() if isinstance(raw, str) else ""
    if name == SEQ_COLUMN:
        try:
            return int(text)
        except ValueError:
            raise PacketSchemaError(
                f"{path}:{line_no}: {SEQ_COLUMN} value {text!r} is not an integer"
            ) from None
    if name == TIME_COLUMN:
        try:
            return float(text)
        except ValueError:
            raise PacketSchemaError(
                f"{path}:{line_no}: {TIME_COLUMN} value {text!r} is not a number"
            ) from None
    return text


def _typed_columns(columns: Tuple[str, ...], values: Dict[str, List[object]]) -> Dict[str, object]:
    typed: Dict[str, object] = {}
    for name in columns:
        if name == SEQ_COLUMN:
            typed[name] = np.asarray(values[name], dtype=np.int64)
        elif name == TIME_COLUMN:
            typed[name] = np.asarray(values[name], dtype=float)
        else:
            typed[name] = np.asarray(values[name], dtype=object)
    return typed


__all__ = [
    "DESCRIPTIVE_COLUMNS",
    "EXPECTED_COLUMNS",
    "PacketRecord",
    "PacketSchemaError",
    "SEQ_COLUMN",
    "TIME_COLUMN",
    "load_packet_csv",
    "packet_records",
]
