"""Normalization and pairing of transmitted/received packet tables.

A *transaction* is one transmitted command paired with the response that
answers it. Exports carry no key linking the two, so pairing is positional:
row N of the transmit export is taken to answer row N of the receive export.
Callers are responsible for filtering both captures consistently upstream;
:func:`check_alignment` can flag the obvious case of unequal row counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import List, Mapping, Optional

import numpy as np

from .packet_table import SEQ_COLUMN, TIME_COLUMN
from .table import Table

logger = logging.getLogger(__name__)

INDEX_COLUMN = "TransactionIndex"
DELTA_COLUMN = "DeltaTms"
MS_PER_SECOND = 1000.0


@unique
class Role(Enum):
    XMIT = ("XmitSeqNo", "XmitTimeMs")
    RECV = ("RecvSeqNo", "RecvTimeMs")

    def __init__(self, seq_column: str, time_column: str) -> None:
        self.seq_column = seq_column
        self.time_column = time_column

    @property
    def columns(self):
        return (INDEX_COLUMN, self.seq_column, self.time_column)


TRANSACTION_COLUMNS = (
    INDEX_COLUMN,
    Role.XMIT.seq_column,
    Role.RECV.seq_column,
    Role.XMIT.time_column,
    Role.RECV.time_column,
    DELTA_COLUMN,
)


class TransactionAlignmentError(ValueError):
    """Raised when strict alignment is requested and the exports disagree."""


@dataclass(frozen=True)
class NormalizedRecord:
    transaction_index: int
    seq_no: int
    time_ms: float


@dataclass(frozen=True)
class TransactionRecord:
    transaction_index: int
    xmit_seq_no: int
    recv_seq_no: int
    xmit_time_ms: float
    recv_time_ms: float
    delta_t_ms: float

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> "TransactionRecord":
        return cls(
            transaction_index=int(row[INDEX_COLUMN]),
            xmit_seq_no=int(row[Role.XMIT.seq_column]),
            recv_seq_no=int(row[Role.RECV.seq_column]),
            xmit_time_ms=float(row[Role.XMIT.time_column]),
            recv_time_ms=float(row[Role.RECV.time_column]),
            delta_t_ms=float(row[DELTA_COLUMN]),
        )


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


def normalize(packets: Table, role: Role) -> Table:
    """Project a raw export to ``TransactionIndex``, sequence number and ms time.

    ``TransactionIndex`` is 1..N in read order. No rows are dropped.
    """

    seq = packets.column(SEQ_COLUMN)
    time_s = packets.column(TIME_COLUMN)
    return Table.from_columns(
        {
            INDEX_COLUMN: np.arange(1, len(packets) + 1, dtype=np.int64),
            role.seq_column: seq,
            role.time_column: time_s * MS_PER_SECOND,
        }
    )


def normalized_records(table: Table, role: Role) -> List[NormalizedRecord]:
    return [
        NormalizedRecord(
            transaction_index=int(row[INDEX_COLUMN]),
            seq_no=int(row[role.seq_column]),
            time_ms=float(row[role.time_column]),
        )
        for row in table.rows()
    ]


# ---------------------------------------------------------------------------
# Joiner
# ---------------------------------------------------------------------------


def check_alignment(xmit: Table, recv: Table, *, strict: bool = False) -> bool:
    """Return ``True`` when both normalized tables have the same row count."""

    if len(xmit) == len(recv):
        return True
    message = (
        f"transmit export has {len(xmit)} rows but receive export has {len(recv)}; "
        "only the first rows of each will be paired"
    )
    if strict:
        raise TransactionAlignmentError(message)
    logger.warning(message)
    return False


def join_transactions(xmit: Table, recv: Table) -> Table:
    """Inner-join normalized transmit and receive tables on ``TransactionIndex``.

    Rows without a counterpart are dropped. The result is ordered by
    ``TransactionIndex`` and carries ``DeltaTms = RecvTimeMs - XmitTimeMs``.
    """

    _, xmit_rows, recv_rows = np.intersect1d(
        xmit.column(INDEX_COLUMN),
        recv.column(INDEX_COLUMN),
        assume_unique=True,
        return_indices=True,
    )
    left = xmit.take(xmit_rows)
    right = recv.take(recv_rows)

    xmit_time = left.column(Role.XMIT.time_column)
    recv_time = right.column(Role.RECV.time_column)
    joined = Table.from_columns(
        {
            INDEX_COLUMN: left.column(INDEX_COLUMN),
            Role.XMIT.seq_column: left.column(Role.XMIT.seq_column),
            Role.RECV.seq_column: right.column(Role.RECV.seq_column),
            Role.XMIT.time_column: xmit_time,
            Role.RECV.time_column: recv_time,
            DELTA_COLUMN: recv_time - xmit_time,
        }
    )
    logger.debug(
        "Joined %d transmit and %d receive rows into %d transactions",
        len(xmit),
        len(recv),
        len(joined),
    )
    return joined


def transaction_records(table: Table) -> List[TransactionRecord]:
    return [TransactionRecord.from_row(row) for row in table.rows()]


# ---------------------------------------------------------------------------
# Derived measurements
# ---------------------------------------------------------------------------


def successive_differences(table: Table) -> Table:
    """Row ``i + 1`` minus row ``i`` for every column (N - 1 rows)."""

    return Table.from_columns(
        {name: np.diff(table.column(name)) for name in table.columns}
    )


def filter_threshold(
    table: Table,
    column: str,
    threshold: float,
    *,
    inclusive: bool = True,
) -> Table:
    """Keep rows whose ``column`` is below ``threshold``, preserving order.

    ``inclusive`` keeps values equal to the threshold.
    """

    values = table.column(column)
    mask = values <= threshold if inclusive else values < threshold
    kept = table.filter(mask)
    dropped = len(table) - len(kept)
    if dropped:
        logger.debug("Dropped %d rows with %s above %g", dropped, column, threshold)
    return kept


def inter_request_intervals(xmit: Table, cutoff_ms: Optional[float] = 200.0) -> Table:
    """Gaps between successive transmitted commands, in milliseconds.

    Only ``XmitTimeMs`` of the result is meaningful; the index and sequence
    columns are differences of counters. Gaps exceeding ``cutoff_ms`` are
    discarded as capture artifacts; ``None`` keeps every gap.
    """

    gaps = successive_differences(xmit)
    if cutoff_ms is None:
        return gaps
    return filter_threshold(gaps, Role.XMIT.time_column, cutoff_ms, inclusive=True)


def response_times(
    transactions: Table,
    ceiling_ms: Optional[float] = 1000.0,
    *,
    keep_index: bool = True,
) -> Table:
    """Device response latency per transaction, in milliseconds.

    ``ceiling_ms`` guards against nonsensical deltas caused by misaligned
    pairs; rows above it are dropped.
    """

    names = (INDEX_COLUMN, DELTA_COLUMN) if keep_index else (DELTA_COLUMN,)
    selected = transactions.select(*names)
    if ceiling_ms is None:
        return selected
    return filter_threshold(selected, DELTA_COLUMN, ceiling_ms, inclusive=True)


__all__ = [
    "DELTA_COLUMN",
    "INDEX_COLUMN",
    "NormalizedRecord",
    "Role",
    "TRANSACTION_COLUMNS",
    "TransactionAlignmentError",
    "TransactionRecord",
    "check_alignment",
    "filter_threshold",
    "inter_request_intervals",
    "join_transactions",
    "normalize",
    "normalized_records",
    "response_times",
    "successive_differences",
    "transaction_records",
]
