"""Immutable column-oriented tables backed by numpy arrays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

import numpy as np


class MissingColumnError(KeyError):
    """Raised when a table is asked for a column it does not carry."""


def _frozen(values) -> np.ndarray:
    array = np.array(values, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Table:
    """Ordered set of equally sized, read-only columns.

    Every transformation returns a new :class:`Table`; the arrays held by an
    instance are never written to.
    """

    columns: Tuple[str, ...]
    data: Mapping[str, np.ndarray]

    @classmethod
    def from_columns(cls, columns: Mapping[str, Sequence]) -> "Table":
        frozen: Dict[str, np.ndarray] = {}
        length = None
        for name, values in columns.items():
            array = _frozen(values)
            if array.ndim != 1:
                raise ValueError(f"column {name!r} must be one-dimensional")
            if length is None:
                length = len(array)
            elif len(array) != length:
                raise ValueError(
                    f"column {name!r} has {len(array)} rows, expected {length}"
                )
            frozen[name] = array
        return cls(columns=tuple(frozen), data=frozen)

    def __len__(self) -> int:
        if not self.columns:
            return 0
        return len(self.data[self.columns[0]])

    def __contains__(self, name: object) -> bool:
        return name in self.data

    def column(self, name: str) -> np.ndarray:
        try:
            return self.data[name]
        except KeyError:
            raise MissingColumnError(
                f"column {name!r} not present; available: {', '.join(self.columns)}"
            ) from None

    # Transformations -----------------------------------------------------

    def select(self, *names: str) -> "Table":
        return Table.from_columns({name: self.column(name) for name in names})

    def rename(self, mapping: Mapping[str, str]) -> "Table":
        for old in mapping:
            self.column(old)
        return Table.from_columns(
            {mapping.get(name, name): self.data[name] for name in self.columns}
        )

    def with_column(self, name: str, values: Sequence) -> "Table":
        columns = dict(self.data)
        columns[name] = values
        return Table.from_columns(columns)

    def filter(self, mask: Sequence[bool]) -> "Table":
        mask_array = np.asarray(mask, dtype=bool)
        if mask_array.shape != (len(self),):
            raise ValueError("mask length must match table length")
        return Table.from_columns(
            {name: self.data[name][mask_array] for name in self.columns}
        )

    def take(self, indices: Sequence[int]) -> "Table":
        index_array = np.asarray(indices, dtype=int)
        return Table.from_columns(
            {name: self.data[name][index_array] for name in self.columns}
        )

    def head(self, n: int = 6) -> "Table":
        return Table.from_columns({name: self.data[name][:n] for name in self.columns})

    def tail(self, n: int = 6) -> "Table":
        start = max(len(self) - n, 0)
        return Table.from_columns({name: self.data[name][start:] for name in self.columns})

    # Row access ----------------------------------------------------------

    def rows(self) -> Iterator[Dict[str, object]]:
        for index in range(len(self)):
            yield {name: _scalar(self.data[name][index]) for name in self.columns}

    def to_text(self) -> str:
        """Render the table as aligned plain text, one row per line."""

        cells: List[List[str]] = [list(self.columns)]
        for row in self.rows():
            cells.append([_format_cell(row[name]) for name in self.columns])
        widths = [max(len(line[i]) for line in cells) for i in range(len(self.columns))]
        return "\n".join(
            "  ".join(cell.rjust(width) for cell, width in zip(line, widths))
            for line in cells
        )


def _scalar(value: object) -> object:
    if isinstance(value, np.generic):
        return value.item()
    return value


def _format_cell(value: object) -> str:
    if isinstance(value, float):
        return f"{value:.10g}"
    return str(value)


__all__ = ["MissingColumnError", "Table"]
