"""Execution trace matrix and the cyclic row view used by constraint evaluation.

A TraceMatrix is a `height x width` grid of field elements stored as a 2-D
galois array. Row order is the temporal order of the computation. The
evaluation domain is cyclic: the row after the last one is row 0. That wrap is
computed in exactly one place, TraceMatrix.row_slice().
"""

from dataclasses import dataclass
from typing import Sequence

import galois
import numpy as np

from primitives.errors import ConfigurationError
from primitives.field import lift

# Rows visible to a transition constraint: local (offset 0) and next (offset 1)
WINDOW_SIZE = 2


@dataclass(frozen=True)
class RowView:
    """Read-only window of consecutive rows starting at some row of the trace.

    rows[0] is the local row, rows[1] the next one (wrapped to row 0 after
    the last row of the domain).
    """
    rows: tuple

    @property
    def local(self) -> galois.FieldArray:
        return self.rows[0]

    @property
    def next(self) -> galois.FieldArray:
        return self.rows[1]

    def row_slice(self, offset: int) -> galois.FieldArray:
        if not 0 <= offset < len(self.rows):
            raise IndexError(
                f"row offset {offset} outside window of {len(self.rows)} rows"
            )
        return self.rows[offset]


@dataclass(frozen=True, eq=False)
class TraceMatrix:
    """Row-major execution trace.

    Attributes:
        values: 2-D galois FieldArray of shape (height, width). Stored as a
            read-only copy, so every row handed out is read-only too.
    """
    values: galois.FieldArray

    def __post_init__(self):
        if not isinstance(self.values, galois.FieldArray):
            raise ConfigurationError(
                f"trace values must be a galois FieldArray, got {type(self.values).__name__}"
            )
        if self.values.ndim != 2:
            raise ConfigurationError(f"trace must be 2-D, got {self.values.ndim}-D")
        height, width = self.values.shape
        if height < 1:
            raise ConfigurationError("trace domain is empty (0 rows)")
        if width < 1:
            raise ConfigurationError("trace has no columns")
        frozen = self.values.copy()
        frozen.flags.writeable = False
        object.__setattr__(self, 'values', frozen)

    @classmethod
    def from_rows(cls, field, rows: Sequence[Sequence[int]]) -> 'TraceMatrix':
        """Build a trace from nested sequences of integers or field elements."""
        rows = [list(row) for row in rows]
        if not rows:
            raise ConfigurationError("trace domain is empty (0 rows)")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise ConfigurationError(f"rows have differing widths: {sorted(widths)}")
        values = field.Zeros((len(rows), widths.pop()))
        for i, row in enumerate(rows):
            for j, v in enumerate(row):
                values[i, j] = lift(field, v)
        return cls(values)

    @property
    def field(self):
        """The galois field class of the trace values."""
        return type(self.values)

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @property
    def width(self) -> int:
        return self.values.shape[1]

    def row(self, index: int) -> galois.FieldArray:
        return self.values[index]

    def column(self, index: int) -> galois.FieldArray:
        return self.values[:, index]

    def row_slice(self, row: int, offset: int = 0) -> galois.FieldArray:
        """Row at `row + offset` on the cyclic domain."""
        return self.values[(row + offset) % self.height]

    def row_view(self, row: int) -> RowView:
        return RowView(tuple(self.row_slice(row, k) for k in range(WINDOW_SIZE)))

    def with_value(self, row: int, col: int, value: int) -> 'TraceMatrix':
        """Copy of this trace with a single cell replaced."""
        values = self.values.copy()
        values.flags.writeable = True
        values[row, col] = lift(self.field, value)
        return TraceMatrix(values)

    def to_lists(self) -> list[list[int]]:
        return [[int(v) for v in row] for row in self.values]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TraceMatrix):
            return NotImplemented
        return (
            self.field is other.field
            and self.values.shape == other.values.shape
            and bool(np.all(self.values == other.values))
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"TraceMatrix(height={self.height}, width={self.width}, field={self.field.name})"
