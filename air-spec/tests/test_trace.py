"""Tests for TraceMatrix and RowView."""

import numpy as np
import pytest

from primitives.errors import ConfigurationError
from primitives.field import FF
from primitives.trace import TraceMatrix


def _trace(height: int = 4) -> TraceMatrix:
    return TraceMatrix.from_rows(FF, [[i, 10 * i] for i in range(height)])


def test_shape_properties() -> None:
    trace = _trace()
    assert trace.height == 4
    assert trace.width == 2
    assert trace.field is FF


def test_empty_trace_rejected() -> None:
    with pytest.raises(ConfigurationError):
        TraceMatrix(FF.Zeros((0, 2)))
    with pytest.raises(ConfigurationError):
        TraceMatrix.from_rows(FF, [])


def test_non_2d_rejected() -> None:
    with pytest.raises(ConfigurationError):
        TraceMatrix(FF([1, 2, 3]))


def test_ragged_rows_rejected() -> None:
    with pytest.raises(ConfigurationError):
        TraceMatrix.from_rows(FF, [[1, 2], [3]])


def test_row_view_wraps_to_first_row() -> None:
    trace = _trace()
    view = trace.row_view(3)
    assert [int(v) for v in view.local] == [3, 30]
    assert [int(v) for v in view.next] == [0, 0]


def test_row_view_single_row_is_its_own_next() -> None:
    trace = TraceMatrix.from_rows(FF, [[5, 6]])
    view = trace.row_view(0)
    assert np.array_equal(view.local, view.next)


def test_row_view_offset_outside_window() -> None:
    with pytest.raises(IndexError):
        _trace().row_view(0).row_slice(2)


def test_trace_is_read_only() -> None:
    trace = _trace()
    with pytest.raises(ValueError):
        trace.values[0, 0] = FF(9)
    with pytest.raises(ValueError):
        trace.row(1)[0] = FF(9)


def test_with_value_returns_modified_copy() -> None:
    trace = _trace()
    modified = trace.with_value(2, 1, 99)
    assert int(modified.values[2, 1]) == 99
    assert int(trace.values[2, 1]) == 20
    assert modified != trace
    assert modified.with_value(2, 1, 20) == trace


def test_source_array_not_aliased() -> None:
    values = FF([[1, 2], [3, 4]])
    trace = TraceMatrix(values)
    values[0, 0] = FF(7)
    assert int(trace.values[0, 0]) == 1


def test_to_lists() -> None:
    assert _trace(2).to_lists() == [[0, 0], [1, 10]]
