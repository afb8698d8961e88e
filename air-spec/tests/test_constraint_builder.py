"""Tests for ConstraintBuilder scoping, assertion registration and selectors."""

import pytest

from constraints.base import (
    Air,
    ConstraintBuilder,
    ConstraintId,
    Selector,
    scope_active,
    selector_values,
)
from protocol.symbolic import Constant, Mul, Sub, SymbolicConstraintBuilder, Variable


def test_constraint_builder_is_abstract() -> None:
    with pytest.raises(TypeError):
        ConstraintBuilder()


def test_air_is_abstract() -> None:
    class Incomplete(Air):
        def width(self) -> int:
            return 1

    with pytest.raises(TypeError):
        Incomplete()


def test_unscoped_assertion_is_unconditional() -> None:
    builder = SymbolicConstraintBuilder(width=1, num_public_values=0)
    builder.assert_zero(builder.local()[0])
    (c,) = builder.constraints
    assert c.scope == ()
    assert c.scope_name == 'always'


def test_assert_bool_registers_x_times_x_minus_one() -> None:
    builder = SymbolicConstraintBuilder(width=1, num_public_values=0)
    x = builder.local()[0]
    builder.when_transition().assert_bool(x)
    (c,) = builder.constraints
    assert c.scope == (Selector.TRANSITION,)
    assert c.value == Mul(Variable(0, 0), Sub(Variable(0, 0), Constant(1)))


def test_assert_eq_registers_difference() -> None:
    builder = SymbolicConstraintBuilder(width=2, num_public_values=0)
    local = builder.local()
    builder.when_last_row().assert_eq(local[0], local[1])
    (c,) = builder.constraints
    assert c.value == Sub(Variable(0, 0), Variable(0, 1))


def test_registration_order_is_global_across_scopes() -> None:
    builder = SymbolicConstraintBuilder(width=1, num_public_values=0)
    x = builder.local()[0]
    a = builder.when_first_row().assert_zero(x, 'a')
    b = builder.assert_zero(x)
    c = builder.when_last_row().assert_one(x, 'c')
    assert (a, b, c) == (ConstraintId(0, 'a'), ConstraintId(1), ConstraintId(2, 'c'))
    assert [str(cid) for cid in (a, b, c)] == ['#0 (a)', '#1', '#2 (c)']
    assert [c.scope for c in builder.constraints] == [
        (Selector.FIRST_ROW,), (), (Selector.LAST_ROW,),
    ]


def test_nested_scopes_conjoin() -> None:
    builder = SymbolicConstraintBuilder(width=1, num_public_values=0)
    x = builder.local()[0]
    builder.when_first_row().when_last_row().assert_zero(x)
    builder.when_transition().when_transition().assert_zero(x)
    first, second = builder.constraints
    assert first.scope == (Selector.FIRST_ROW, Selector.LAST_ROW)
    assert first.scope_name == 'first_row&last_row'
    assert second.scope == (Selector.TRANSITION,)


def test_assert_zeros_and_bools_name_each_entry() -> None:
    builder = SymbolicConstraintBuilder(width=2, num_public_values=0)
    ids = builder.assert_zeros(builder.local(), 'cols')
    ids += builder.assert_bools(builder.next())
    assert [cid.name for cid in ids] == ['cols[0]', 'cols[1]', None, None]


def test_scoped_builder_reads_parent_rows() -> None:
    builder = SymbolicConstraintBuilder(width=2, num_public_values=1)
    scoped = builder.when_first_row()
    assert scoped.local() == builder.local()
    assert scoped.next() == builder.next()
    assert scoped.public_values() == builder.public_values()


def test_row_slice_outside_window() -> None:
    builder = SymbolicConstraintBuilder(width=1, num_public_values=0)
    with pytest.raises(IndexError):
        builder.row_slice(2)


def test_selector_values_regular_domain() -> None:
    assert selector_values(0, 4) == {
        Selector.FIRST_ROW: 1, Selector.LAST_ROW: 0, Selector.TRANSITION: 1,
    }
    assert selector_values(2, 4) == {
        Selector.FIRST_ROW: 0, Selector.LAST_ROW: 0, Selector.TRANSITION: 1,
    }
    assert selector_values(3, 4) == {
        Selector.FIRST_ROW: 0, Selector.LAST_ROW: 1, Selector.TRANSITION: 0,
    }


def test_selector_values_single_row_domain() -> None:
    assert selector_values(0, 1) == {
        Selector.FIRST_ROW: 1, Selector.LAST_ROW: 1, Selector.TRANSITION: 0,
    }


def test_scope_active() -> None:
    assert scope_active((), 5, 8)
    assert scope_active((Selector.TRANSITION,), 6, 8)
    assert not scope_active((Selector.TRANSITION,), 7, 8)
    assert scope_active((Selector.FIRST_ROW, Selector.LAST_ROW), 0, 1)
    assert not scope_active((Selector.FIRST_ROW, Selector.LAST_ROW), 0, 2)
