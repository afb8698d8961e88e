"""Symbolic constraint extraction and degree analysis."""

import pytest

from constraints import AccumulatorAir, FibonacciAir, LinearRecurrenceAir, Selector
from primitives.field import FF
from protocol.evaluator import eval_row
from protocol.symbolic import (
    Constant,
    Mul,
    PublicValue,
    Resolver,
    SymbolicConstraintBuilder,
    Variable,
    as_expr,
    max_constraint_degree,
    quotient_degree,
    symbolic_constraints,
)
from witness import accumulator_final_value, generate_trace


AIRS = [
    FibonacciAir(num_steps=8, final_value=21),
    LinearRecurrenceAir((1, 1, 1), (0, 0, 1), num_steps=8, final_value=44),
    AccumulatorAir(num_steps=5, final_value=accumulator_final_value(5)),
]


def test_expression_printing() -> None:
    assert str(Variable(0, 2)) == 'local[2]'
    assert str(Variable(1, 0)) == 'next[0]'
    assert str(PublicValue(0)) == 'public[0]'
    assert str(Variable(0, 0) - 3) == '(local[0] - 3)'


def test_int_operands_become_constants() -> None:
    expr = 2 * Variable(0, 1)
    assert expr == Mul(Constant(2), Variable(0, 1))
    assert expr.degree() == 1
    with pytest.raises(TypeError):
        as_expr(1.5)


def test_fibonacci_constraint_set() -> None:
    constraints = symbolic_constraints(AIRS[0])
    assert [str(c) for c in constraints] == [
        '#0 (first_a) [first_row]: (local[0] - 0) == 0',
        '#1 (first_b) [first_row]: (local[1] - 1) == 0',
        '#2 (next_a) [transition]: (next[0] - local[1]) == 0',
        '#3 (next_b) [transition]: (next[1] - (local[0] + local[1])) == 0',
        '#4 (final_value) [last_row]: (local[1] - public[0]) == 0',
    ]


@pytest.mark.parametrize("air,max_degree,chunks", [
    (AIRS[0], 2, 1),
    (AIRS[1], 2, 1),
    (AIRS[2], 3, 2),
])
def test_degrees(air, max_degree, chunks) -> None:
    assert max_constraint_degree(air) == max_degree
    assert quotient_degree(air) == chunks


def test_accumulator_gate_unscoped() -> None:
    (gate, *_) = symbolic_constraints(AIRS[2])
    assert gate.id.name == 'active_bool'
    assert gate.scope == ()
    assert gate.degree() == 2


@pytest.mark.parametrize("air", AIRS, ids=lambda a: a.name)
def test_symbolic_matches_concrete(air) -> None:
    trace = generate_trace(air).with_value(2, 0, 5)
    publics = FF(air.public_values())
    symbolic = symbolic_constraints(air)
    for row in range(trace.height):
        builder = eval_row(air, trace, row, publics)
        resolver = Resolver.from_builder(builder)
        assert len(builder.constraints) == len(symbolic)
        for concrete, sym in zip(builder.constraints, symbolic):
            assert concrete.id == sym.id
            assert concrete.scope == sym.scope
            assert sym.expr.evaluate(resolver) == concrete.value


def test_symbolic_builder_window() -> None:
    builder = SymbolicConstraintBuilder(width=2, num_public_values=1)
    assert builder.next() == [Variable(1, 0), Variable(1, 1)]
    with pytest.raises(IndexError):
        builder.row_slice(2)
    builder.when_transition().when_last_row().assert_zero(builder.local()[0])
    (c,) = builder.constraints
    assert c.scope == (Selector.TRANSITION, Selector.LAST_ROW)
