"""Concrete constraint evaluation over a trace.

Decides whether a trace satisfies its AIR before any cryptographic work is
attempted. For every row r the evaluator:

1. derives the selectors from (r, height)
2. builds the row view (trace[r], trace[(r + 1) mod height])
3. runs air.eval() on a fresh RowConstraintBuilder
4. reports every constraint whose scope is active at r and whose value is
   non-zero

All violations are collected, not just the first, so an isolated bug can be
told apart from a systemic one.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from constraints.base import (
    Air,
    ConstraintBuilder,
    ConstraintId,
    Selector,
    scope_active,
)
from primitives.errors import ConfigurationError, ConstraintViolationError
from primitives.field import lift, lift_all
from primitives.trace import RowView, TraceMatrix
from protocol.config import DEFAULT_CONFIG, EvaluatorConfig

logger = logging.getLogger(__name__)


class RowConstraintBuilder(ConstraintBuilder):
    """Builder over the concrete field elements of one row pair."""

    def __init__(self, view: RowView, public_values, field):
        super().__init__()
        self._view = view
        self._public_values = public_values
        self._field = field

    def row_slice(self, offset: int):
        return self._view.row_slice(offset)

    def public_values(self):
        return self._public_values

    def const(self, value: int):
        return lift(self._field, value)


@dataclass(frozen=True)
class Violation:
    """A constraint that does not hold at a row.

    Attributes:
        row: Row index where the constraint was evaluated
        constraint: Identifier of the failing constraint
        scope: Selectors the constraint is scoped to
        value: Non-zero value the constraint expression took
    """
    row: int
    constraint: ConstraintId
    scope: Tuple[Selector, ...]
    value: int

    def __str__(self) -> str:
        scope = '&'.join(s.value for s in self.scope) or 'always'
        return f"row {self.row}: constraint {self.constraint} [{scope}] = {self.value}"


@dataclass
class EvaluationReport:
    """Outcome of checking one trace against one AIR."""
    air_name: str
    height: int
    width: int
    num_constraints: int
    violations: List[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def rows_with_violations(self) -> List[int]:
        return sorted({v.row for v in self.violations})

    def by_constraint(self) -> Dict[ConstraintId, List[int]]:
        """Rows at which each failing constraint is violated."""
        result: Dict[ConstraintId, List[int]] = {}
        for v in self.violations:
            result.setdefault(v.constraint, []).append(v.row)
        return result

    def raise_for_violations(self) -> None:
        if self.violations:
            raise ConstraintViolationError(self.violations, self.air_name)


# --- Validation ---

def _resolve_public_values(air: Air, trace: TraceMatrix, public_values: Optional[Sequence]):
    if public_values is None:
        public_values = air.public_values()
    if len(public_values) != air.num_public_values():
        raise ConfigurationError(
            f"{air.name} expects {air.num_public_values()} public values, "
            f"got {len(public_values)}"
        )
    return lift_all(trace.field, public_values)


def validate_trace(air: Air, trace: TraceMatrix) -> None:
    """Reject a trace whose shape cannot belong to `air`.

    Raises:
        ConfigurationError: If widths differ or the domain is empty
    """
    if air.width() < 1:
        raise ConfigurationError(f"{air.name} declares width {air.width()}")
    if trace.width != air.width():
        raise ConfigurationError(
            f"trace width {trace.width} does not match {air.name} width {air.width()}"
        )
    if trace.height < 1:
        raise ConfigurationError("trace domain is empty (0 rows)")


# --- Row Checking ---

def eval_row(air: Air, trace: TraceMatrix, row: int, public_values) -> RowConstraintBuilder:
    """Run air.eval() against row `row` of `trace` and return the builder."""
    builder = RowConstraintBuilder(trace.row_view(row), public_values, trace.field)
    air.eval(builder)
    return builder


def _check_rows(air: Air, trace: TraceMatrix, rows: range, public_values) -> Tuple[List[Violation], int]:
    violations = []
    num_constraints = 0
    for r in rows:
        builder = eval_row(air, trace, r, public_values)
        num_constraints = len(builder.constraints)
        for c in builder.constraints:
            if not scope_active(c.scope, r, trace.height):
                continue
            value = int(c.value)
            if value != 0:
                violations.append(Violation(r, c.id, c.scope, value))
    return violations, num_constraints


# --- Main Entry Points ---

def check_constraints(
    air: Air,
    trace: TraceMatrix,
    public_values: Optional[Sequence[int]] = None,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> EvaluationReport:
    """Check every constraint of `air` on every row of `trace`.

    Args:
        air: AIR whose eval() defines the constraints
        trace: Concrete trace, read only
        public_values: Public input vector; defaults to air.public_values()
        config: Thread pool settings

    Returns:
        EvaluationReport with all violations sorted by (row, constraint index)

    Raises:
        ConfigurationError: On shape mismatches, before anything is evaluated
    """
    validate_trace(air, trace)
    publics = _resolve_public_values(air, trace, public_values)

    chunks = config.row_chunks(trace.height)
    if config.workers == 1 or len(chunks) == 1:
        results = [_check_rows(air, trace, rows, publics) for rows in chunks]
    else:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            results = list(pool.map(lambda rows: _check_rows(air, trace, rows, publics), chunks))

    violations = []
    for chunk_violations, _ in results:
        violations.extend(chunk_violations)
    violations.sort(key=lambda v: (v.row, v.constraint.index))

    report = EvaluationReport(
        air_name=air.name,
        height=trace.height,
        width=trace.width,
        num_constraints=results[0][1],
        violations=violations,
    )
    logger.debug(
        f"Checked {air.name}: {trace.height} rows x {report.num_constraints} constraints, "
        f"{len(violations)} violation(s)"
    )
    return report


def assert_constraints(
    air: Air,
    trace: TraceMatrix,
    public_values: Optional[Sequence[int]] = None,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> EvaluationReport:
    """Like check_constraints(), but raise ConstraintViolationError on any violation."""
    report = check_constraints(air, trace, public_values, config)
    report.raise_for_violations()
    return report
