"""Constraint folders: the AIR's eval() over polynomial-domain values.

A proving backend does not check constraints row by row. It evaluates the
same eval() once over whole columns of an evaluation domain (prover) or over
openings at a single random point (verifier), and folds all constraints into
one value with a random challenge alpha:

    acc = ((c_0 * alpha + c_1) * alpha + ...) * alpha + c_{m-1}

where c_i = selector_i * expr_i. For a valid trace the folded column vanishes
on the trace domain H, so it is divisible by Z_H(x) = x^N - 1.

Selectors are the polynomials that are 0/1 on H:

    is_first_row(x)  = Z_H(x) / (N * (x - 1))
    is_last_row(x)   = Z_H(x) / (N * (w * x - 1))
    is_transition(x) = 1 - is_last_row(x)

DomainConstraintFolder:  prover side, values are arrays over a domain
PointConstraintFolder:   verifier side, values are scalars at a point zeta
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np

from constraints.base import Air, ConstraintBuilder, Selector, selector_values
from primitives.field import FF, embed, get_omega, lift, lift_all, log2_exact
from primitives.polynomial import column_polys, evaluate, next_point
from primitives.trace import TraceMatrix


def fold_constraints(values: Sequence[Any], alpha: Any) -> Any:
    """Horner-accumulate constraint values with challenge alpha."""
    acc = None
    for v in values:
        acc = v if acc is None else acc * alpha + v
    return acc


class _FoldingBuilder(ConstraintBuilder):
    """Shared folding logic: selector-weighted Horner accumulation."""

    def __init__(self, field, public_values, selectors: Dict[Selector, Any], alpha):
        super().__init__()
        self._field = field
        self._public_values = public_values
        self._selectors = selectors
        self.alpha = alpha

    def public_values(self):
        return self._public_values

    def const(self, value: int):
        return lift(self._field, value)

    def weighted(self) -> list:
        """Each constraint multiplied by the selectors of its scope."""
        result = []
        for c in self.constraints:
            value = c.value
            for s in c.scope:
                value = self._selectors[s] * value
            result.append(value)
        return result

    def fold(self):
        """Folded constraint value; zero (constant) when no constraint was registered."""
        folded = fold_constraints(self.weighted(), self.alpha)
        return self.const(0) if folded is None else folded


class DomainConstraintFolder(_FoldingBuilder):
    """Prover implementation - columns over an evaluation domain.

    Args:
        columns: One array per trace column, evaluated on the domain
        selectors: Selector columns on the same domain
        public_values: Public input vector (scalars)
        alpha: Folding challenge
        extend: Domain size divided by trace height. The next row of point x
            is w_N * x, which sits `extend` positions further along the domain.
    """

    def __init__(self, columns: Sequence[Any], selectors: Dict[Selector, Any],
                 public_values, alpha, extend: int = 1):
        field = type(alpha)
        super().__init__(field, public_values, selectors, alpha)
        self._columns = list(columns)
        self.extend = extend

    def row_slice(self, offset: int):
        # On an extended domain, row offset is multiplied by extend factor
        shift = offset * self.extend
        return [np.roll(col, -shift) for col in self._columns]

    @classmethod
    def from_trace(cls, trace: TraceMatrix, public_values: Sequence[int], alpha) -> 'DomainConstraintFolder':
        """Folder over the trace domain H itself, values embedded in alpha's field."""
        field = type(alpha)
        to_field = (lambda a: a) if field is trace.field else (lambda a: embed(a, field))
        columns = [to_field(trace.column(j)) for j in range(trace.width)]
        selectors = {
            s: lift_all(field, [selector_values(r, trace.height)[s] for r in range(trace.height)])
            for s in Selector
        }
        return cls(columns, selectors, lift_all(field, public_values), alpha)


def lagrange_selectors(point, height: int) -> Dict[Selector, Any]:
    """Selector polynomials of a height-N domain evaluated at `point` outside H."""
    field = type(point)
    one = field(1)
    n = lift(field, height)
    omega = get_omega(log2_exact(height))
    if field is not FF:
        omega = embed(omega, field)
    z_h = point ** height - one
    first = z_h / (n * (point - one))
    last = z_h / (n * (omega * point - one))
    return {
        Selector.FIRST_ROW: first,
        Selector.LAST_ROW: last,
        Selector.TRANSITION: one - last,
    }


class PointConstraintFolder(_FoldingBuilder):
    """Verifier implementation - openings at a single point zeta.

    Args:
        local: Trace polynomial evaluations at zeta
        next: Trace polynomial evaluations at w * zeta
        zeta: Evaluation point, outside the trace domain
        height: Trace domain size N
        public_values: Public input vector
        alpha: Folding challenge
    """

    def __init__(self, local: Sequence[Any], next: Sequence[Any], zeta, height: int,
                 public_values, alpha):
        field = type(alpha)
        super().__init__(field, public_values, lagrange_selectors(zeta, height), alpha)
        self._rows = (list(local), list(next))
        self.zeta = zeta
        self.height = height

    def row_slice(self, offset: int):
        return self._rows[offset]

    def vanishing(self):
        """Z_H(zeta)."""
        return self.zeta ** self.height - self._field(1)


# --- Convenience ---

def open_trace(trace: TraceMatrix, zeta):
    """Evaluations of every trace column polynomial at zeta and at w * zeta."""
    polys = column_polys(trace.values)
    zeta_next = next_point(zeta, trace.height)
    local = [evaluate(p, zeta) for p in polys]
    nxt = [evaluate(p, zeta_next) for p in polys]
    return local, nxt


def fold_trace(air: Air, trace: TraceMatrix, alpha, public_values: Optional[Sequence[int]] = None):
    """Fold `air` over the trace domain; all zeros iff every constraint holds."""
    if public_values is None:
        public_values = air.public_values()
    folder = DomainConstraintFolder.from_trace(trace, public_values, alpha)
    air.eval(folder)
    return folder.fold()


def fold_at_point(air: Air, trace: TraceMatrix, zeta, alpha,
                  public_values: Optional[Sequence[int]] = None):
    """Fold `air` at zeta from the trace's polynomial openings."""
    if public_values is None:
        public_values = air.public_values()
    local, nxt = open_trace(trace, zeta)
    field = type(alpha)
    folder = PointConstraintFolder(local, nxt, zeta, trace.height,
                                   lift_all(field, public_values), alpha)
    air.eval(folder)
    return folder.fold()
