"""Base classes for AIR definitions and constraint builders.

An AIR is written once, as an `eval(builder)` procedure against the
ConstraintBuilder interface. The same procedure runs unchanged over very
different value domains:

- RowConstraintBuilder: concrete field elements of one (local, next) row pair
  (protocol/evaluator.py)
- SymbolicConstraintBuilder: expression trees (protocol/symbolic.py)
- DomainConstraintFolder: whole columns over an evaluation domain
  (protocol/folder.py)
- PointConstraintFolder: openings at a single out-of-domain point
  (protocol/folder.py)

Builders only record (scope, expression) pairs. Judging whether a constraint
holds is the caller's job.

Example:
    class Square(Air):
        name = 'Square'

        def width(self) -> int:
            return 1

        def eval(self, builder: ConstraintBuilder) -> None:
            local, nxt = builder.local(), builder.next()
            builder.when_transition().assert_eq(nxt[0], local[0] * local[0])
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple


# --- Selectors ---

class Selector(enum.Enum):
    """Row indicator scoping a constraint. Derived from row position, never stored."""
    FIRST_ROW = 'first_row'
    LAST_ROW = 'last_row'
    TRANSITION = 'transition'


def selector_values(row: int, height: int) -> Dict[Selector, int]:
    """0/1 value of every selector at `row` of a domain with `height` rows.

    For height == 1 the single row is both first and last, and not a
    transition row.
    """
    is_last = int(row == height - 1)
    return {
        Selector.FIRST_ROW: int(row == 0),
        Selector.LAST_ROW: is_last,
        Selector.TRANSITION: 1 - is_last,
    }


def scope_active(scope: Tuple[Selector, ...], row: int, height: int) -> bool:
    """True when every selector of `scope` is 1 at `row`. Empty scope is always active."""
    values = selector_values(row, height)
    return all(values[s] for s in scope)


# --- Constraints ---

@dataclass(frozen=True)
class ConstraintId:
    """Stable identifier of a constraint: its registration order within eval()."""
    index: int
    name: Optional[str] = None

    def __str__(self) -> str:
        if self.name:
            return f"#{self.index} ({self.name})"
        return f"#{self.index}"


@dataclass(frozen=True)
class Constraint:
    """One registered constraint.

    Attributes:
        id: Registration index and optional name
        scope: Selectors that must all be 1 for the constraint to apply;
            empty for an unconditional constraint
        value: The constraint expression in the builder's value domain
    """
    id: ConstraintId
    scope: Tuple[Selector, ...]
    value: Any

    @property
    def scope_name(self) -> str:
        if not self.scope:
            return 'always'
        return '&'.join(s.value for s in self.scope)


# --- Constraint Builder ---

class ConstraintBuilder(ABC):
    """Uniform interface an AIR's eval() is written against.

    Subclasses supply the value domain (row_slice, public_values, const).
    Scoping and assertion registration are shared.
    """

    def __init__(self):
        self._sink: List[Constraint] = []
        self._scope: Tuple[Selector, ...] = ()

    @abstractmethod
    def row_slice(self, offset: int) -> Sequence[Any]:
        """Row at `current_row + offset` (0 = local, 1 = next), cyclically wrapped."""
        pass

    @abstractmethod
    def public_values(self) -> Sequence[Any]:
        """Public input vector, in the builder's value domain."""
        pass

    @abstractmethod
    def const(self, value: int) -> Any:
        """Lift an integer into the builder's value domain."""
        pass

    def local(self) -> Sequence[Any]:
        return self.row_slice(0)

    def next(self) -> Sequence[Any]:
        return self.row_slice(1)

    def one(self) -> Any:
        return self.const(1)

    def zero(self) -> Any:
        return self.const(0)

    # --- Scoping ---

    @property
    def scope(self) -> Tuple[Selector, ...]:
        return self._scope

    def when(self, selector: Selector) -> 'ConstraintBuilder':
        """Sub-builder whose assertions only apply where `selector` is 1."""
        return ScopedConstraintBuilder(self, selector)

    def when_first_row(self) -> 'ConstraintBuilder':
        return self.when(Selector.FIRST_ROW)

    def when_last_row(self) -> 'ConstraintBuilder':
        return self.when(Selector.LAST_ROW)

    def when_transition(self) -> 'ConstraintBuilder':
        return self.when(Selector.TRANSITION)

    # --- Assertions ---

    def assert_zero(self, expr: Any, name: Optional[str] = None) -> ConstraintId:
        """Register the constraint expr == 0 under the current scope."""
        cid = ConstraintId(len(self._sink), name)
        self._sink.append(Constraint(cid, self._scope, expr))
        return cid

    def assert_eq(self, a: Any, b: Any, name: Optional[str] = None) -> ConstraintId:
        return self.assert_zero(a - b, name)

    def assert_one(self, expr: Any, name: Optional[str] = None) -> ConstraintId:
        return self.assert_zero(expr - self.one(), name)

    def assert_bool(self, x: Any, name: Optional[str] = None) -> ConstraintId:
        """Register x * (x - 1) == 0."""
        return self.assert_zero(x * (x - self.one()), name)

    def assert_zeros(self, exprs: Sequence[Any], name: Optional[str] = None) -> List[ConstraintId]:
        return [
            self.assert_zero(e, f"{name}[{i}]" if name else None)
            for i, e in enumerate(exprs)
        ]

    def assert_bools(self, xs: Sequence[Any], name: Optional[str] = None) -> List[ConstraintId]:
        return [
            self.assert_bool(x, f"{name}[{i}]" if name else None)
            for i, x in enumerate(xs)
        ]

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        """Constraints registered so far, in registration order."""
        return tuple(self._sink)


class ScopedConstraintBuilder(ConstraintBuilder):
    """View of a parent builder with one more selector in scope.

    Shares the parent's constraint sink, so registration order is global
    across every scope of one eval() call.
    """

    def __init__(self, parent: ConstraintBuilder, selector: Selector):
        self._parent = parent
        self._sink = parent._sink
        if selector in parent.scope:
            self._scope = parent.scope
        else:
            self._scope = parent.scope + (selector,)

    def row_slice(self, offset: int) -> Sequence[Any]:
        return self._parent.row_slice(offset)

    def public_values(self) -> Sequence[Any]:
        return self._parent.public_values()

    def const(self, value: int) -> Any:
        return self._parent.const(value)


# --- AIR Interface ---

class Air(ABC):
    """An Algebraic Intermediate Representation.

    Subclasses are immutable parameter records (frozen dataclasses) with a
    declared row width and an eval() procedure. eval() must only register
    constraints on the builder: it may not read or write any other state, and
    it must register the same (scope, expression) set whatever value domain
    the builder works in.
    """

    name: ClassVar[str] = 'Air'

    @abstractmethod
    def width(self) -> int:
        """Number of trace columns (>= 1)."""
        pass

    @abstractmethod
    def eval(self, builder: ConstraintBuilder) -> None:
        """Register every constraint of this AIR on `builder`."""
        pass

    def num_public_values(self) -> int:
        return 0

    def public_values(self) -> List[int]:
        """Public input vector implied by this AIR's own parameters."""
        return []
