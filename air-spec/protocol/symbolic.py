"""Symbolic evaluation of AIR constraints.

Running an AIR's eval() over expression trees instead of field elements
yields the AIR's constraint set as data: a list of (scope, expression)
pairs that a proving backend can evaluate over whatever domain it works in
(extension-field points, low-degree-extension columns) without ever
touching the trace.

The tree has two kinds of nodes:

  LEAVES    Variable(offset, column) - a trace cell, offset 0 = local row,
                                       1 = next row
            PublicValue(index)       - entry of the public input vector
            Constant(value)          - an integer, lifted on evaluation

  INTERNAL  Add, Sub, Mul, Neg

Degree analysis treats every Variable as degree 1, so a constraint's degree
is the degree of the multivariate polynomial in the trace cells; a selector
contributes one more.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Union

from constraints.base import Air, ConstraintBuilder, ConstraintId, Selector
from primitives.trace import WINDOW_SIZE


# --- Expression Tree ---

class Expr(ABC):
    """Node of a constraint expression. Supports +, -, * with Expr or int."""

    @abstractmethod
    def degree(self) -> int:
        pass

    @abstractmethod
    def evaluate(self, resolver: 'Resolver') -> Any:
        pass

    def __add__(self, other):
        return Add(self, as_expr(other))

    def __radd__(self, other):
        return Add(as_expr(other), self)

    def __sub__(self, other):
        return Sub(self, as_expr(other))

    def __rsub__(self, other):
        return Sub(as_expr(other), self)

    def __mul__(self, other):
        return Mul(self, as_expr(other))

    def __rmul__(self, other):
        return Mul(as_expr(other), self)

    def __neg__(self):
        return Neg(self)


@dataclass(frozen=True)
class Variable(Expr):
    offset: int
    column: int

    def degree(self) -> int:
        return 1

    def evaluate(self, resolver):
        return resolver.variable(self.offset, self.column)

    def __str__(self) -> str:
        return f"{'local' if self.offset == 0 else 'next'}[{self.column}]"


@dataclass(frozen=True)
class PublicValue(Expr):
    index: int

    def degree(self) -> int:
        return 0

    def evaluate(self, resolver):
        return resolver.public(self.index)

    def __str__(self) -> str:
        return f"public[{self.index}]"


@dataclass(frozen=True)
class Constant(Expr):
    value: int

    def degree(self) -> int:
        return 0

    def evaluate(self, resolver):
        return resolver.const(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Add(Expr):
    left: Expr
    right: Expr

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def evaluate(self, resolver):
        return self.left.evaluate(resolver) + self.right.evaluate(resolver)

    def __str__(self) -> str:
        return f"({self.left} + {self.right})"


@dataclass(frozen=True)
class Sub(Expr):
    left: Expr
    right: Expr

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def evaluate(self, resolver):
        return self.left.evaluate(resolver) - self.right.evaluate(resolver)

    def __str__(self) -> str:
        return f"({self.left} - {self.right})"


@dataclass(frozen=True)
class Mul(Expr):
    left: Expr
    right: Expr

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def evaluate(self, resolver):
        return self.left.evaluate(resolver) * self.right.evaluate(resolver)

    def __str__(self) -> str:
        return f"{self.left} * {self.right}"


@dataclass(frozen=True)
class Neg(Expr):
    operand: Expr

    def degree(self) -> int:
        return self.operand.degree()

    def evaluate(self, resolver):
        return -self.operand.evaluate(resolver)

    def __str__(self) -> str:
        return f"-{self.operand}"


def as_expr(value: Union[Expr, int]) -> Expr:
    if isinstance(value, Expr):
        return value
    if isinstance(value, int):
        return Constant(value)
    raise TypeError(f"cannot use {type(value).__name__} in a constraint expression")


# --- Evaluation ---

class Resolver:
    """Supplies leaf values when evaluating an expression over some domain.

    Args:
        rows: rows[offset][column] for offsets 0 (local) and 1 (next)
        public_values: Public input vector in the target domain
        const: Lifts an integer into the target domain
    """

    def __init__(self, rows: Sequence[Sequence[Any]], public_values: Sequence[Any],
                 const: Callable[[int], Any]):
        self._rows = rows
        self._public_values = public_values
        self.const = const

    def variable(self, offset: int, column: int):
        return self._rows[offset][column]

    def public(self, index: int):
        return self._public_values[index]

    @classmethod
    def from_builder(cls, builder: ConstraintBuilder) -> 'Resolver':
        """Resolve leaves through another builder's value domain."""
        rows = [builder.row_slice(k) for k in range(WINDOW_SIZE)]
        return cls(rows, builder.public_values(), builder.const)


# --- Symbolic Builder ---

class SymbolicConstraintBuilder(ConstraintBuilder):
    """Builder whose values are expression trees."""

    def __init__(self, width: int, num_public_values: int):
        super().__init__()
        self._rows = [
            [Variable(offset, col) for col in range(width)]
            for offset in range(WINDOW_SIZE)
        ]
        self._publics = [PublicValue(i) for i in range(num_public_values)]

    def row_slice(self, offset: int) -> List[Variable]:
        if not 0 <= offset < WINDOW_SIZE:
            raise IndexError(f"row offset {offset} outside window of {WINDOW_SIZE} rows")
        return self._rows[offset]

    def public_values(self) -> List[PublicValue]:
        return self._publics

    def const(self, value: int) -> Constant:
        return Constant(int(value))


@dataclass(frozen=True)
class SymbolicConstraint:
    """One constraint of an AIR as data."""
    id: ConstraintId
    scope: Tuple[Selector, ...]
    expr: Expr

    def degree(self) -> int:
        """Degree including one for each selector in scope."""
        return self.expr.degree() + len(self.scope)

    def __str__(self) -> str:
        scope = '&'.join(s.value for s in self.scope) or 'always'
        return f"{self.id} [{scope}]: {self.expr} == 0"


def symbolic_constraints(air: Air) -> List[SymbolicConstraint]:
    """The (scope, expression) set `air` registers, independent of any trace."""
    builder = SymbolicConstraintBuilder(air.width(), air.num_public_values())
    air.eval(builder)
    return [SymbolicConstraint(c.id, c.scope, as_expr(c.value)) for c in builder.constraints]


def max_constraint_degree(air: Air) -> int:
    """Largest constraint degree of `air`, selectors counted as degree one."""
    return max((c.degree() for c in symbolic_constraints(air)), default=0)


def quotient_degree(air: Air) -> int:
    """Number of trace-size chunks the quotient polynomial splits into.

    The folded constraint polynomial has degree about max_degree * N, and
    dividing by the vanishing polynomial removes N, so the quotient needs
    max_degree - 1 chunks, rounded up to a power of two.
    """
    d = max(max_constraint_degree(air) - 1, 1)
    return 1 << (d - 1).bit_length()
