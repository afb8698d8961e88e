"""Fibonacci AIR: two registers stepping (a, b) -> (b, a + b).

Columns:
    0: a  (previous Fibonacci number)
    1: b  (current Fibonacci number)

Constraints:
- First row:   a == 0, b == 1
- Transition:  a' == b, b' == a + b
- Last row:    b == final_value (public input 0)

With num_steps = 8 the b column reads 1, 1, 2, 3, 5, 8, 13, 21.
"""

from dataclasses import dataclass
from typing import List

from primitives.errors import ConfigurationError
from .base import Air, ConstraintBuilder

INITIAL_STATE = (0, 1)


@dataclass(frozen=True)
class FibonacciAir(Air):
    """Proves knowledge of the Fibonacci number at the last row of the domain."""

    num_steps: int
    final_value: int

    name = 'Fibonacci'

    def __post_init__(self):
        if self.num_steps < 1:
            raise ConfigurationError(f"num_steps must be >= 1, got {self.num_steps}")

    def width(self) -> int:
        return 2

    def initial_state(self) -> List[int]:
        return list(INITIAL_STATE)

    def num_public_values(self) -> int:
        return 1

    def public_values(self) -> List[int]:
        return [self.final_value]

    def eval(self, builder: ConstraintBuilder) -> None:
        local = builder.local()
        nxt = builder.next()
        final_value = builder.public_values()[0]

        first = builder.when_first_row()
        first.assert_eq(local[0], builder.const(INITIAL_STATE[0]), 'first_a')
        first.assert_eq(local[1], builder.const(INITIAL_STATE[1]), 'first_b')

        transition = builder.when_transition()
        transition.assert_eq(nxt[0], local[1], 'next_a')
        transition.assert_eq(nxt[1], local[0] + local[1], 'next_b')

        builder.when_last_row().assert_eq(local[1], final_value, 'final_value')
