"""Fibonacci AIR trace generation.

Row i holds (F_i, F_{i+1}) starting from (0, 1). Padding rows beyond
num_steps keep applying the same step, so the b column of the last row is
F_{rows}, the value FibonacciAir.final_value must declare.
"""

from typing import List

import galois

from constraints.fibonacci import FibonacciAir, INITIAL_STATE
from primitives.field import FF, domain_size
from .base import TraceGenerator


def fibonacci_final_value(num_steps: int, field=FF) -> int:
    """Value the last row's b column takes for `num_steps` requested steps."""
    p = field.characteristic
    a, b = INITIAL_STATE
    for _ in range(domain_size(num_steps) - 1):
        a, b = b, (a + b) % p
    return b


class FibonacciTrace(TraceGenerator):
    """Trace generation for FibonacciAir."""

    def initial_row(self, air: FibonacciAir) -> List[int]:
        return air.initial_state()

    def next_row(self, air: FibonacciAir, row: galois.FieldArray) -> galois.FieldArray:
        nxt = type(row).Zeros(2)
        nxt[0] = row[1]
        nxt[1] = row[0] + row[1]
        return nxt
