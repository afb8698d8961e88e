"""Linear recurrence AIR trace generation."""

from typing import List

import galois

from constraints.linear_recurrence import LinearRecurrenceAir
from primitives.field import FF, domain_size, lift_all
from .base import TraceGenerator


class LinearRecurrenceTrace(TraceGenerator):
    """Trace generation for LinearRecurrenceAir.

    Each row is a window of k consecutive sequence values; stepping shifts
    the window by one and appends the next sequence value.
    """

    def initial_row(self, air: LinearRecurrenceAir) -> List[int]:
        return air.initial_state()

    def next_row(self, air: LinearRecurrenceAir, row: galois.FieldArray) -> galois.FieldArray:
        field = type(row)
        k = len(row)
        coeffs = lift_all(field, air.coefficients)
        nxt = field.Zeros(k)
        nxt[:k - 1] = row[1:]
        acc = field(0)
        for c, s in zip(coeffs, row):
            acc = acc + c * s
        nxt[k - 1] = acc
        return nxt

    @staticmethod
    def final_value(coefficients, initial_state, num_steps: int, field=FF) -> int:
        """Last register of the last row for the given recurrence."""
        p = field.characteristic
        window = [v % p for v in initial_state]
        for _ in range(domain_size(num_steps) - 1):
            window = window[1:] + [sum(c * s for c, s in zip(coefficients, window)) % p]
        return window[-1]
