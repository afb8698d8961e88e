"""Accumulator AIR trace generation.

Rows [0, num_steps) are active and add their counter to the running sum.
Padding rows continue counting with active = 0, leaving the sum unchanged.
"""

from typing import List

import galois

from constraints.accumulator import AccumulatorAir, ACC, ACTIVE, COUNTER
from .base import TraceGenerator


def accumulator_final_value(num_steps: int) -> int:
    """0 + 1 + ... + (num_steps - 1)."""
    return num_steps * (num_steps - 1) // 2


class AccumulatorTrace(TraceGenerator):
    """Trace generation for AccumulatorAir."""

    def initial_row(self, air: AccumulatorAir) -> List[int]:
        return air.initial_state()

    def next_row(self, air: AccumulatorAir, row: galois.FieldArray) -> galois.FieldArray:
        field = type(row)
        nxt = field.Zeros(3)
        nxt[COUNTER] = row[COUNTER] + field(1)
        # Row index of nxt equals its counter; only the first num_steps rows are active
        active = int(nxt[COUNTER]) < air.num_steps
        nxt[ACTIVE] = field(int(active))
        nxt[ACC] = row[ACC] + nxt[ACTIVE] * nxt[COUNTER]
        return nxt
