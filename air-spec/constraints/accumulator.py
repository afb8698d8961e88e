"""Accumulator AIR: running sum 0 + 1 + ... + (num_steps - 1) with a boolean gate.

Columns:
    0: counter  (row index)
    1: acc      (sum of active counters up to and including this row)
    2: active   (1 on the first num_steps rows, 0 on padding rows)

Constraints:
- Every row:   active is boolean
- First row:   counter == 0, acc == 0, active == 1
- Transition:  counter' == counter + 1
               acc' == acc + active' * counter'
               active' * (1 - active) == 0  (once inactive, stays inactive)
- Last row:    acc == final_value (public input 0)

Padding rows keep stepping the counter with active = 0, so the same
transition constraints hold over the whole domain.
"""

from dataclasses import dataclass
from typing import List

from primitives.errors import ConfigurationError
from .base import Air, ConstraintBuilder

COUNTER, ACC, ACTIVE = 0, 1, 2


@dataclass(frozen=True)
class AccumulatorAir(Air):
    num_steps: int
    final_value: int

    name = 'Accumulator'

    def __post_init__(self):
        if self.num_steps < 1:
            raise ConfigurationError(f"num_steps must be >= 1, got {self.num_steps}")

    def width(self) -> int:
        return 3

    def initial_state(self) -> List[int]:
        return [0, 0, 1]

    def num_public_values(self) -> int:
        return 1

    def public_values(self) -> List[int]:
        return [self.final_value]

    def eval(self, builder: ConstraintBuilder) -> None:
        local = builder.local()
        nxt = builder.next()
        one = builder.one()

        builder.assert_bool(local[ACTIVE], 'active_bool')

        first = builder.when_first_row()
        first.assert_zero(local[COUNTER], 'first_counter')
        first.assert_zero(local[ACC], 'first_acc')
        first.assert_one(local[ACTIVE], 'first_active')

        transition = builder.when_transition()
        transition.assert_eq(nxt[COUNTER], local[COUNTER] + one, 'counter_step')
        transition.assert_eq(
            nxt[ACC], local[ACC] + nxt[ACTIVE] * nxt[COUNTER], 'acc_step'
        )
        transition.assert_zero(nxt[ACTIVE] * (one - local[ACTIVE]), 'active_monotone')

        builder.when_last_row().assert_eq(
            local[ACC], builder.public_values()[0], 'final_value'
        )
