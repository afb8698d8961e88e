"""Linear recurrence AIR: a k-register shift register.

The state (s_i, ..., s_{i+k-1}) steps to (s_{i+1}, ..., s_{i+k}) where

    s_{i+k} = c_0 * s_i + c_1 * s_{i+1} + ... + c_{k-1} * s_{i+k-1}

Fibonacci is the instance coefficients=(1, 1), initial_values=(0, 1);
Tribonacci is coefficients=(1, 1, 1).

Constraints:
- First row:   local[j] == initial_values[j] for every register j
- Transition:  next[j] == local[j + 1] for j < k - 1
               next[k - 1] == sum_j c_j * local[j]
- Last row:    local[k - 1] == final_value (public input 0)
"""

from dataclasses import dataclass
from typing import List, Tuple

from primitives.errors import ConfigurationError
from .base import Air, ConstraintBuilder


@dataclass(frozen=True)
class LinearRecurrenceAir(Air):
    coefficients: Tuple[int, ...]
    initial_values: Tuple[int, ...]
    num_steps: int
    final_value: int

    name = 'LinearRecurrence'

    def __post_init__(self):
        object.__setattr__(self, 'coefficients', tuple(self.coefficients))
        object.__setattr__(self, 'initial_values', tuple(self.initial_values))
        if not self.coefficients:
            raise ConfigurationError("at least one coefficient is required")
        if len(self.initial_values) != len(self.coefficients):
            raise ConfigurationError(
                f"initial_values has {len(self.initial_values)} registers, "
                f"coefficients imply {len(self.coefficients)}"
            )
        if self.num_steps < 1:
            raise ConfigurationError(f"num_steps must be >= 1, got {self.num_steps}")

    def width(self) -> int:
        return len(self.coefficients)

    def initial_state(self) -> List[int]:
        return list(self.initial_values)

    def num_public_values(self) -> int:
        return 1

    def public_values(self) -> List[int]:
        return [self.final_value]

    def eval(self, builder: ConstraintBuilder) -> None:
        k = self.width()
        local = builder.local()
        nxt = builder.next()

        first = builder.when_first_row()
        for j, v in enumerate(self.initial_state()):
            first.assert_eq(local[j], builder.const(v), f"initial[{j}]")

        transition = builder.when_transition()
        for j in range(k - 1):
            transition.assert_eq(nxt[j], local[j + 1], f"shift[{j}]")

        combination = builder.zero()
        for c, s in zip(self.coefficients, local):
            combination = combination + builder.const(c) * s
        transition.assert_eq(nxt[k - 1], combination, 'recurrence')

        builder.when_last_row().assert_eq(
            local[k - 1], builder.public_values()[0], 'final_value'
        )
