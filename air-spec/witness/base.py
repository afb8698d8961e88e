"""Base class for trace generation."""

import logging
from abc import ABC, abstractmethod
from typing import List

import galois

from constraints.base import Air
from primitives.errors import ConfigurationError
from primitives.field import FF, domain_size, lift_all
from primitives.trace import TraceMatrix

logger = logging.getLogger(__name__)


class TraceGenerator(ABC):
    """Per-AIR trace generation. Used by the prover only.

    A generator describes the computation as a recurrence: the first row and
    a step function from one row to the next. generate() folds the recurrence
    over the whole evaluation domain, padding rows included, so that the
    AIR's transition constraints hold on every row except the last.
    """

    @abstractmethod
    def initial_row(self, air: Air) -> List[int]:
        """Row 0 of the trace, as integers."""
        pass

    @abstractmethod
    def next_row(self, air: Air, row: galois.FieldArray) -> galois.FieldArray:
        """Row i + 1 computed from row i in the trace field."""
        pass

    def num_rows(self, air: Air) -> int:
        """Evaluation domain size: smallest power of two >= air.num_steps."""
        return domain_size(air.num_steps)

    def generate(self, air: Air, field=FF) -> TraceMatrix:
        """Produce the trace for `air` over `field`.

        Raises:
            ConfigurationError: If the AIR asks for fewer than one step or the
                recurrence produces rows of the wrong width
        """
        n = self.num_rows(air)
        width = air.width()
        first = lift_all(field, self.initial_row(air))
        if len(first) != width:
            raise ConfigurationError(
                f"{air.name}: initial row has {len(first)} values, AIR width is {width}"
            )

        values = field.Zeros((n, width))
        values[0] = first
        for i in range(1, n):
            values[i] = self.next_row(air, values[i - 1])

        logger.debug(
            f"Generated {air.name} trace: {air.num_steps} steps, {n} rows "
            f"({n - air.num_steps} padding), width {width}"
        )
        return TraceMatrix(values)
