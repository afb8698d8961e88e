"""AIR definitions and the constraint builder interface.

Each AIR lives in its own module and implements the two-operation Air
interface (width, eval). The registry maps AIR names to their classes so that
code handling arbitrary AIRs (trace generation, proving glue) can construct
them uniformly.
"""

from .base import (
    Air,
    Constraint,
    ConstraintBuilder,
    ConstraintId,
    ScopedConstraintBuilder,
    Selector,
    scope_active,
    selector_values,
)
from .accumulator import AccumulatorAir
from .fibonacci import FibonacciAir
from .linear_recurrence import LinearRecurrenceAir

# Registry mapping AIR names to AIR classes
AIR_REGISTRY: dict[str, type[Air]] = {
    "Fibonacci": FibonacciAir,
    "LinearRecurrence": LinearRecurrenceAir,
    "Accumulator": AccumulatorAir,
}


def get_air(air_name: str, **params) -> Air:
    """Construct a registered AIR from its parameters.

    Args:
        air_name: Name of the AIR (e.g., 'Fibonacci', 'Accumulator')
        **params: Constructor parameters of the AIR

    Returns:
        Air instance

    Raises:
        KeyError: If no AIR is registered under `air_name`
    """
    if air_name in AIR_REGISTRY:
        return AIR_REGISTRY[air_name](**params)
    raise KeyError(
        f"No AIR named '{air_name}'. "
        f"Available: {list(AIR_REGISTRY.keys())}"
    )


__all__ = [
    "Air",
    "Constraint",
    "ConstraintBuilder",
    "ConstraintId",
    "ScopedConstraintBuilder",
    "Selector",
    "scope_active",
    "selector_values",
    "FibonacciAir",
    "LinearRecurrenceAir",
    "AccumulatorAir",
    "AIR_REGISTRY",
    "get_air",
]
