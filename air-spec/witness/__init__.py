"""Trace generation modules.

Each AIR has its own TraceGenerator that folds the AIR's recurrence over the
evaluation domain. The registry is keyed by the same AIR names as
constraints.AIR_REGISTRY.
"""

from constraints.base import Air
from primitives.field import FF
from primitives.trace import TraceMatrix

from .base import TraceGenerator
from .accumulator import AccumulatorTrace, accumulator_final_value
from .fibonacci import FibonacciTrace, fibonacci_final_value
from .linear_recurrence import LinearRecurrenceTrace

# Registry mapping AIR names to trace generator classes
WITNESS_REGISTRY: dict[str, type[TraceGenerator]] = {
    'Fibonacci': FibonacciTrace,
    'LinearRecurrence': LinearRecurrenceTrace,
    'Accumulator': AccumulatorTrace,
}


def get_trace_generator(air_name: str) -> TraceGenerator:
    """Get trace generator instance for an AIR.

    Raises:
        KeyError: If no trace generator is registered for the AIR
    """
    if air_name in WITNESS_REGISTRY:
        return WITNESS_REGISTRY[air_name]()
    raise KeyError(f"No trace generator for AIR '{air_name}'. "
                   f"Available: {list(WITNESS_REGISTRY.keys())}")


def generate_trace(air: Air, field=FF) -> TraceMatrix:
    """Generate the trace for any registered AIR."""
    return get_trace_generator(air.name).generate(air, field)


__all__ = [
    'TraceGenerator',
    'FibonacciTrace',
    'LinearRecurrenceTrace',
    'AccumulatorTrace',
    'fibonacci_final_value',
    'accumulator_final_value',
    'WITNESS_REGISTRY',
    'get_trace_generator',
    'generate_trace',
]
