"""
Pytest configuration and shared fixtures for air-spec tests.
"""

import sys
from pathlib import Path

import pytest

# Add the air-spec directory to the path so absolute imports work
# (tests/ is inside air-spec/, so parent is air-spec/)
air_spec_dir = Path(__file__).parent.parent
if str(air_spec_dir) not in sys.path:
    sys.path.insert(0, str(air_spec_dir))

from constraints import FibonacciAir  # noqa: E402
from witness import generate_trace  # noqa: E402


@pytest.fixture
def fib_air() -> FibonacciAir:
    """Eight-step Fibonacci AIR with the correct final value."""
    return FibonacciAir(num_steps=8, final_value=21)


@pytest.fixture
def fib_trace(fib_air):
    return generate_trace(fib_air)
