"""Proving backend interface: the evaluator gates every proof attempt."""

import pytest

from constraints import AccumulatorAir, FibonacciAir
from primitives.errors import ConfigurationError, ConstraintViolationError
from primitives.field import FF
from protocol.backend import AirDescription, ProvingBackend, prove, verify
from protocol.folder import fold_trace
from witness import accumulator_final_value, generate_trace


class FoldingBackend(ProvingBackend):
    """Stand-in backend: the "proof" is the folded constraint column."""

    def __init__(self, alpha=FF(7)):
        self.alpha = alpha
        self.calls = []

    def prove(self, description, trace):
        self.calls.append(('prove', description.air.name))
        folded = fold_trace(description.air, trace, self.alpha, description.public_values)
        return [int(v) for v in folded]

    def verify(self, description, proof):
        self.calls.append(('verify', description.air.name))
        return len(proof) > 0 and all(v == 0 for v in proof)


class RejectingBackend(FoldingBackend):
    def verify(self, description, proof):
        return False


def test_description_from_air() -> None:
    air = AccumulatorAir(num_steps=5, final_value=accumulator_final_value(5))
    description = AirDescription.from_air(air)
    assert description.width == 3
    assert description.public_values == (10,)
    assert len(description.constraints) == 8
    assert (description.max_degree, description.quotient_degree) == (3, 2)


def test_description_rejects_public_length(fib_air) -> None:
    with pytest.raises(ConfigurationError):
        AirDescription.from_air(fib_air, public_values=[1, 2])


def test_prove_and_verify(fib_air, fib_trace) -> None:
    backend = FoldingBackend()
    proof = prove(backend, fib_air, fib_trace)
    assert proof == [0] * fib_trace.height
    assert verify(backend, fib_air, proof) is True
    assert backend.calls == [('prove', 'Fibonacci'), ('verify', 'Fibonacci')]


def test_violating_trace_never_reaches_backend(fib_air, fib_trace) -> None:
    backend = FoldingBackend()
    with pytest.raises(ConstraintViolationError) as exc_info:
        prove(backend, fib_air, fib_trace.with_value(4, 0, 0))
    assert backend.calls == []
    assert exc_info.value.air_name == 'Fibonacci'


def test_wrong_public_value_never_reaches_backend(fib_trace) -> None:
    backend = FoldingBackend()
    with pytest.raises(ConstraintViolationError):
        prove(backend, FibonacciAir(num_steps=8, final_value=22), fib_trace)
    assert backend.calls == []


def test_shape_error_never_reaches_backend(fib_air) -> None:
    backend = FoldingBackend()
    trace = generate_trace(AccumulatorAir(num_steps=8, final_value=28))
    with pytest.raises(ConfigurationError):
        prove(backend, fib_air, trace)
    assert backend.calls == []


def test_backend_rejection_propagated(fib_air, fib_trace) -> None:
    backend = RejectingBackend()
    proof = prove(backend, fib_air, fib_trace)
    assert verify(backend, fib_air, proof) is False
