"""Interface to an external proving backend.

Commitment, FRI, the Fiat-Shamir transcript and proof serialization belong to
the backend. The AIR framework hands it an AirDescription (the AIR itself,
so eval() can be replayed symbolically, plus its width, public inputs and
constraint set) and, on the proving side, a trace the concrete evaluator has
already accepted. A trace with violations never reaches the backend.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from constraints.base import Air
from primitives.errors import ConfigurationError
from primitives.trace import TraceMatrix
from protocol.config import DEFAULT_CONFIG, EvaluatorConfig
from protocol.evaluator import assert_constraints
from protocol.symbolic import (
    SymbolicConstraint,
    max_constraint_degree,
    quotient_degree,
    symbolic_constraints,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AirDescription:
    """Everything a backend needs about an AIR, and nothing about the trace.

    Attributes:
        air: The AIR; backends re-run air.eval() with their own folders
        width: Number of trace columns
        public_values: Public input vector bound into boundary constraints
        constraints: The (scope, expression) set eval() registers
        max_degree: Largest constraint degree, selectors included
        quotient_degree: Quotient chunks, a power of two
    """
    air: Air
    width: int
    public_values: Tuple[Any, ...]
    constraints: Tuple[SymbolicConstraint, ...]
    max_degree: int
    quotient_degree: int

    @classmethod
    def from_air(cls, air: Air, public_values: Optional[Sequence[int]] = None) -> 'AirDescription':
        if public_values is None:
            public_values = air.public_values()
        if len(public_values) != air.num_public_values():
            raise ConfigurationError(
                f"{air.name} expects {air.num_public_values()} public values, "
                f"got {len(public_values)}"
            )
        return cls(
            air=air,
            width=air.width(),
            public_values=tuple(public_values),
            constraints=tuple(symbolic_constraints(air)),
            max_degree=max_constraint_degree(air),
            quotient_degree=quotient_degree(air),
        )


class ProvingBackend(ABC):
    """A cryptographic proof system consuming AIRs."""

    @abstractmethod
    def prove(self, description: AirDescription, trace: TraceMatrix) -> Any:
        """Produce an opaque proof that `trace` satisfies `description`."""
        pass

    @abstractmethod
    def verify(self, description: AirDescription, proof: Any) -> bool:
        """Check a proof against the AIR and public inputs only."""
        pass


def prove(
    backend: ProvingBackend,
    air: Air,
    trace: TraceMatrix,
    public_values: Optional[Sequence[int]] = None,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> Any:
    """Check `trace` concretely, then hand it to `backend`.

    Raises:
        ConfigurationError: On shape mismatches
        ConstraintViolationError: If any constraint fails; the backend is not called
    """
    assert_constraints(air, trace, public_values, config)
    description = AirDescription.from_air(air, public_values)
    logger.debug(
        f"Proving {air.name}: {trace.height} rows, {len(description.constraints)} constraints, "
        f"max degree {description.max_degree}"
    )
    return backend.prove(description, trace)


def verify(
    backend: ProvingBackend,
    air: Air,
    proof: Any,
    public_values: Optional[Sequence[int]] = None,
) -> bool:
    """Verify `proof` for `air`; the backend's verdict is returned unchanged."""
    description = AirDescription.from_air(air, public_values)
    accepted = backend.verify(description, proof)
    logger.debug(f"Verification of {air.name}: {'accepted' if accepted else 'rejected'}")
    return accepted
