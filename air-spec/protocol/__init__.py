"""Protocol - constraint checking and the interface to proving backends."""

from protocol.backend import AirDescription, ProvingBackend, prove, verify
from protocol.config import EvaluatorConfig
from protocol.evaluator import (
    EvaluationReport,
    RowConstraintBuilder,
    Violation,
    assert_constraints,
    check_constraints,
)
from protocol.folder import (
    DomainConstraintFolder,
    PointConstraintFolder,
    fold_at_point,
    fold_constraints,
    fold_trace,
)
from protocol.symbolic import (
    Expr,
    SymbolicConstraint,
    SymbolicConstraintBuilder,
    max_constraint_degree,
    quotient_degree,
    symbolic_constraints,
)

__all__ = [
    # Concrete evaluation
    "check_constraints",
    "assert_constraints",
    "EvaluationReport",
    "Violation",
    "RowConstraintBuilder",
    "EvaluatorConfig",
    # Symbolic evaluation
    "Expr",
    "SymbolicConstraint",
    "SymbolicConstraintBuilder",
    "symbolic_constraints",
    "max_constraint_degree",
    "quotient_degree",
    # Folding
    "DomainConstraintFolder",
    "PointConstraintFolder",
    "fold_constraints",
    "fold_trace",
    "fold_at_point",
    # Backend
    "AirDescription",
    "ProvingBackend",
    "prove",
    "verify",
]
