"""Primitives - field arithmetic, trace storage and polynomial helpers."""

from primitives.errors import AirError, ConfigurationError, ConstraintViolationError
from primitives.field import (
    FF,
    FIELD_EXTENSION_DEGREE,
    GOLDILOCKS_PRIME,
    SHIFT,
    domain_size,
    embed,
    extension_field,
    ff3,
    ff3_coeffs,
    get_omega,
    get_omega_inv,
    lift,
    lift_all,
)
from primitives.trace import RowView, TraceMatrix

__all__ = [
    # Errors
    "AirError",
    "ConfigurationError",
    "ConstraintViolationError",
    # Field
    "FF",
    "extension_field",
    "ff3",
    "ff3_coeffs",
    "FIELD_EXTENSION_DEGREE",
    "GOLDILOCKS_PRIME",
    "SHIFT",
    "domain_size",
    "embed",
    "get_omega",
    "get_omega_inv",
    "lift",
    "lift_all",
    # Trace
    "TraceMatrix",
    "RowView",
]
