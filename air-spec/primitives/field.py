"""Goldilocks field GF(p) and cubic extension GF(p^3).

Uses galois for all field arithmetic. FF is the base field the traces live in;
FF3 is the extension field a proving backend draws its challenges from.

Nothing in the constraint framework depends on this particular prime: every
component takes the field class as a parameter and only relies on addition,
multiplication and construction from small integers.

FF3 is built on first access because galois.GF() for an extension of a 64-bit
prime takes several seconds to initialize.
"""

from functools import lru_cache
from typing import List

import galois
import numpy as np

from primitives.errors import ConfigurationError

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

FIELD_EXTENSION_DEGREE = 3

# Domain shift for coset evaluation
SHIFT = FF(7)


@lru_cache(maxsize=None)
def extension_field():
    """Cubic extension field GF(p^3) with irreducible polynomial x^3 - x - 1."""
    # galois coefficient order is [x^3, x^2, x^1, x^0]
    irr_poly = galois.Poly([1, 0, GOLDILOCKS_PRIME - 1, GOLDILOCKS_PRIME - 1], field=FF)
    return galois.GF(GOLDILOCKS_PRIME**3, irreducible_poly=irr_poly)


def __getattr__(name: str):
    if name == 'FF3':
        return extension_field()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# --- Lifting Into a Field ---

def lift(field, value):
    """Map an integer or a field element into `field`.

    Integers are reduced modulo the characteristic, so negative integers land
    on their additive inverses: lift(F, -1) == -F(1) for prime fields and
    extension fields alike. Elements of `field` pass through unchanged, and
    elements of the prime subfield are embedded into an extension.
    """
    if isinstance(value, galois.FieldArray):
        source = type(value)
        if source is field:
            return value.copy()
        if source.order == field.characteristic:
            return embed(value, field)
        raise TypeError(f"cannot lift an element of {source.name} into {field.name}")
    return field(int(value) % field.characteristic)


def lift_all(field, values) -> galois.FieldArray:
    """Lift a sequence of integers or field elements into a 1-D field array."""
    if isinstance(values, galois.FieldArray) and type(values) is field:
        return values.copy()
    result = field.Zeros(len(values))
    for i, v in enumerate(values):
        result[i] = lift(field, v)
    return result


def embed(values, field=None):
    """Embed base field values into an extension field (FF3 by default)."""
    if field is None:
        field = extension_field()
    return field(np.asarray(values, dtype=np.uint64))


# --- Coefficient Order Conversion ---
# Galois uses descending order [a2, a1, a0], we use ascending [a0, a1, a2].


def ff3(coeffs: List[int]):
    """Construct FF3 element from ascending-order coefficients [a0, a1, a2]."""
    return extension_field().Vector(coeffs[::-1])


def ff3_coeffs(elem) -> List[int]:
    """Extract ascending-order coefficients [a0, a1, a2] from FF3 element."""
    return [int(c) for c in elem.vector()[::-1]]


# --- Evaluation Domains ---

def domain_size(num_steps: int) -> int:
    """Smallest power of two that holds `num_steps` rows."""
    if num_steps < 1:
        raise ConfigurationError(f"num_steps must be >= 1, got {num_steps}")
    return 1 << (num_steps - 1).bit_length()


def log2_exact(n: int) -> int:
    """log2 of a power of two."""
    if n < 1 or n & (n - 1):
        raise ConfigurationError(f"{n} is not a power of two")
    return n.bit_length() - 1


def get_omega(n_bits: int):
    """Return primitive 2^n_bits-th root of unity."""
    if n_bits > 32:
        raise ConfigurationError(f"n_bits must be <= 32, got {n_bits}")
    return FF.primitive_root_of_unity(1 << n_bits)


def get_omega_inv(n_bits: int):
    """Inverse of get_omega(n_bits)."""
    return get_omega(n_bits) ** -1


def domain_points(size: int, shift=None) -> galois.FieldArray:
    """Points shift * w^i for i in [0, size), w a primitive size-th root of unity."""
    omega = get_omega(log2_exact(size))
    points = omega ** np.arange(size)
    return points if shift is None else shift * points
