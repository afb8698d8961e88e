"""Polynomial views of trace columns.

A trace column of height N is the evaluation table of a unique polynomial of
degree < N over the subgroup H = {w^i}. A proving backend commits to these
polynomials and opens them at points outside H; the helpers here reproduce
those openings so the point folder can be checked against the domain folder.
"""

from typing import List

import galois

from primitives.errors import ConfigurationError
from primitives.field import (
    FF,
    FIELD_EXTENSION_DEGREE,
    domain_points,
    embed,
    extension_field,
    ff3,
    ff3_coeffs,
    get_omega,
    get_omega_inv,
    log2_exact,
)


def interpolate(points: galois.FieldArray, values: galois.FieldArray) -> galois.Poly:
    """Unique polynomial of degree < len(points) through (points[i], values[i]).

    Lagrange interpolation, for arbitrary point sets such as cosets. Columns
    over the subgroup H go through to_coefficients() instead.
    """
    return galois.lagrange_poly(points, values)


def to_coefficients(evals: galois.FieldArray) -> galois.FieldArray:
    """Ascending coefficients of the polynomial taking `evals` on H = <w>.

    FF3 evaluations are transformed component-wise over the base field.
    """
    field = type(evals)
    n = len(evals)
    w_inv = int(get_omega_inv(log2_exact(n)))
    if field is FF:
        return galois.intt(evals, omega=w_inv)
    if field is not extension_field():
        raise ConfigurationError(f"no transform over {field.name}")

    coeffs = [ff3_coeffs(v) for v in evals]
    components = [FF([c[i] for c in coeffs]) for i in range(FIELD_EXTENSION_DEGREE)]
    results = [galois.intt(comp, omega=w_inv) for comp in components]

    out = field.Zeros(n)
    for i in range(n):
        out[i] = ff3([int(r[i]) for r in results])
    return out


def column_polys(values: galois.FieldArray) -> List[galois.Poly]:
    """Polynomial of every column of a (height, width) trace array over H."""
    return [
        galois.Poly(to_coefficients(values[:, j])[::-1])
        for j in range(values.shape[1])
    ]


def evaluate(poly: galois.Poly, point):
    """Evaluate a base field polynomial at a point of FF or of an extension.

    Coefficients are embedded into the point's field and the polynomial is
    evaluated by Horner's rule.
    """
    field = type(point)
    if field is poly.field:
        return poly(point)
    acc = field(0)
    for c in poly.coeffs:
        acc = acc * point + embed(c, field)
    return acc


def evaluate_on_coset(poly: galois.Poly, size: int, shift=None) -> galois.FieldArray:
    """Evaluate `poly` on shift * <w_size>, the size-element (coset of a) subgroup."""
    return poly(domain_points(size, shift))


def vanishing_poly(height: int) -> galois.Poly:
    """Z_H(x) = x^height - 1."""
    return galois.Poly.Degrees([height, 0], coeffs=FF([1, FF.characteristic - 1]))


def next_point(point, height: int):
    """w * point, the point a "next row" opening is taken at."""
    omega = get_omega(log2_exact(height))
    if type(point) is not FF:
        omega = embed(omega, type(point))
    return point * omega
