"""Error taxonomy for AIR definition, trace generation and checking.

Two kinds originate here:

- ConfigurationError: structurally invalid input (trace width differs from the
  AIR width, empty evaluation domain, zero requested steps, wrong number of
  public values). Raised before any constraint is evaluated.
- ConstraintViolationError: a trace that does not satisfy its AIR. Raised only
  on request by the concrete evaluator and carries every violation found.

Rejections reported by an external proving backend are not part of this
taxonomy.
"""

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from protocol.evaluator import Violation


class AirError(Exception):
    """Base class for all errors raised by the AIR framework."""


class ConfigurationError(AirError, ValueError):
    """Invalid parameters or mismatched shapes, never silently coerced."""


class ConstraintViolationError(AirError):
    """A trace violates one or more constraints of its AIR.

    Attributes:
        violations: Every violation found, ordered by (row, constraint index)
    """

    def __init__(self, violations: Sequence['Violation'], air_name: str = 'AIR'):
        self.violations = list(violations)
        self.air_name = air_name
        rows = sorted({v.row for v in self.violations})
        shown = ', '.join(str(r) for r in rows[:8])
        if len(rows) > 8:
            shown += ', ...'
        super().__init__(
            f"{air_name}: {len(self.violations)} constraint violation(s) "
            f"on row(s) {shown}"
        )
