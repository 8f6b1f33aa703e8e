"""Exception types raised by the estimation layer."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when a sample or estimation parameter violates a precondition.

    Subclasses :class:`ValueError` so callers that already guard numerical
    routines with ``except ValueError`` keep working.
    """
