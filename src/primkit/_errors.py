"""Error kinds raised by primitive construction, parsing and queries."""

from __future__ import annotations


class PrimitiveError(Exception):
    """Base class for errors raised by primkit."""


class MalformedInputError(PrimitiveError, ValueError):
    """A text field was not recognized, or a required value is missing or invalid."""


class NumericInconsistencyError(PrimitiveError, ArithmeticError):
    """A solver produced no admissible answer for a well-formed query.

    Raised for an exterior closest-point query on an ellipsoid with a zero or
    non-finite radius, or when its sextic has no real non-negative root.
    """
