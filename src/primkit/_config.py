"""Configuration for primitive queries and tessellation."""

from __future__ import annotations

import jax_dataclasses as jdc

from ._errors import MalformedInputError

DEFAULT_DIV = 32
"""Tessellation division count used when 0 is supplied."""

TOL = 1e-12
"""Boundary slack used by rim-mode inside tests."""


@jdc.pytree_dataclass
class PrimitiveParams:
    """Numerical parameters shared by every primitive."""

    default_div: int = DEFAULT_DIV
    """Division count substituted for 0 at construction time.

    Controls the latitude/longitude resolution of ellipsoid meshes and the
    number of base ring vertices of cone meshes.
    """

    rim_tolerance: float = TOL
    """Slack added to boundary comparisons in rim mode."""

    root_tolerance: float = 1e-6
    """Tolerance for accepting a polynomial root as real and non-negative.

    Applied to the imaginary part (relative to the root magnitude, floored at
    1) and to the real part (a root down to -root_tolerance is clipped to 0).
    """

    newton_iters: int = 4
    """Newton steps used to polish the selected ellipsoid multiplier."""

    def resolve_div(self, div: int) -> int:
        """Substitute the default division for 0 and validate the rest."""
        if div == 0:
            return int(self.default_div)
        if div < 3:
            raise MalformedInputError(f"Division count must be >= 3, got {div}")
        return int(div)
