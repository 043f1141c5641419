"""Procedural primitive factories for testing primkit.

Categories:
    - Aligned: primitives in the world frame (box, sphere, ellipsoid, cone)
    - Oriented: rotated and translated variants
    - Mirrored: primitives whose frame is a reflection
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
from scipy.spatial.transform import Rotation

from primkit import Axis, Box, Cone, Ellipsoid, Primitive


@dataclass
class PrimitiveSpec:
    """Specification for a test primitive."""

    name: str
    factory: Callable[[], Primitive]
    description: str = ""


ROTATION = Rotation.from_euler("xyz", [0.3, -0.5, 0.8]).as_matrix()
OFFSET = np.array([0.4, -1.2, 2.5])


# =============================================================================
# ALIGNED
# =============================================================================


def make_unit_box() -> Box:
    """Box with half-extent 1 centered at the origin."""
    return Box.create_align(np.zeros(3), 2.0, 2.0, 2.0)


def make_flat_box() -> Box:
    return Box.create_align(np.zeros(3), 3.0, 2.0, 0.5)


def make_unit_sphere() -> Ellipsoid:
    return Ellipsoid.create_align(np.zeros(3), 1.0, 1.0, 1.0)


def make_ellipsoid() -> Ellipsoid:
    """Ellipsoid with radii (1, 2, 3)."""
    return Ellipsoid.create_align(np.zeros(3), 1.0, 2.0, 3.0, div=16)


def make_cone() -> Cone:
    """Cone of base radius 1 and height 2 along +z."""
    return Cone.create(np.zeros(3), np.array([0.0, 0.0, 2.0]), 1.0, div=24)


# =============================================================================
# ORIENTED
# =============================================================================


def make_oriented_box() -> Box:
    return Box.create(OFFSET, ROTATION[:, 0], ROTATION[:, 1], ROTATION[:, 2], 1.5, 0.8, 2.2)


def make_oriented_ellipsoid() -> Ellipsoid:
    return Ellipsoid.create(
        OFFSET, ROTATION[:, 0], ROTATION[:, 1], ROTATION[:, 2], 0.7, 1.3, 1.9, div=12
    )


def make_tilted_cone() -> Cone:
    return Cone.create(OFFSET, OFFSET + np.array([1.0, -0.5, 1.5]), 0.8, div=16)


# =============================================================================
# MIRRORED
# =============================================================================


def make_mirrored_box() -> Box:
    return make_oriented_box().mirror(Axis.Y)


def make_mirrored_ellipsoid() -> Ellipsoid:
    return make_oriented_ellipsoid().mirror(Axis.X)


def make_mirrored_cone() -> Cone:
    return make_tilted_cone().mirror(Axis.Z)


ALL_PRIMITIVES = [
    PrimitiveSpec("unit_box", make_unit_box, "2x2x2 box at origin"),
    PrimitiveSpec("flat_box", make_flat_box, "3x2x0.5 box"),
    PrimitiveSpec("unit_sphere", make_unit_sphere, "Sphere-degenerate ellipsoid"),
    PrimitiveSpec("ellipsoid", make_ellipsoid, "Radii (1, 2, 3)"),
    PrimitiveSpec("cone", make_cone, "Radius 1, height 2"),
    PrimitiveSpec("oriented_box", make_oriented_box, "Rotated, translated box"),
    PrimitiveSpec("oriented_ellipsoid", make_oriented_ellipsoid, "Rotated, translated ellipsoid"),
    PrimitiveSpec("tilted_cone", make_tilted_cone, "Cone with a skew axis"),
    PrimitiveSpec("mirrored_box", make_mirrored_box, "Box with reflected frame"),
    PrimitiveSpec("mirrored_ellipsoid", make_mirrored_ellipsoid, "Ellipsoid with reflected frame"),
    PrimitiveSpec("mirrored_cone", make_mirrored_cone, "Cone mirrored across z"),
]


def get_primitive_names() -> list[str]:
    return [s.name for s in ALL_PRIMITIVES]


def get_primitive_by_name(name: str) -> PrimitiveSpec | None:
    for spec in ALL_PRIMITIVES:
        if spec.name == name:
            return spec
    return None
