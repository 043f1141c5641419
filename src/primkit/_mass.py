"""Closed-form volume and inertia formulas (unit density)."""

from __future__ import annotations

import numpy as np


def rotate_inertia(att: np.ndarray, local: np.ndarray) -> np.ndarray:
    """Express a local-frame inertia tensor in world orientation: R I R^T."""
    return att @ local @ att.T


def _axial_inertia(xx: float, yy: float, zz: float) -> np.ndarray:
    """Diagonal inertia from the per-axis second moments."""
    return np.diag([yy + zz, zz + xx, xx + yy])


def box_volume(depth: float, width: float, height: float) -> float:
    return depth * width * height


def box_inertia(depth: float, width: float, height: float) -> np.ndarray:
    """Principal inertia of a box about its center, edges along local x/y/z."""
    c = box_volume(depth, width, height) / 12
    return _axial_inertia(depth**2 * c, width**2 * c, height**2 * c)


def ellipsoid_volume(rx: float, ry: float, rz: float) -> float:
    return 4.0 * np.pi * rx * ry * rz / 3.0


def ellipsoid_inertia(rx: float, ry: float, rz: float) -> np.ndarray:
    """Principal inertia of an ellipsoid about its center."""
    c = 0.2 * ellipsoid_volume(rx, ry, rz)
    return _axial_inertia(rx**2 * c, ry**2 * c, rz**2 * c)


def cone_volume(radius: float, height: float) -> float:
    return np.pi * radius**2 * height / 3.0


def cone_inertia(radius: float, height: float) -> np.ndarray:
    """Principal inertia of a cone about its barycenter, axis along local z.

    Izz = 3/10 m r^2 and Ixx = Iyy = m (3/20 r^2 + 3/80 h^2).
    """
    m = cone_volume(radius, height)
    izz = 0.3 * m * radius**2
    ixx = m * (0.15 * radius**2 + 0.0375 * height**2)
    return np.diag([ixx, ixx, izz])
