"""Closest-point solvers in a primitive's local frame.

All functions here take and return local coordinates; the primitives do the
world/local transforms around them.
"""

from __future__ import annotations

import numpy as np
from loguru import logger

from ._config import PrimitiveParams
from ._errors import NumericInconsistencyError


def clamp_box_local(v: np.ndarray, half: np.ndarray) -> np.ndarray:
    """Closest point of an axis-aligned centered box; exact per axis."""
    return np.clip(v, -half, half)


# =============================================================================
# Ellipsoid
# =============================================================================


def ellipsoid_sextic(rx: float, ry: float, rz: float, v: np.ndarray) -> np.ndarray:
    """
    Coefficients of the Lagrange-multiplier polynomial for an aligned ellipsoid.

    With p, q, r the squared semi-axes and a, b, c the squared normalized
    coordinates of ``v``, the stationarity condition of the closest point
    cp_i = v_i / (1 + l / r_i^2) on the surface reduces to a degree-6
    polynomial in l whose unique non-negative real root is the multiplier.

    Args:
        rx, ry, rz: Semi-axis radii.
        v: (3,) query point in the ellipsoid's local frame.

    Returns:
        (7,) coefficients, highest power first (``numpy.roots`` order).
    """
    a = (v[0] / rx) ** 2
    b = (v[1] / ry) ** 2
    c = (v[2] / rz) ** 2
    p, q, r = rx * rx, ry * ry, rz * rz
    p2, q2, r2 = p * p, q * q, r * r
    pqr = p * q * r
    return np.array([
        1.0,
        2 * (p + q + r),
        (1 - a) * p2 + (1 - b) * q2 + (1 - c) * r2 + 4 * (p * q + q * r + r * p),
        2 * (1 - a) * (q + r) * p2 + 2 * (1 - b) * (r + p) * q2 + 2 * (1 - c) * (p + q) * r2 + 8 * pqr,
        (1 - b - a) * p2 * q2 + (1 - a - c) * p2 * r2 + (1 - c - b) * q2 * r2
        + 4 * pqr * ((1 - a) * p + (1 - b) * q + (1 - c) * r),
        2 * pqr * ((1 - b - a) * p * q + (1 - a - c) * r * p + (1 - c - b) * q * r),
        (1 - a - b - c) * pqr * pqr,
    ])


def select_root(roots: np.ndarray, params: PrimitiveParams | None = None) -> float:
    """
    Pick the multiplier: the largest real root, which must be non-negative.

    For an exterior point the sextic has exactly one root >= 0; every other
    real root lies below -min(rx, ry, rz)^2. Those roots crowd towards zero
    for a thin ellipsoid, so they are never candidates. A real part down to
    -root_tolerance is clipped to 0.

    Raises:
        NumericInconsistencyError: If no real root is non-negative.
    """
    cfg = params or PrimitiveParams()
    tol = cfg.root_tolerance
    roots = np.asarray(roots, dtype=complex)
    real = roots[np.abs(roots.imag) <= tol * np.maximum(1.0, np.abs(roots))].real
    if len(real) == 0 or real.max() < -tol:
        logger.error(f"No real non-negative root among {roots}")
        raise NumericInconsistencyError(
            "Ellipsoid closest-point polynomial has no real non-negative root"
        )
    return max(0.0, float(real.max()))


def _polish_multiplier(lam: float, sq_radii: np.ndarray, v: np.ndarray, n_iters: int) -> float:
    """Newton steps on sum(v_i^2 p_i / (p_i + l)^2) - 1 = 0."""
    w = v**2 * sq_radii
    for _ in range(n_iters):
        d = sq_radii + lam
        f = float(np.sum(w / d**2)) - 1.0
        df = -2.0 * float(np.sum(w / d**3))
        if df == 0.0 or not np.isfinite(f):
            break
        lam = max(0.0, lam - f / df)
    return lam


def ellipsoid_closest_local(
    rx: float,
    ry: float,
    rz: float,
    v: np.ndarray,
    params: PrimitiveParams | None = None,
) -> np.ndarray:
    """
    Closest surface point of an aligned ellipsoid to an exterior point.

    Args:
        rx, ry, rz: Semi-axis radii.
        v: (3,) exterior query point in local coordinates.
        params: Solver tolerances. If None, uses defaults.

    Returns:
        (3,) closest point in local coordinates.

    Raises:
        NumericInconsistencyError: If the sextic has no admissible root,
            or a radius is zero or not finite.
    """
    cfg = params or PrimitiveParams()
    v = np.asarray(v, dtype=float)
    sq_radii = np.array([rx, ry, rz], dtype=float) ** 2
    if not np.all(np.isfinite(sq_radii)) or not np.all(sq_radii > 0.0):
        logger.error(f"Degenerate ellipsoid radii {(rx, ry, rz)}")
        raise NumericInconsistencyError(
            f"Ellipsoid closest point needs positive finite radii, got {(rx, ry, rz)}"
        )

    roots = np.roots(ellipsoid_sextic(rx, ry, rz, v))
    lam = select_root(roots, cfg)
    lam = _polish_multiplier(lam, sq_radii, v, int(cfg.newton_iters))
    logger.debug(f"Ellipsoid multiplier {lam:.6g} for local point {v}")

    return v / (1.0 + lam / sq_radii)


# =============================================================================
# Cone
# =============================================================================


def cone_closest_local(radius: float, height: float, v: np.ndarray) -> np.ndarray:
    """
    Closest boundary point of a z-axis cone to an exterior point.

    The cone has its base disk at z=0 and its apex at z=height. The problem is
    solved in the meridian half-plane (rho, z) through the query point, where
    the boundary is the base segment and the lateral segment. Candidates are
    compared in the order lateral, base, apex, so ties go to the lateral
    surface.

    Args:
        radius: Base radius.
        height: Distance from base to apex.
        v: (3,) query point in local coordinates.

    Returns:
        (3,) closest point in local coordinates.
    """
    v = np.asarray(v, dtype=float)
    rho = float(np.hypot(v[0], v[1]))
    q = np.array([rho, v[2]])

    rim = np.array([radius, 0.0])
    apex = np.array([0.0, height])
    edge = apex - rim
    ee = float(edge @ edge)
    t = float(np.clip((q - rim) @ edge / ee, 0.0, 1.0)) if ee > 0.0 else 0.0

    candidates = [
        rim + t * edge,
        np.array([min(rho, radius), 0.0]),
        apex,
    ]
    dists = [float(np.linalg.norm(q - c)) for c in candidates]
    # argmin returns the first minimum, which keeps the preference order
    best = candidates[int(np.argmin(dists))]

    if rho > 0.0:
        ux, uy = v[0] / rho, v[1] / rho
    else:
        ux, uy = 1.0, 0.0
    return np.array([best[0] * ux, best[0] * uy, best[1]])
