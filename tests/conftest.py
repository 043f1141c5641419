"""Pytest configuration and fixtures for primkit tests."""

from __future__ import annotations

import numpy as np
import pytest

from primkit import Primitive

from .primitives import PrimitiveSpec, get_primitive_by_name


# =============================================================================
# TOLERANCE SETTINGS
# =============================================================================

# Geometric results computed through one or two frame transforms
ATOL = 1e-9

# Relative tolerance for mesh-based estimates of analytic mass properties
MESH_RTOL = 1e-2


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def primitive_spec(request) -> PrimitiveSpec:
    """Get a primitive spec by name (used with indirect parametrization)."""
    spec = get_primitive_by_name(request.param)
    if spec is None:
        pytest.fail(f"Unknown primitive: {request.param}")
    return spec


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


# =============================================================================
# HELPERS
# =============================================================================


def exterior_points(prim: Primitive, rng: np.random.Generator, n: int = 50, radius: float = 6.0) -> np.ndarray:
    """Points on a sphere around the barycenter, far enough to be outside every test primitive."""
    dirs = rng.normal(size=(n, 3))
    dirs /= np.linalg.norm(dirs, axis=1, keepdims=True)
    return prim.barycenter() + radius * dirs


def assert_outward_winding(prim: Primitive, msg: str = "") -> None:
    """Every face normal of a convex primitive's mesh must point away from its barycenter."""
    mesh = prim.to_mesh()
    tri = mesh.triangles()
    outward = np.einsum("ij,ij->i", mesh.face_normals(), tri.mean(axis=1) - prim.barycenter())
    bad = np.flatnonzero(outward <= 0.0)
    if len(bad) > 0:
        raise AssertionError(f"{len(bad)} face(s) wound inward, first: {bad[:5]}. {msg}")


# =============================================================================
# PYTEST HOOKS
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
