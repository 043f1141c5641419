"""Tests for closed-form mass properties."""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from primkit._mass import (
    box_inertia,
    box_volume,
    cone_inertia,
    cone_volume,
    ellipsoid_inertia,
    ellipsoid_volume,
    rotate_inertia,
)


def test_box():
    assert box_volume(1.0, 2.0, 3.0) == 6.0
    np.testing.assert_allclose(box_inertia(1.0, 2.0, 3.0), np.diag([6.5, 5.0, 2.5]))


def test_unit_cube_inertia():
    np.testing.assert_allclose(box_inertia(1.0, 1.0, 1.0), np.eye(3) / 6.0)


def test_sphere():
    assert ellipsoid_volume(1.0, 1.0, 1.0) == pytest.approx(4.0 * np.pi / 3.0)
    np.testing.assert_allclose(ellipsoid_inertia(1.0, 1.0, 1.0), np.eye(3) * 8.0 * np.pi / 15.0)


def test_cone():
    m = cone_volume(2.0, 3.0)
    assert m == pytest.approx(4.0 * np.pi)
    inertia = cone_inertia(2.0, 3.0)
    assert inertia[2, 2] == pytest.approx(0.3 * m * 4.0)
    assert inertia[0, 0] == pytest.approx(m * (0.6 + 0.3375))
    assert inertia[0, 0] == inertia[1, 1]


def test_rotate_inertia_preserves_invariants():
    local = np.diag([1.0, 2.0, 3.0])
    att = Rotation.from_rotvec([0.3, -0.4, 1.2]).as_matrix()
    world = rotate_inertia(att, local)
    np.testing.assert_allclose(world, world.T, atol=1e-12)
    np.testing.assert_allclose(np.sort(np.linalg.eigvalsh(world)), [1.0, 2.0, 3.0])
    np.testing.assert_allclose(att.T @ world @ att, local, atol=1e-12)
