"""Tests for rigid frames."""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from primkit import Frame
from primkit._frame import orthonormal_basis

from .conftest import ATOL


@pytest.fixture
def frame() -> Frame:
    return Frame.from_rotation(np.array([1.0, -2.0, 0.5]), Rotation.from_euler("zyx", [0.4, 1.1, -0.7]))


class TestFrame:
    def test_identity(self):
        f = Frame.identity()
        p = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(f.xform(p), p)
        np.testing.assert_array_equal(f.xform_inv(p), p)

    def test_xform_uses_columns_as_axes(self, frame):
        for i in range(3):
            np.testing.assert_allclose(frame.xform(np.eye(3)[i]), frame.pos + frame.axis(i))

    def test_batch_matches_single(self, frame, rng):
        pts = rng.normal(size=(10, 3))
        batch = frame.xform(pts)
        for p, q in zip(pts, batch):
            np.testing.assert_allclose(frame.xform(p), q)
        np.testing.assert_allclose(frame.xform_inv(batch), pts, atol=ATOL)

    def test_inverse_and_compose(self, frame):
        ident = frame.compose(frame.inverse())
        np.testing.assert_allclose(ident.pos, np.zeros(3), atol=ATOL)
        np.testing.assert_allclose(ident.att, np.eye(3), atol=ATOL)

    def test_compose_applies_right_operand_first(self, frame):
        other = Frame(pos=np.array([0.0, 3.0, -1.0]), att=Rotation.from_rotvec([0.2, 0.0, 0.9]).as_matrix())
        p = np.array([0.3, 0.6, -0.9])
        np.testing.assert_allclose(frame.compose(other).xform(p), frame.xform(other.xform(p)), atol=ATOL)

    def test_rotate_ignores_translation(self, frame):
        v = np.array([0.0, 0.0, 1.0])
        np.testing.assert_allclose(frame.rotate(v), frame.xform(v) - frame.pos, atol=ATOL)
        np.testing.assert_allclose(frame.rotate_inv(frame.rotate(v)), v, atol=ATOL)

    def test_from_wxyz_xyz(self):
        rot = Rotation.from_euler("xyz", [0.1, 0.2, 0.3])
        x, y, z, w = rot.as_quat()
        f = Frame.from_wxyz_xyz(np.array([w, x, y, z]), np.array([1.0, 2.0, 3.0]))
        np.testing.assert_allclose(f.att, rot.as_matrix(), atol=1e-12)
        np.testing.assert_array_equal(f.pos, [1.0, 2.0, 3.0])

    def test_from_axes_normalizes(self):
        f = Frame.from_axes(np.zeros(3), [3.0, 0, 0], [0, 0.5, 0], [0, 0, 2.0])
        np.testing.assert_array_equal(f.att, np.eye(3))

    def test_reflection_is_not_proper(self, frame):
        mirrored = frame.copy()
        mirrored.att[0, :] *= -1
        assert frame.is_proper()
        assert not mirrored.is_proper()
        assert frame.att[0, 0] == -mirrored.att[0, 0]


class TestOrthonormalBasis:
    @pytest.mark.parametrize(
        "z", [[0, 0, 1], [0, 0, -3], [1, 0, 0], [1, -2, 0.5], [1e-3, 1e-3, 10.0]]
    )
    def test_right_handed_with_z_direction(self, z):
        att = orthonormal_basis(np.array(z, dtype=float))
        np.testing.assert_allclose(att.T @ att, np.eye(3), atol=1e-12)
        assert np.linalg.det(att) == pytest.approx(1.0)
        np.testing.assert_allclose(att[:, 2], np.array(z) / np.linalg.norm(z), atol=1e-12)

    def test_zero_vector_gives_identity(self):
        np.testing.assert_array_equal(orthonormal_basis(np.zeros(3)), np.eye(3))
