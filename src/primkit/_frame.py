"""Rigid frames: origin plus orthonormal attitude."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from scipy.spatial.transform import Rotation

from .utils._safe_ops import normalize


def _identity() -> np.ndarray:
    return np.eye(3)


@dataclass
class Frame:
    """A rigid transform from local to world coordinates.

    The columns of ``att`` are the local X/Y/Z unit axes expressed in world
    coordinates, and ``pos`` is the local origin in world coordinates.
    """

    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    att: np.ndarray = field(default_factory=_identity)

    def __post_init__(self):
        self.pos = np.array(self.pos, dtype=float).reshape(3)
        self.att = np.array(self.att, dtype=float).reshape(3, 3)

    @classmethod
    def identity(cls) -> Frame:
        return cls()

    @classmethod
    def from_axes(
        cls,
        center: np.ndarray,
        ax: np.ndarray,
        ay: np.ndarray,
        az: np.ndarray,
    ) -> Frame:
        """Frame with origin ``center`` and axes normalized to unit length."""
        att = np.column_stack([normalize(ax), normalize(ay), normalize(az)])
        return cls(pos=center, att=att)

    @classmethod
    def from_rotation(cls, pos: np.ndarray, rotation: Rotation) -> Frame:
        return cls(pos=pos, att=rotation.as_matrix())

    @classmethod
    def from_wxyz_xyz(cls, wxyz: np.ndarray, xyz: np.ndarray) -> Frame:
        """Frame from a (w, x, y, z) quaternion and a translation."""
        # scipy uses (x, y, z, w) format
        quat_xyzw = np.array([wxyz[1], wxyz[2], wxyz[3], wxyz[0]])
        return cls.from_rotation(xyz, Rotation.from_quat(quat_xyzw))

    def copy(self) -> Frame:
        return Frame(pos=self.pos.copy(), att=self.att.copy())

    def axis(self, i: int) -> np.ndarray:
        return self.att[:, i]

    def xform(self, p: np.ndarray) -> np.ndarray:
        """Map local point(s) (3,) or (N, 3) to world coordinates."""
        return np.asarray(p, dtype=float) @ self.att.T + self.pos

    def xform_inv(self, p: np.ndarray) -> np.ndarray:
        """Map world point(s) (3,) or (N, 3) to local coordinates."""
        return (np.asarray(p, dtype=float) - self.pos) @ self.att

    def rotate(self, v: np.ndarray) -> np.ndarray:
        return np.asarray(v, dtype=float) @ self.att.T

    def rotate_inv(self, v: np.ndarray) -> np.ndarray:
        return np.asarray(v, dtype=float) @ self.att

    def compose(self, other: Frame) -> Frame:
        """Frame equivalent to applying ``other`` first, then ``self``."""
        return Frame(pos=self.xform(other.pos), att=self.att @ other.att)

    def inverse(self) -> Frame:
        return Frame(pos=-self.att.T @ self.pos, att=self.att.T)

    def is_proper(self) -> bool:
        """False when the attitude is a reflection (e.g. after mirroring)."""
        return bool(np.linalg.det(self.att) > 0.0)


def orthonormal_basis(z: np.ndarray) -> np.ndarray:
    """Right-handed attitude whose third column is the direction of ``z``.

    The first column is chosen perpendicular to ``z`` using the world axis
    least aligned with it.
    """
    z = normalize(z)
    if not np.any(z):
        return np.eye(3)
    helper = np.zeros(3)
    helper[int(np.argmin(np.abs(z)))] = 1.0
    x = normalize(np.cross(helper, z))
    y = np.cross(z, x)
    return np.column_stack([x, y, z])
