"""Triangle mesh container produced by tessellation."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import trimesh


@dataclass
class Mesh:
    """Vertices plus triangular faces with outward (counter-clockwise) winding."""

    vertices: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))  # (N, 3)
    faces: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.int64))  # (M, 3)

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=float).reshape(-1, 3)
        self.faces = np.asarray(self.faces, dtype=np.int64).reshape(-1, 3)

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    def triangles(self) -> np.ndarray:
        """(M, 3, 3) corner coordinates of every face."""
        return self.vertices[self.faces]

    def face_normals(self) -> np.ndarray:
        """Unnormalized face normals (length = twice the face area)."""
        tri = self.triangles()
        return np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])

    def face_areas(self) -> np.ndarray:
        return 0.5 * np.linalg.norm(self.face_normals(), axis=1)

    def signed_volume(self) -> float:
        """Enclosed volume by the divergence theorem.

        Positive for a closed mesh with outward winding, negative if every
        face is wound inward.
        """
        tri = self.triangles()
        if len(tri) == 0:
            return 0.0
        return float(np.einsum("ij,ij->i", tri[:, 0], np.cross(tri[:, 1], tri[:, 2])).sum() / 6.0)

    def is_degenerate(self, tol: float = 1e-12) -> bool:
        """True if any face has (numerically) collinear corners."""
        return bool(np.any(self.face_areas() <= tol))

    def flipped(self) -> Mesh:
        """Copy with every face's winding reversed."""
        return Mesh(vertices=self.vertices.copy(), faces=self.faces[:, ::-1].copy())

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh object, keeping vertex order and winding."""
        return trimesh.Trimesh(vertices=self.vertices.copy(), faces=self.faces.copy(), process=False)
