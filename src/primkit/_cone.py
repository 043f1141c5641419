"""Right circular cone primitive."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from loguru import logger

from ._closest import cone_closest_local
from ._config import DEFAULT_DIV, PrimitiveParams
from ._frame import Frame, orthonormal_basis
from ._mass import cone_inertia, cone_volume, rotate_inertia
from ._mesh import Mesh
from ._primitives import Axis, Primitive, PrimitiveType, apply_fields, mirror_coordinate
from .utils._text_io import Field, format_real, format_vec3, read_float, read_int, read_vec3


@dataclass
class Cone(Primitive):
    """Cone given by its base center, apex (``vert``) and base radius.

    The cone stores no frame; :meth:`frame` derives one on demand with its
    origin at the base center and its z axis pointing to the apex.
    """

    type = PrimitiveType.CONE

    center: np.ndarray = field(default_factory=lambda: np.zeros(3))
    vert: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius: float = 0.0
    div: int = DEFAULT_DIV

    def __post_init__(self):
        self.center = np.array(self.center, dtype=float).reshape(3)
        self.vert = np.array(self.vert, dtype=float).reshape(3)

    @classmethod
    def create(
        cls,
        center: np.ndarray,
        vert: np.ndarray,
        radius: float,
        div: int = 0,
        params: PrimitiveParams | None = None,
    ) -> Cone:
        """
        Cone from base center ``center`` to apex ``vert``.

        Args:
            center: Center of the base disk.
            vert: Apex.
            radius: Base radius; its absolute value is stored.
            div: Number of base ring vertices in :meth:`to_mesh`; 0 selects
                ``params.default_div``.
            params: Supplies the default division. If None, uses defaults.

        Raises:
            MalformedInputError: If ``div`` is neither 0 nor at least 3.
        """
        cfg = params or PrimitiveParams()
        return cls(center=center, vert=vert, radius=abs(float(radius)), div=cfg.resolve_div(div))

    def axis(self) -> np.ndarray:
        """Vector from the base center to the apex."""
        return self.vert - self.center

    def height(self) -> float:
        return float(np.linalg.norm(self.axis()))

    def frame(self) -> Frame:
        return Frame(pos=self.center, att=orthonormal_basis(self.axis()))

    def copy(self) -> Cone:
        return Cone(center=self.center.copy(), vert=self.vert.copy(), radius=self.radius, div=self.div)

    def mirror(self, axis: Axis | int) -> Cone:
        return Cone(
            center=mirror_coordinate(self.center, axis),
            vert=mirror_coordinate(self.vert, axis),
            radius=self.radius,
            div=self.div,
        )

    def xform(self, f: Frame) -> Cone:
        return Cone(center=f.xform(self.center), vert=f.xform(self.vert), radius=self.radius, div=self.div)

    def xform_inv(self, f: Frame) -> Cone:
        return Cone(
            center=f.xform_inv(self.center), vert=f.xform_inv(self.vert), radius=self.radius, div=self.div
        )

    def closest(
        self, p: np.ndarray, params: PrimitiveParams | None = None
    ) -> tuple[np.ndarray, float]:
        """Closest boundary point; inside points (rim mode) come back unchanged at distance 0."""
        p = np.asarray(p, dtype=float)
        if self.is_inside(p, rim=True, params=params):
            return p.copy(), 0.0
        frame = self.frame()
        cp = frame.xform(cone_closest_local(self.radius, self.height(), frame.xform_inv(p)))
        return cp, float(np.linalg.norm(p - cp))

    def is_inside(
        self, p: np.ndarray, rim: bool = False, params: PrimitiveParams | None = None
    ) -> bool:
        cfg = params or PrimitiveParams()
        h = self.height()
        if h == 0.0:
            return False
        tol = cfg.rim_tolerance if rim else 0.0
        local = self.frame().xform_inv(p)
        z = local[2]
        if z < -tol or z > h + tol:
            return False
        return bool(np.hypot(local[0], local[1]) <= self.radius * (1.0 - z / h) + tol)

    def volume(self) -> float:
        return cone_volume(self.radius, self.height())

    def barycenter(self) -> np.ndarray:
        return self.center + 0.25 * self.axis()

    def inertia(self) -> np.ndarray:
        return rotate_inertia(self.frame().att, cone_inertia(self.radius, self.height()))

    def bary_inertia(self) -> tuple[np.ndarray, np.ndarray]:
        axis = self.axis()
        h = float(np.linalg.norm(axis))
        att = orthonormal_basis(axis)
        return self.center + 0.25 * axis, rotate_inertia(att, cone_inertia(self.radius, h))

    def to_mesh(self) -> Mesh:
        """
        Base ring of ``div`` vertices followed by the apex.

        Lateral faces join consecutive ring vertices to the apex; the base is
        fanned from ring vertex 0, giving 2*div-2 faces in total.
        """
        n = self.div
        frame = self.frame()
        theta = 2.0 * np.pi * np.arange(n) / n
        ring = np.stack([np.cos(theta), np.sin(theta), np.zeros(n)], axis=1) * self.radius
        vertices = np.vstack([frame.xform(ring), self.vert])

        apex = n
        j = np.arange(n)
        lateral = np.stack([j, (j + 1) % n, np.full(n, apex)], axis=1)
        k = np.arange(1, n - 1)
        base = np.stack([np.zeros(n - 2, dtype=int), k + 1, k], axis=1)

        mesh = Mesh(vertices=vertices, faces=np.vstack([lateral, base]))
        logger.debug(f"Cone mesh (div={n}): {mesh.num_vertices} vertices, {mesh.num_faces} faces")
        return mesh

    @classmethod
    def from_fields(
        cls,
        fields: list[Field],
        strict: bool = True,
        params: PrimitiveParams | None = None,
    ) -> Cone:
        cfg = params or PrimitiveParams()
        cone = cls(div=cfg.resolve_div(0))

        def read_center(tokens: list[str]) -> None:
            cone.center = read_vec3("center", tokens)

        def read_vert(tokens: list[str]) -> None:
            cone.vert = read_vec3("vert", tokens)

        def read_radius(tokens: list[str]) -> None:
            cone.radius = abs(read_float("radius", tokens))

        def read_div(tokens: list[str]) -> None:
            cone.div = cfg.resolve_div(read_int("div", tokens))

        handlers = {
            "center": read_center,
            "vert": read_vert,
            "radius": read_radius,
            "div": read_div,
        }
        apply_fields("cone", fields, handlers, strict)
        return cone

    def fields(self) -> list[tuple[str, str]]:
        return [
            ("center", format_vec3(self.center)),
            ("vert", format_vec3(self.vert)),
            ("radius", format_real(self.radius)),
            ("div", str(self.div)),
        ]
