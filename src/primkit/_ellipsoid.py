"""Ellipsoid primitive."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from loguru import logger

from ._closest import ellipsoid_closest_local
from ._config import DEFAULT_DIV, PrimitiveParams
from ._frame import Frame
from ._mass import ellipsoid_inertia, ellipsoid_volume, rotate_inertia
from ._mesh import Mesh
from ._primitives import (
    Axis,
    Primitive,
    PrimitiveType,
    apply_fields,
    frame_fields,
    frame_handlers,
    mirror_coordinate,
    resolve_auto_axes,
)
from .utils._text_io import Field, format_real, read_float, read_int


@dataclass
class Ellipsoid(Primitive):
    """Ellipsoid (x/rx)^2 + (y/ry)^2 + (z/rz)^2 = 1 in its local frame.

    ``div`` sets the latitude/longitude resolution of :meth:`to_mesh`.
    """

    type = PrimitiveType.ELLIPSOID

    frame: Frame = field(default_factory=Frame)
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    div: int = DEFAULT_DIV

    @classmethod
    def create(
        cls,
        center: np.ndarray,
        ax: np.ndarray,
        ay: np.ndarray,
        az: np.ndarray,
        rx: float,
        ry: float,
        rz: float,
        div: int = 0,
        params: PrimitiveParams | None = None,
    ) -> Ellipsoid:
        """
        Ellipsoid with normalized axes and absolute radii.

        Args:
            center: Center point.
            ax, ay, az: Local axes; normalized to unit length.
            rx, ry, rz: Semi-axis radii along the local axes.
            div: Tessellation divisions; 0 selects ``params.default_div``.
            params: Supplies the default division. If None, uses defaults.

        Raises:
            MalformedInputError: If ``div`` is neither 0 nor at least 3.
        """
        cfg = params or PrimitiveParams()
        return cls(
            frame=Frame.from_axes(center, ax, ay, az),
            rx=abs(float(rx)),
            ry=abs(float(ry)),
            rz=abs(float(rz)),
            div=cfg.resolve_div(div),
        )

    @classmethod
    def create_align(
        cls,
        center: np.ndarray,
        rx: float,
        ry: float,
        rz: float,
        div: int = 0,
        params: PrimitiveParams | None = None,
    ) -> Ellipsoid:
        """Ellipsoid aligned with the world axes."""
        e = np.eye(3)
        return cls.create(center, e[0], e[1], e[2], rx, ry, rz, div, params)

    @property
    def center(self) -> np.ndarray:
        return self.frame.pos

    @property
    def radii(self) -> np.ndarray:
        return np.array([self.rx, self.ry, self.rz])

    def axis(self, i: Axis | int) -> np.ndarray:
        return self.frame.axis(int(i))

    def copy(self) -> Ellipsoid:
        return Ellipsoid(frame=self.frame.copy(), rx=self.rx, ry=self.ry, rz=self.rz, div=self.div)

    def mirror(self, axis: Axis | int) -> Ellipsoid:
        mirrored = self.copy()
        mirrored.frame.pos = mirror_coordinate(self.frame.pos, axis)
        mirrored.frame.att[int(axis), :] *= -1
        return mirrored

    def xform(self, f: Frame) -> Ellipsoid:
        return Ellipsoid(
            frame=f.compose(self.frame), rx=self.rx, ry=self.ry, rz=self.rz, div=self.div
        )

    def xform_inv(self, f: Frame) -> Ellipsoid:
        return self.xform(f.inverse())

    def closest(
        self, p: np.ndarray, params: PrimitiveParams | None = None
    ) -> tuple[np.ndarray, float]:
        """
        Closest surface point to ``p`` and its distance.

        Points inside the ellipsoid (rim mode) are returned unchanged at
        distance 0; no projection onto the surface is made for them.

        Raises:
            NumericInconsistencyError: If a radius is zero or not finite, or
                the multiplier polynomial has no admissible root.
        """
        p = np.asarray(p, dtype=float)
        if self.is_inside(p, rim=True, params=params):
            return p.copy(), 0.0
        local = self.frame.xform_inv(p)
        cp = self.frame.xform(ellipsoid_closest_local(self.rx, self.ry, self.rz, local, params))
        return cp, float(np.linalg.norm(p - cp))

    def is_inside(
        self, p: np.ndarray, rim: bool = False, params: PrimitiveParams | None = None
    ) -> bool:
        cfg = params or PrimitiveParams()
        local = self.frame.xform_inv(p)
        radii = self.radii
        flat = radii == 0.0
        if np.any(flat):
            # no interior; rim mode still accepts points of the flattened solid
            if not rim or np.any(np.abs(local[flat]) > cfg.rim_tolerance):
                return False
            local, radii = local[~flat], radii[~flat]
        level = float(np.sum((local / radii) ** 2))
        limit = 1.0 + cfg.rim_tolerance if rim else 1.0
        return level < limit

    def volume(self) -> float:
        return ellipsoid_volume(self.rx, self.ry, self.rz)

    def barycenter(self) -> np.ndarray:
        return self.center.copy()

    def inertia(self) -> np.ndarray:
        return rotate_inertia(self.frame.att, ellipsoid_inertia(self.rx, self.ry, self.rz))

    def to_mesh(self) -> Mesh:
        """
        Latitude/longitude tessellation.

        Vertex 0 is the north pole (+z local), followed by ``div - 1`` rings of
        ``div`` vertices at polar angles i*pi/div, then the south pole. Faces
        are a fan around each pole plus two triangles per grid cell, giving
        div*(div-1)+2 vertices and 2*div*(div-1) faces.
        """
        n = self.div
        polar = np.pi * np.arange(1, n) / n
        azimuth = 2.0 * np.pi * np.arange(n) / n
        sin_p, cos_p = np.sin(polar)[:, None], np.cos(polar)[:, None]
        ring = np.stack(
            [
                sin_p * np.cos(azimuth)[None, :],
                sin_p * np.sin(azimuth)[None, :],
                np.broadcast_to(cos_p, (n - 1, n)),
            ],
            axis=-1,
        ).reshape(-1, 3)

        local = np.vstack([[0.0, 0.0, 1.0], ring, [0.0, 0.0, -1.0]]) * self.radii
        vertices = self.frame.xform(local)

        south = len(vertices) - 1
        j = np.arange(n)
        j_next = (j + 1) % n

        faces = [np.stack([np.zeros(n, dtype=int), 1 + j, 1 + j_next], axis=1)]
        for i in range(n - 2):
            upper = 1 + i * n
            lower = upper + n
            # quad (upper j, upper j+1, lower j+1, lower j) split along its diagonal
            faces.append(np.stack([upper + j, lower + j, lower + j_next], axis=1))
            faces.append(np.stack([upper + j, lower + j_next, upper + j_next], axis=1))
        last = 1 + (n - 2) * n
        faces.append(np.stack([np.full(n, south), last + j_next, last + j], axis=1))

        mesh = Mesh(vertices=vertices, faces=np.vstack(faces))
        if not self.frame.is_proper():
            mesh = mesh.flipped()
        logger.debug(
            f"Ellipsoid mesh (div={n}): {mesh.num_vertices} vertices, {mesh.num_faces} faces"
        )
        return mesh

    @classmethod
    def from_fields(
        cls,
        fields: list[Field],
        strict: bool = True,
        params: PrimitiveParams | None = None,
    ) -> Ellipsoid:
        cfg = params or PrimitiveParams()
        ellips = cls(div=cfg.resolve_div(0))
        pending_auto: list[int] = []
        handlers = frame_handlers(ellips.frame, pending_auto)

        def radius_reader(name: str):
            def read_radius(tokens: list[str]) -> None:
                setattr(ellips, name, abs(read_float(name, tokens)))

            return read_radius

        for name in ("rx", "ry", "rz"):
            handlers[name] = radius_reader(name)

        def read_div(tokens: list[str]) -> None:
            ellips.div = cfg.resolve_div(read_int("div", tokens))

        handlers["div"] = read_div

        apply_fields("ellipsoid", fields, handlers, strict)
        resolve_auto_axes(ellips.frame, pending_auto)
        return ellips

    def fields(self) -> list[tuple[str, str]]:
        return frame_fields(self.frame) + [
            ("rx", format_real(self.rx)),
            ("ry", format_real(self.ry)),
            ("rz", format_real(self.rz)),
            ("div", str(self.div)),
        ]
