"""Oriented box primitive."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from loguru import logger

from ._closest import clamp_box_local
from ._config import PrimitiveParams
from ._frame import Frame
from ._mass import box_inertia, box_volume, rotate_inertia
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
from .utils._text_io import Field, format_real, read_float

# Two triangles per side, counter-clockwise seen from outside. Corner indices
# follow Box.vertex(): top face (+z) is 0-1-2-3, bottom face (-z) is 4-5-6-7.
_BOX_FACES = np.array([
    [0, 1, 2], [0, 2, 3],  # +z
    [0, 4, 5], [0, 5, 1],  # +y
    [1, 5, 6], [1, 6, 2],  # -x
    [2, 6, 7], [2, 7, 3],  # -y
    [3, 7, 4], [3, 4, 0],  # +x
    [7, 6, 5], [7, 5, 4],  # -z
])


@dataclass
class Box(Primitive):
    """Box centered on its frame origin with full-length extents along the frame axes.

    ``depth``, ``width`` and ``height`` are measured along the local x, y and z
    axes respectively; the local box occupies [-extent/2, extent/2] per axis.
    """

    type = PrimitiveType.BOX

    frame: Frame = field(default_factory=Frame)
    depth: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def create(
        cls,
        center: np.ndarray,
        ax: np.ndarray,
        ay: np.ndarray,
        az: np.ndarray,
        depth: float,
        width: float,
        height: float,
    ) -> Box:
        """Box with normalized axes and absolute extents."""
        return cls(
            frame=Frame.from_axes(center, ax, ay, az),
            depth=abs(float(depth)),
            width=abs(float(width)),
            height=abs(float(height)),
        )

    @classmethod
    def create_align(cls, center: np.ndarray, depth: float, width: float, height: float) -> Box:
        """Box aligned with the world axes."""
        return cls.create(center, np.eye(3)[0], np.eye(3)[1], np.eye(3)[2], depth, width, height)

    @property
    def center(self) -> np.ndarray:
        return self.frame.pos

    @property
    def extents(self) -> np.ndarray:
        return np.array([self.depth, self.width, self.height])

    def axis(self, i: Axis | int) -> np.ndarray:
        return self.frame.axis(int(i))

    def copy(self) -> Box:
        return Box(frame=self.frame.copy(), depth=self.depth, width=self.width, height=self.height)

    def mirror(self, axis: Axis | int) -> Box:
        mirrored = self.copy()
        mirrored.frame.pos = mirror_coordinate(self.frame.pos, axis)
        mirrored.frame.att[int(axis), :] *= -1
        return mirrored

    def xform(self, f: Frame) -> Box:
        return Box(frame=f.compose(self.frame), depth=self.depth, width=self.width, height=self.height)

    def xform_inv(self, f: Frame) -> Box:
        return self.xform(f.inverse())

    def closest(
        self, p: np.ndarray, params: PrimitiveParams | None = None
    ) -> tuple[np.ndarray, float]:
        p = np.asarray(p, dtype=float)
        local = clamp_box_local(self.frame.xform_inv(p), 0.5 * self.extents)
        cp = self.frame.xform(local)
        return cp, float(np.linalg.norm(p - cp))

    def is_inside(
        self, p: np.ndarray, rim: bool = False, params: PrimitiveParams | None = None
    ) -> bool:
        cfg = params or PrimitiveParams()
        local = self.frame.xform_inv(p)
        for d, extent in enumerate(self.extents):
            limit = 0.5 * extent
            if rim:
                limit += cfg.rim_tolerance
            if abs(local[d]) > limit:
                return False
        return True

    def volume(self) -> float:
        return box_volume(self.depth, self.width, self.height)

    def barycenter(self) -> np.ndarray:
        return self.center.copy()

    def inertia(self) -> np.ndarray:
        return rotate_inertia(self.frame.att, box_inertia(self.depth, self.width, self.height))

    def vertex(self, i: int) -> np.ndarray:
        """World position of corner ``i`` (0-7); bit 2 selects the bottom face."""
        sx = -1.0 if (i & 0x1) ^ (i >> 1 & 0x1) else 1.0
        sy = -1.0 if i & 0x2 else 1.0
        sz = -1.0 if i & 0x4 else 1.0
        return self.frame.xform(0.5 * self.extents * np.array([sx, sy, sz]))

    def vertices(self) -> np.ndarray:
        return np.array([self.vertex(i) for i in range(8)])

    def to_mesh(self) -> Mesh:
        """Always 8 vertices and 12 faces, wound outward."""
        mesh = Mesh(vertices=self.vertices(), faces=_BOX_FACES.copy())
        if not self.frame.is_proper():
            mesh = mesh.flipped()
        logger.debug(f"Box mesh: {mesh.num_vertices} vertices, {mesh.num_faces} faces")
        return mesh

    @classmethod
    def from_fields(
        cls,
        fields: list[Field],
        strict: bool = True,
        params: PrimitiveParams | None = None,
    ) -> Box:
        box = cls()
        pending_auto: list[int] = []
        handlers = frame_handlers(box.frame, pending_auto)

        def extent_reader(name: str):
            def read_extent(tokens: list[str]) -> None:
                setattr(box, name, abs(read_float(name, tokens)))

            return read_extent

        for name in ("depth", "width", "height"):
            handlers[name] = extent_reader(name)

        apply_fields("box", fields, handlers, strict)
        resolve_auto_axes(box.frame, pending_auto)
        return box

    def fields(self) -> list[tuple[str, str]]:
        return frame_fields(self.frame) + [
            ("depth", format_real(self.depth)),
            ("width", format_real(self.width)),
            ("height", format_real(self.height)),
        ]
