"""Variant-erased shape handle.

A :class:`Shape` owns exactly one primitive and forwards the uniform
capability set to it, so generic code never needs to know which variant it
holds. Text files carry two extra keys, ``name`` and ``type``::

    name: base_plate
    type: box
    center: 0 0 0
    ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

import numpy as np

from ._box import Box
from ._config import PrimitiveParams
from ._cone import Cone
from ._ellipsoid import Ellipsoid
from ._errors import MalformedInputError
from ._frame import Frame
from ._mesh import Mesh
from ._primitives import Axis, Primitive, PrimitiveType
from .utils._text_io import format_field, parse_fields

PRIMITIVE_CLASSES: dict[PrimitiveType, type[Primitive]] = {
    PrimitiveType.BOX: Box,
    PrimitiveType.ELLIPSOID: Ellipsoid,
    PrimitiveType.CONE: Cone,
}


def primitive_type(name: str) -> PrimitiveType:
    """Look up a variant by its text name."""
    try:
        return PrimitiveType(name)
    except ValueError as e:
        known = ", ".join(t.value for t in PrimitiveType)
        raise MalformedInputError(f"Unknown shape type '{name}' (expected one of: {known})") from e


@dataclass
class Shape:
    """A named handle owning one primitive."""

    body: Primitive
    name: str = ""

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def create_box(
        cls,
        center: np.ndarray,
        ax: np.ndarray,
        ay: np.ndarray,
        az: np.ndarray,
        depth: float,
        width: float,
        height: float,
        name: str = "",
    ) -> Shape:
        return cls(Box.create(center, ax, ay, az, depth, width, height), name)

    @classmethod
    def create_box_align(
        cls, center: np.ndarray, depth: float, width: float, height: float, name: str = ""
    ) -> Shape:
        return cls(Box.create_align(center, depth, width, height), name)

    @classmethod
    def create_ellipsoid(
        cls,
        center: np.ndarray,
        ax: np.ndarray,
        ay: np.ndarray,
        az: np.ndarray,
        rx: float,
        ry: float,
        rz: float,
        div: int = 0,
        name: str = "",
        params: PrimitiveParams | None = None,
    ) -> Shape:
        return cls(Ellipsoid.create(center, ax, ay, az, rx, ry, rz, div, params), name)

    @classmethod
    def create_ellipsoid_align(
        cls,
        center: np.ndarray,
        rx: float,
        ry: float,
        rz: float,
        div: int = 0,
        name: str = "",
        params: PrimitiveParams | None = None,
    ) -> Shape:
        return cls(Ellipsoid.create_align(center, rx, ry, rz, div, params), name)

    @classmethod
    def create_cone(
        cls,
        center: np.ndarray,
        vert: np.ndarray,
        radius: float,
        div: int = 0,
        name: str = "",
        params: PrimitiveParams | None = None,
    ) -> Shape:
        return cls(Cone.create(center, vert, radius, div, params), name)

    # =========================================================================
    # Forwarded capabilities
    # =========================================================================

    @property
    def type(self) -> PrimitiveType:
        return self.body.type

    def clone(self) -> Shape:
        return Shape(self.body.copy(), self.name)

    def mirror(self, axis: Axis | int) -> Shape:
        return Shape(self.body.mirror(axis), self.name)

    def xform(self, f: Frame) -> Shape:
        return Shape(self.body.xform(f), self.name)

    def xform_inv(self, f: Frame) -> Shape:
        return Shape(self.body.xform_inv(f), self.name)

    def closest(
        self, p: np.ndarray, params: PrimitiveParams | None = None
    ) -> tuple[np.ndarray, float]:
        return self.body.closest(p, params)

    def point_dist(self, p: np.ndarray, params: PrimitiveParams | None = None) -> float:
        return self.body.point_dist(p, params)

    def is_inside(
        self, p: np.ndarray, rim: bool = False, params: PrimitiveParams | None = None
    ) -> bool:
        return self.body.is_inside(p, rim, params)

    def volume(self) -> float:
        return self.body.volume()

    def barycenter(self) -> np.ndarray:
        return self.body.barycenter()

    def inertia(self) -> np.ndarray:
        return self.body.inertia()

    def bary_inertia(self) -> tuple[np.ndarray, np.ndarray]:
        return self.body.bary_inertia()

    def to_mesh(self) -> Mesh:
        return self.body.to_mesh()

    # =========================================================================
    # Text I/O
    # =========================================================================

    @classmethod
    def from_text(
        cls, text: str, strict: bool = True, params: PrimitiveParams | None = None
    ) -> Shape:
        """
        Read a shape: ``name`` (optional), ``type`` (required) and the body fields.

        Raises:
            MalformedInputError: If ``type`` is missing or unknown, or the body
                fields are malformed.
        """
        name = ""
        type_name: str | None = None
        body_fields = []
        for key, tokens in parse_fields(text):
            if key == "name":
                name = " ".join(tokens)
            elif key == "type":
                type_name = tokens[0] if tokens else ""
            else:
                body_fields.append((key, tokens))
        if type_name is None:
            raise MalformedInputError("Shape has no 'type' field")
        body_cls = PRIMITIVE_CLASSES[primitive_type(type_name)]
        return cls(body_cls.from_fields(body_fields, strict=strict, params=params), name)

    @classmethod
    def read(
        cls, fp: TextIO, strict: bool = True, params: PrimitiveParams | None = None
    ) -> Shape:
        return cls.from_text(fp.read(), strict=strict, params=params)

    def to_text(self) -> str:
        header = format_field("type", self.type.value)
        if self.name:
            header = format_field("name", self.name) + header
        return header + self.body.to_text()

    def write(self, fp: TextIO) -> None:
        fp.write(self.to_text())
