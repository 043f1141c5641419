"""Common interface of every parametric solid primitive.

Each primitive implements the full capability set below. Missing any abstract
method makes the class impossible to instantiate, so an incomplete variant
fails at construction time rather than at query time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, ClassVar, TextIO, TypeVar

import numpy as np
from loguru import logger

from ._config import PrimitiveParams
from ._errors import MalformedInputError
from ._frame import Frame
from .utils._safe_ops import normalize
from .utils._text_io import (
    Field,
    FieldHandler,
    format_field,
    format_vec3,
    is_auto,
    parse_fields,
    read_vec3,
    scan_fields,
)

if TYPE_CHECKING:
    from ._mesh import Mesh

P = TypeVar("P", bound="Primitive")


class PrimitiveType(Enum):
    """Primitive variant, keyed by the name used in text files."""

    BOX = "box"
    ELLIPSOID = "ellipsoid"
    CONE = "cone"


class Axis(IntEnum):
    """Coordinate axis selector for mirroring."""

    X = 0
    Y = 1
    Z = 2


class Primitive(ABC):
    """A solid with closest-point, containment, mass and mesh queries."""

    type: ClassVar[PrimitiveType]

    # =========================================================================
    # Construction and transforms
    # =========================================================================

    @abstractmethod
    def copy(self: P) -> P:
        """Independent copy of every field."""

    @abstractmethod
    def mirror(self: P, axis: Axis | int) -> P:
        """Copy with one world coordinate negated in every stored point and axis."""

    @abstractmethod
    def xform(self: P, f: Frame) -> P:
        """Copy moved by frame ``f`` (local coordinates of ``f`` to world)."""

    @abstractmethod
    def xform_inv(self: P, f: Frame) -> P:
        """Copy moved by the inverse of frame ``f``."""

    # =========================================================================
    # Point queries
    # =========================================================================

    @abstractmethod
    def closest(
        self, p: np.ndarray, params: PrimitiveParams | None = None
    ) -> tuple[np.ndarray, float]:
        """Closest point to ``p`` and its distance from ``p``."""

    def point_dist(self, p: np.ndarray, params: PrimitiveParams | None = None) -> float:
        """Distance from ``p``; discards the closest point."""
        return self.closest(p, params)[1]

    @abstractmethod
    def is_inside(
        self, p: np.ndarray, rim: bool = False, params: PrimitiveParams | None = None
    ) -> bool:
        """Containment test; ``rim`` treats points within tolerance of the boundary as inside."""

    # =========================================================================
    # Mass properties
    # =========================================================================

    @abstractmethod
    def volume(self) -> float: ...

    @abstractmethod
    def barycenter(self) -> np.ndarray: ...

    @abstractmethod
    def inertia(self) -> np.ndarray:
        """(3, 3) inertia tensor about the barycenter, world orientation, unit density."""

    def bary_inertia(self) -> tuple[np.ndarray, np.ndarray]:
        """Barycenter and inertia in one call; same results as calling both."""
        return self.barycenter(), self.inertia()

    # =========================================================================
    # Tessellation
    # =========================================================================

    @abstractmethod
    def to_mesh(self) -> Mesh: ...

    # =========================================================================
    # Text I/O
    # =========================================================================

    @classmethod
    @abstractmethod
    def from_fields(
        cls: type[P],
        fields: list[Field],
        strict: bool = True,
        params: PrimitiveParams | None = None,
    ) -> P:
        """Build a primitive from parsed ``(key, tokens)`` fields."""

    @abstractmethod
    def fields(self) -> list[tuple[str, str]]:
        """Formatted ``(key, value)`` pairs in write order."""

    @classmethod
    def from_text(
        cls: type[P], text: str, strict: bool = True, params: PrimitiveParams | None = None
    ) -> P:
        return cls.from_fields(parse_fields(text), strict=strict, params=params)

    @classmethod
    def read(
        cls: type[P], fp: TextIO, strict: bool = True, params: PrimitiveParams | None = None
    ) -> P:
        return cls.from_text(fp.read(), strict=strict, params=params)

    def to_text(self) -> str:
        return "".join(format_field(key, value) for key, value in self.fields())

    def write(self, fp: TextIO) -> None:
        fp.write(self.to_text())


def apply_fields(
    name: str,
    fields: list[Field],
    handlers: dict[str, FieldHandler],
    strict: bool,
) -> None:
    """Run field handlers, then fail or warn on the keys nobody handled."""
    unhandled = scan_fields(fields, handlers)
    if not unhandled:
        return
    if strict:
        raise MalformedInputError(f"Unknown {name} field(s): {', '.join(unhandled)}")
    logger.warning(f"Skipping unknown {name} field(s): {', '.join(unhandled)}")


def mirror_coordinate(v: np.ndarray, axis: Axis | int) -> np.ndarray:
    """Copy of a point or axis vector with one coordinate negated."""
    out = np.array(v, dtype=float)
    out[int(axis)] *= -1
    return out


# =============================================================================
# Frame fields shared by framed primitives (box, ellipsoid)
# =============================================================================

_AXIS_KEYS = ("ax", "ay", "az")


def frame_handlers(frame: Frame, pending_auto: list[int]) -> dict[str, FieldHandler]:
    """Handlers for ``center`` and ``ax``/``ay``/``az``, writing into ``frame``.

    ``auto`` axes are recorded in ``pending_auto`` and resolved afterwards by
    :func:`resolve_auto_axes`, so they see every explicit axis in the input.
    """

    def read_center(tokens: list[str]) -> None:
        frame.pos = read_vec3("center", tokens)

    def axis_reader(i: int) -> FieldHandler:
        key = _AXIS_KEYS[i]

        def read_axis(tokens: list[str]) -> None:
            if is_auto(tokens):
                pending_auto.append(i)
                return
            frame.att[:, i] = normalize(read_vec3(key, tokens))

        return read_axis

    handlers = {"center": read_center}
    for i, key in enumerate(_AXIS_KEYS):
        handlers[key] = axis_reader(i)
    return handlers


def resolve_auto_axes(frame: Frame, pending_auto: list[int]) -> None:
    """Replace each ``auto`` axis by the cross product of the other two."""
    for i in sorted(set(pending_auto)):
        j, k = (i + 1) % 3, (i + 2) % 3
        frame.att[:, i] = normalize(np.cross(frame.att[:, j], frame.att[:, k]))


def frame_fields(frame: Frame) -> list[tuple[str, str]]:
    fields = [("center", format_vec3(frame.pos))]
    for i, key in enumerate(_AXIS_KEYS):
        fields.append((key, format_vec3(frame.att[:, i])))
    return fields
