"""Key/value text format shared by every primitive.

Each field occupies one line of the form ``<key>: <value...>``. Blank lines
and lines starting with ``%`` are ignored. Example::

    center: 0 0 0
    ax: 1 0 0
    ay: 0 1 0
    az: auto
    depth: 2
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, TextIO

import numpy as np

from .._errors import MalformedInputError

Field = tuple[str, list[str]]
FieldHandler = Callable[[list[str]], None]

COMMENT_PREFIX = "%"


def parse_fields(text: str) -> list[Field]:
    """Split text into ordered ``(key, tokens)`` pairs.

    Raises:
        MalformedInputError: If a non-blank line has no ``key:`` prefix.
    """
    fields: list[Field] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        key, sep, rest = line.partition(":")
        key = key.strip()
        if not sep or not key:
            raise MalformedInputError(f"Line {lineno}: expected '<key>: <value>', got {raw!r}")
        fields.append((key, rest.split()))
    return fields


def read_fields(fp: TextIO) -> list[Field]:
    """Parse every field from an open text stream."""
    return parse_fields(fp.read())


def scan_fields(fields: Iterable[Field], handlers: dict[str, FieldHandler]) -> list[str]:
    """Dispatch each field to its handler.

    Returns:
        Keys that no handler recognized, in input order. The caller decides
        whether they are fatal.
    """
    unhandled = []
    for key, tokens in fields:
        handler = handlers.get(key)
        if handler is None:
            unhandled.append(key)
            continue
        handler(tokens)
    return unhandled


def read_float(key: str, tokens: Sequence[str]) -> float:
    if len(tokens) < 1:
        raise MalformedInputError(f"Field '{key}' expects a real value")
    try:
        return float(tokens[0])
    except ValueError as e:
        raise MalformedInputError(f"Field '{key}': {tokens[0]!r} is not a real number") from e


def read_int(key: str, tokens: Sequence[str]) -> int:
    if len(tokens) < 1:
        raise MalformedInputError(f"Field '{key}' expects an integer value")
    try:
        return int(tokens[0])
    except ValueError as e:
        raise MalformedInputError(f"Field '{key}': {tokens[0]!r} is not an integer") from e


def read_vec3(key: str, tokens: Sequence[str]) -> np.ndarray:
    if len(tokens) < 3:
        raise MalformedInputError(f"Field '{key}' expects 3 real values, got {len(tokens)}")
    try:
        return np.array([float(t) for t in tokens[:3]])
    except ValueError as e:
        raise MalformedInputError(f"Field '{key}': {' '.join(tokens[:3])!r} is not a 3D vector") from e


def is_auto(tokens: Sequence[str]) -> bool:
    """True for the literal ``auto`` axis value."""
    return len(tokens) == 1 and tokens[0] == "auto"


def format_real(x: float) -> str:
    return f"{float(x):.10g}"


def format_vec3(v: np.ndarray) -> str:
    return " ".join(format_real(x) for x in np.asarray(v, dtype=float))


def format_field(key: str, value: str) -> str:
    return f"{key}: {value}\n"
