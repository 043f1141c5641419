from __future__ import annotations

import numpy as np


def normalize_with_norm(x: np.ndarray) -> tuple[np.ndarray, float]:
    """Normalizes a vector and returns the norm, handling the zero vector."""
    x = np.asarray(x, dtype=float)
    norm = float(np.linalg.norm(x))
    if norm == 0.0:
        return np.zeros_like(x), 0.0
    return x / norm, norm


def normalize(x: np.ndarray) -> np.ndarray:
    """Unit vector along x; the zero vector maps to itself."""
    return normalize_with_norm(x)[0]
