"""Input validation helpers shared across the package."""

from __future__ import annotations

import numpy as np


class InvalidInputError(ValueError):
    """Raised when a measurement matrix is empty, jagged or not numeric."""


def as_1d_array(values: np.ndarray, name: str, *, dtype: np.dtype | None = None) -> np.ndarray:
    """Return a validated non-empty 1D NumPy array."""

    array = np.asarray(values, dtype=dtype)
    if array.ndim != 1:
        raise ValueError(f"{name} must be a 1D array.")
    if array.size == 0:
        raise ValueError(f"{name} cannot be empty.")
    return array


def as_matrix(values: np.ndarray, name: str) -> np.ndarray:
    """Return a validated, finite, non-empty 2D float array indexed ``[x, y]``."""

    try:
        array = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a rectangular 2D array of real numbers.") from exc
    if array.ndim != 2:
        raise InvalidInputError(f"{name} must be a 2D array with shape (width, height).")
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise InvalidInputError(f"{name} cannot have empty dimensions.")
    if not np.all(np.isfinite(array)):
        raise InvalidInputError(f"{name} contains non-finite values.")
    return array


__all__ = ["InvalidInputError", "as_1d_array", "as_matrix"]
