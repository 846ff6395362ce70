"""Synthetic ionogram-like matrices with repeating lines."""

from __future__ import annotations

import numpy as np


def simulate_repeating_matrix(
    *,
    width: int,
    height: int,
    horizontal_period: float | None = None,
    horizontal_offset: int = 0,
    vertical_period: float | None = None,
    vertical_offset: int = 0,
    amplitude: float = 1.0,
    background: float = 0.0,
    noise_std: float = 0.0,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """Build a ``(width, height)`` matrix with lines repeating along x and/or y.

    Columns at ``x = horizontal_offset + k * horizontal_period`` and rows at
    ``y = vertical_offset + k * vertical_period`` are raised by ``amplitude``
    above ``background``.  Positions are rounded to the nearest sample.
    """

    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")
    if amplitude < 0.0:
        raise ValueError("amplitude must be non-negative.")
    if noise_std < 0.0:
        raise ValueError("noise_std must be non-negative.")

    matrix = np.full((int(width), int(height)), float(background), dtype=float)

    if horizontal_period is not None:
        columns = _line_positions(horizontal_offset, horizontal_period, width)
        matrix[columns, :] += float(amplitude)
    if vertical_period is not None:
        rows = _line_positions(vertical_offset, vertical_period, height)
        matrix[:, rows] += float(amplitude)

    if noise_std > 0.0:
        prng = _resolve_rng(rng)
        matrix = matrix + prng.normal(scale=float(noise_std), size=matrix.shape)
    return matrix


def _line_positions(offset: int, period: float, length: int) -> np.ndarray:
    if period <= 0.0:
        raise ValueError("period must be positive.")
    positions = np.rint(np.arange(float(offset), float(length), float(period))).astype(int)
    positions = positions[(positions >= 0) & (positions < length)]
    return np.unique(positions)


def _resolve_rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


__all__ = ["simulate_repeating_matrix"]
