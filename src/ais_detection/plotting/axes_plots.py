"""Axes-level plotting functions that receive a Matplotlib Axes object."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import numpy as np
from matplotlib.axes import Axes
from matplotlib.image import AxesImage
from matplotlib.lines import Line2D

from ais_detection.utils.validation import as_1d_array, as_matrix

Orientation = Literal["horizontal", "vertical"]


def plot_matrix(
    ax: Axes,
    matrix: np.ndarray,
    *,
    cmap: str = "viridis",
    title: str | None = None,
    xlabel: str = "x (column)",
    ylabel: str = "y (row)",
) -> AxesImage:
    """Show a ``[x, y]`` indexed matrix with x along the horizontal axis."""

    data = as_matrix(matrix, "matrix")
    image = ax.imshow(data.T, origin="lower", aspect="auto", cmap=cmap, interpolation="nearest")
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    if title is not None:
        ax.set_title(title)
    return image


def plot_sum_series(
    ax: Axes,
    sums: np.ndarray,
    *,
    marker_positions: Sequence[float] | np.ndarray | None = None,
    orientation: Orientation = "horizontal",
    label: str | None = None,
    color: str | None = None,
    marker_color: str = "tab:red",
    title: str | None = None,
    grid: bool = True,
) -> Line2D:
    """Plot a sum series with dashed markers at detected repetition positions.

    ``orientation="vertical"`` draws the series along the y axis so it can sit
    beside the matrix image.
    """

    values = as_1d_array(sums, "sums", dtype=float)
    index = np.arange(values.size, dtype=float)
    markers = np.asarray(marker_positions if marker_positions is not None else [], dtype=float)

    if orientation == "horizontal":
        line, = ax.plot(index, values, label=label, color=color)
        for position in markers:
            ax.axvline(position, color=marker_color, linestyle="--", linewidth=0.8, alpha=0.7)
        ax.set_xlabel("Index")
        ax.set_ylabel("Sum")
    elif orientation == "vertical":
        line, = ax.plot(values, index, label=label, color=color)
        for position in markers:
            ax.axhline(position, color=marker_color, linestyle="--", linewidth=0.8, alpha=0.7)
        ax.set_xlabel("Sum")
        ax.set_ylabel("Index")
    else:
        raise ValueError(f"Unsupported orientation: {orientation}")

    if title is not None:
        ax.set_title(title)
    if grid:
        ax.grid(True, alpha=0.25)
    return line


__all__ = ["plot_matrix", "plot_sum_series"]
