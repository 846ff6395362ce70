"""OOP figure builders that use GridSpec for final render layouts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from matplotlib import pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ais_detection.detection.detector import DetectedFeature, FeatureKind, column_sums, row_sums
from ais_detection.plotting.axes_plots import plot_matrix, plot_sum_series
from ais_detection.utils.validation import as_matrix


@dataclass
class RepetitionFigureBuilder:
    """GridSpec builder for a matrix, its sum series and detected repetitions."""

    figsize: tuple[float, float] = (10.0, 8.0)
    cmap: str = "viridis"

    def build(
        self,
        matrix: np.ndarray,
        features: Sequence[DetectedFeature] = (),
        *,
        title: str = "Detected Repetition",
    ) -> tuple[Figure, dict[str, Axes]]:
        data = as_matrix(matrix, "matrix")
        columns = column_sums(data)
        rows = row_sums(data)

        horizontal = _first_of_kind(features, FeatureKind.HORIZONTAL_REPETITION)
        vertical = _first_of_kind(features, FeatureKind.VERTICAL_REPETITION)

        figure = plt.figure(figsize=self.figsize)
        grid = figure.add_gridspec(
            2, 2, width_ratios=[3.0, 1.0], height_ratios=[1.0, 3.0], wspace=0.1, hspace=0.1
        )
        ax_columns = figure.add_subplot(grid[0, 0])
        ax_matrix = figure.add_subplot(grid[1, 0], sharex=ax_columns)
        ax_rows = figure.add_subplot(grid[1, 1], sharey=ax_matrix)
        ax_notes = figure.add_subplot(grid[0, 1])

        plot_matrix(ax_matrix, data, cmap=self.cmap)

        if columns.size > 0:
            plot_sum_series(
                ax_columns,
                columns,
                marker_positions=horizontal.positions(columns.size) if horizontal else None,
                orientation="horizontal",
            )
        ax_columns.set_title(title)
        plot_sum_series(
            ax_rows,
            rows,
            marker_positions=vertical.positions(rows.size) if vertical else None,
            orientation="vertical",
        )

        lines = [_describe(feature) for feature in features] or ["No repetition detected."]
        ax_notes.axis("off")
        ax_notes.text(0.0, 1.0, "\n".join(lines), va="top", ha="left", fontsize="small")
        return figure, {
            "matrix": ax_matrix,
            "columns": ax_columns,
            "rows": ax_rows,
            "notes": ax_notes,
        }


def _first_of_kind(features: Sequence[DetectedFeature], kind: FeatureKind) -> DetectedFeature | None:
    for feature in features:
        if feature.kind == kind:
            return feature
    return None


def _describe(feature: DetectedFeature) -> str:
    return f"{feature.kind.value}: period={feature.period:.2f}, offset={feature.offset}"


__all__ = ["RepetitionFigureBuilder"]
