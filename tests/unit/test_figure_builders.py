"""Unit tests for plotting.figure_builders."""

from __future__ import annotations

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from ais_detection.detection.detector import DetectedFeature, FeatureKind
from ais_detection.plotting.axes_plots import plot_sum_series
from ais_detection.plotting.figure_builders import RepetitionFigureBuilder
from ais_detection.sim.ionograms import simulate_repeating_matrix


def test_repetition_figure_builder_returns_axes() -> None:
    matrix = simulate_repeating_matrix(width=32, height=24, horizontal_period=4, vertical_period=6)
    features = [
        DetectedFeature(kind=FeatureKind.HORIZONTAL_REPETITION, period=4.0),
        DetectedFeature(kind=FeatureKind.VERTICAL_REPETITION, period=6.0, offset=1),
    ]

    fig, axes = RepetitionFigureBuilder().build(matrix, features)

    assert set(axes) == {"matrix", "columns", "rows", "notes"}
    # one dashed marker per detected row position
    assert len(axes["rows"].lines) == 1 + len(features[1].positions(24))
    fig.clf()


def test_repetition_figure_builder_without_features() -> None:
    fig, axes = RepetitionFigureBuilder().build(np.ones((6, 5)))

    texts = [text.get_text() for text in axes["notes"].texts]
    assert texts == ["No repetition detected."]
    fig.clf()


def test_plot_sum_series_rejects_unknown_orientation() -> None:
    from matplotlib import pyplot as plt

    fig, ax = plt.subplots()
    with pytest.raises(ValueError, match="Unsupported orientation"):
        plot_sum_series(ax, np.ones(4), orientation="diagonal")  # type: ignore[arg-type]
    plt.close(fig)
