"""Repetition detector working on row and column sums of a measurement matrix."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ais_detection.detection.estimators import (
    DEFAULT_ESTIMATOR,
    EstimatorName,
    PeriodCandidate,
    resolve_estimator,
)
from ais_detection.detection.peaks import extract_peaks
from ais_detection.detection.quality import pick_best_candidate
from ais_detection.utils.validation import as_matrix

logger = logging.getLogger(__name__)

HARMONIC_COUNT = 8


class FeatureKind(str, Enum):
    """Orientation of a detected repetition."""

    # repeating columns, e.g. electron plasma oscillation lines
    HORIZONTAL_REPETITION = "horizontal_repetition"
    # repeating rows, e.g. electron cyclotron echoes
    VERTICAL_REPETITION = "vertical_repetition"


@dataclass(frozen=True)
class DetectedFeature:
    """A repetition found along one axis of the matrix."""

    kind: FeatureKind
    period: float
    offset: int = 0
    harmonic_count: int = HARMONIC_COUNT

    def positions(self, length: int) -> np.ndarray:
        """Sample positions ``offset + k * period`` inside ``[0, length)``."""

        if length <= 0 or self.period <= 0.0:
            return np.array([], dtype=float)
        steps = np.arange(int(np.ceil(length / self.period)) + 1, dtype=float)
        positions = self.offset + self.period * steps
        return positions[(positions >= 0.0) & (positions < length)]


def column_sums(matrix: np.ndarray) -> np.ndarray:
    """Sum over ``y`` for the first half of the columns (``x < width // 2``)."""

    data = np.asarray(matrix, dtype=float)
    half_width = data.shape[0] // 2
    return np.sum(data[:half_width, :], axis=1)


def row_sums(matrix: np.ndarray) -> np.ndarray:
    """Sum over the first half of the columns (``x < width // 2``) for every ``y``."""

    data = np.asarray(matrix, dtype=float)
    half_width = data.shape[0] // 2
    return np.sum(data[:half_width, :], axis=0)


def detect_repetition(
    sums: np.ndarray,
    *,
    estimator: EstimatorName = DEFAULT_ESTIMATOR,
) -> PeriodCandidate | None:
    """Run peak extraction, the estimator and the quality pick on one sum series.

    Returns ``None`` when no repetition is found.
    """

    values = np.asarray(sums, dtype=float)
    if values.size == 0:
        return None

    peak_series = extract_peaks(values)
    if peak_series.num_peaks == 0:
        return None

    candidates = resolve_estimator(estimator)(peak_series.peaks, peak_series.weights)
    return pick_best_candidate(candidates, values)


@dataclass(frozen=True)
class SummingDetector:
    """Detect horizontal and vertical repetition in a 2-D measurement.

    The matrix is indexed ``[x, y]`` with shape ``(width, height)``.  Column
    sums give horizontal repetition, row sums give vertical repetition.  Only
    the first half of the width contributes to either sum series.

    Parameters
    ----------
    estimator : str
        One of ``"periodogram"``, ``"harmonic-fit"``, ``"quantile-distance"``
        or ``"combined"``.
    """

    estimator: EstimatorName = DEFAULT_ESTIMATOR

    def __post_init__(self) -> None:
        resolve_estimator(self.estimator)

    def detect(self, matrix: np.ndarray) -> list[DetectedFeature]:
        """Return 0, 1 or 2 features ordered ``[horizontal, vertical]``.

        Raises
        ------
        InvalidInputError
            If ``matrix`` is not a finite, rectangular, non-empty 2-D array.
        """

        data = as_matrix(matrix, "matrix")
        features: list[DetectedFeature] = []

        axes = (
            (FeatureKind.HORIZONTAL_REPETITION, column_sums(data)),
            (FeatureKind.VERTICAL_REPETITION, row_sums(data)),
        )
        for kind, sums in axes:
            candidate = detect_repetition(sums, estimator=self.estimator)
            if candidate is None:
                logger.debug("No %s found with estimator %r.", kind.value, self.estimator)
                continue
            offset = candidate.offset if candidate.offset is not None else 0
            logger.debug(
                "Found %s: period=%.3f offset=%d (estimator %r).",
                kind.value,
                candidate.period,
                offset,
                self.estimator,
            )
            features.append(DetectedFeature(kind=kind, period=float(candidate.period), offset=offset))
        return features


def detect_features(
    matrix: np.ndarray,
    *,
    estimator: EstimatorName = DEFAULT_ESTIMATOR,
) -> list[DetectedFeature]:
    """Convenience wrapper around :meth:`SummingDetector.detect`."""

    return SummingDetector(estimator=estimator).detect(matrix)


__all__ = [
    "HARMONIC_COUNT",
    "DetectedFeature",
    "FeatureKind",
    "SummingDetector",
    "column_sums",
    "detect_features",
    "detect_repetition",
    "row_sums",
]
