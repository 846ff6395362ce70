"""Peak extraction from row/column sum series."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ais_detection.utils.validation import as_1d_array

PEAK_PERCENTILE = 60.0
EPSILON = 1e-14


@dataclass(frozen=True, eq=False)
class PeakSeries:
    """Binary peak positions and their normalized weights.

    ``peaks`` is 1 where a local maximum survived thresholding and 0 elsewhere.
    ``weights`` carries the relative magnitude of each surviving peak and sums
    to 1 whenever at least one peak exists.
    """

    peaks: np.ndarray
    weights: np.ndarray

    @property
    def num_peaks(self) -> int:
        return int(np.count_nonzero(self.peaks))

    @property
    def positions(self) -> np.ndarray:
        return np.flatnonzero(self.peaks)


def extract_peaks(sums: np.ndarray, *, percentile: float = PEAK_PERCENTILE) -> PeakSeries:
    """Threshold ``sums`` at ``percentile`` and keep one apex per hill.

    Parameters
    ----------
    sums : array_like
        1-D row or column sums.
    percentile : float
        Values below this percentile of ``sums`` are discarded before the
        local-maximum filter runs.

    Returns
    -------
    PeakSeries
        Binary peaks and L1-normalized weights, both with the length of
        ``sums``.  Both are all zero when nothing survives.
    """

    values = as_1d_array(sums, "sums", dtype=float)
    threshold = float(np.percentile(values, percentile))

    thresholded = np.where(values >= threshold, values, 0.0)
    filtered = collapse_local_maxima(thresholded)

    weights = normalize_weights(filtered)
    peaks = (filtered != 0.0).astype(float)
    return PeakSeries(peaks=peaks, weights=weights)


def collapse_local_maxima(values: np.ndarray) -> np.ndarray:
    """Return a copy of ``values`` where every hill keeps only its apex.

    The sweep is sequential: once an apex is found, the non-decreasing run on
    its left and the non-increasing run on its right are zeroed and the scan
    resumes after the consumed run.  The last sample is never tested as an
    apex.
    """

    peaks = np.array(values, dtype=float, copy=True)
    n = peaks.size

    i = 0
    while i < n - 1:
        if (i == 0 or peaks[i - 1] <= peaks[i]) and peaks[i + 1] <= peaks[i]:
            if i > 0:
                j = i - 1
                while j > 0 and peaks[j] > 0 and peaks[j] <= peaks[j + 1]:
                    j -= 1
                peaks[j:i] = 0.0

            apex = i
            i += 1
            while i < n - 1 and peaks[i] > 0 and peaks[i] >= peaks[i + 1]:
                peaks[i] = 0.0
                i += 1
            peaks[apex + 1] = 0.0
        i += 1
    return peaks


def normalize_weights(values: np.ndarray) -> np.ndarray:
    """L1-normalize ``values``; an all-zero (or zero-sum) input yields zeros."""

    weights = np.asarray(values, dtype=float)
    total = float(np.sum(weights))
    if abs(total) <= EPSILON:
        return np.zeros_like(weights)
    return weights / total


def min_peak_distance(peaks: np.ndarray) -> int | None:
    """Smallest gap between consecutive nonzero positions, ``None`` below two peaks."""

    positions = np.flatnonzero(np.asarray(peaks))
    if positions.size < 2:
        return None
    return int(np.min(np.diff(positions)))


__all__ = [
    "EPSILON",
    "PEAK_PERCENTILE",
    "PeakSeries",
    "collapse_local_maxima",
    "extract_peaks",
    "min_peak_distance",
    "normalize_weights",
]
