"""Period estimators for binary peak series.

Every estimator shares one signature, ``estimator(peaks, weights)``, and
returns a list of :class:`PeriodCandidate`.  An empty list means no periodic
pattern was found.  Estimators are looked up by name in :data:`ESTIMATORS`.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

import numpy as np
from scipy.optimize import OptimizeWarning, curve_fit

from ais_detection.detection.peaks import EPSILON, min_peak_distance, normalize_weights
from ais_detection.utils.validation import as_1d_array

logger = logging.getLogger(__name__)

EstimatorName = Literal["periodogram", "harmonic-fit", "quantile-distance", "combined"]

DEFAULT_ESTIMATOR: EstimatorName = "combined"
MAX_PERIODOGRAM_CANDIDATES = 10
DISTANCE_PERCENTILE = 65.0
MIN_FIT_WEIGHT = 0.001
OUT_OF_BAND_VALUE = -1.0


@dataclass(frozen=True)
class PeriodCandidate:
    """One candidate repetition; ``offset`` is ``None`` when the phase is unknown."""

    period: float
    offset: int | None = None


Estimator = Callable[[np.ndarray, np.ndarray], list[PeriodCandidate]]


def periodogram_periods(peaks: np.ndarray, weights: np.ndarray) -> list[PeriodCandidate]:
    """Rank trial periods by the modified periodogram of Scargle (1982).

    Trial frequencies ``2*pi*n/t`` cover periods between 2 samples and the
    smallest distance between two peaks.  Up to
    :data:`MAX_PERIODOGRAM_CANDIDATES` periods are returned, strongest first.
    The periodogram carries no phase, so every ``offset`` is ``None``.
    """

    values = as_1d_array(peaks, "peaks", dtype=float)
    min_distance = min_peak_distance(values)
    if min_distance is None:
        return []

    t = values.size
    first = math.ceil(t / min_distance)
    powers: list[tuple[float, float]] = []
    for n in range(first, t // 2 + 1):
        freq = 2.0 * np.pi * n / t
        powers.append((scargle_power(freq, values), freq))

    if not powers:
        return []

    powers.sort(key=lambda pair: pair[0], reverse=True)
    return [
        PeriodCandidate(period=float(2.0 * np.pi / freq))
        for _, freq in powers[:MAX_PERIODOGRAM_CANDIDATES]
    ]


def scargle_power(freq: float, values: np.ndarray) -> float:
    """Phase-corrected periodogram value ``P_X(freq)`` for samples at ``1..t``."""

    samples = np.asarray(values, dtype=float)
    index = np.arange(1, samples.size + 1, dtype=float)

    tau_sin = float(np.sum(np.sin(2.0 * freq * index)))
    tau_cos = float(np.sum(np.cos(2.0 * freq * index)))
    if tau_cos <= EPSILON:
        tau = 0.0
    else:
        tau = math.atan(tau_sin / tau_cos) / (2.0 * np.pi)

    cos_terms = np.cos(freq * (index - tau))
    sin_terms = np.sin(freq * (index - tau))
    cos_norm = float(np.sum(cos_terms**2))
    sin_norm = float(np.sum(sin_terms**2))
    if cos_norm <= EPSILON or sin_norm <= EPSILON:
        return 0.0

    cos_proj = float(np.sum(samples * cos_terms))
    sin_proj = float(np.sum(samples * sin_terms))
    if cos_proj <= EPSILON:
        cos_proj = 0.0
    if sin_proj <= EPSILON:
        sin_proj = 0.0
    return 0.5 * (cos_proj**2 / cos_norm + sin_proj**2 / sin_norm)


def harmonic_fit_period(peaks: np.ndarray, weights: np.ndarray) -> list[PeriodCandidate]:
    """Fit a unit-amplitude cosine to the weighted peaks.

    The frequency is kept inside ``[2*pi/(n//2), 2*pi/min_distance]``: outside
    the band the model evaluates to ``-1`` and its frequency derivative points
    back into the band.  The fitted phase gives the offset.
    """

    values = as_1d_array(peaks, "peaks", dtype=float)
    peak_weights = as_1d_array(weights, "weights", dtype=float)
    if values.size != peak_weights.size:
        raise ValueError("peaks and weights must have the same length.")

    min_distance = min_peak_distance(values)
    if min_distance is None or np.count_nonzero(peak_weights) < 2:
        return []

    # square-rooted weights are more even, zero weights are not accepted by the fitter
    fit_weights = normalize_weights(np.sqrt(np.clip(peak_weights, 0.0, None)))
    fit_weights = np.where(fit_weights > 0.0, fit_weights, MIN_FIT_WEIGHT)

    min_freq = 2.0 * np.pi / (values.size // 2)
    max_freq = 2.0 * np.pi / min_distance
    x = np.arange(values.size, dtype=float)
    model, jacobian = banded_cosine(min_freq, max_freq)
    guess = guess_harmonic_parameters(values, min_freq=min_freq, max_freq=max_freq)

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", OptimizeWarning)
            params, _ = curve_fit(
                model,
                x,
                values,
                p0=guess,
                sigma=1.0 / np.sqrt(fit_weights),
                jac=jacobian,
                method="lm",
            )
    except (RuntimeError, ValueError, np.linalg.LinAlgError) as exc:
        logger.warning("Harmonic fit did not converge: %s", exc)
        return []

    fit_freq, fit_phase = (float(value) for value in params)
    two_pi = 2.0 * np.pi
    freq = ((fit_freq % two_pi) + two_pi) % two_pi
    if not (np.isfinite(freq) and np.isfinite(fit_phase)) or freq <= EPSILON:
        return []

    period = two_pi / freq
    phase = ((fit_phase % period) + period) % period
    # rounding can land on the period itself
    offset = round_half_up(phase) % max(round_half_up(period), 1)
    return [PeriodCandidate(period=float(period), offset=offset)]


def banded_cosine(
    min_freq: float,
    max_freq: float,
) -> tuple[Callable[..., np.ndarray], Callable[..., np.ndarray]]:
    """Return ``(model, jacobian)`` for ``cos(freq * x + phase)`` limited to a band.

    Outside ``[min_freq, max_freq]`` the model is the constant
    :data:`OUT_OF_BAND_VALUE` and the frequency derivative is ``+1`` below the
    band and ``-1`` above it.
    """

    def model(x_values: np.ndarray, freq: float, phase: float) -> np.ndarray:
        x_values = np.asarray(x_values, dtype=float)
        if freq < min_freq or freq > max_freq:
            return np.full(x_values.shape, OUT_OF_BAND_VALUE)
        return np.cos(x_values * freq + phase)

    def jacobian(x_values: np.ndarray, freq: float, phase: float) -> np.ndarray:
        x_values = np.asarray(x_values, dtype=float)
        d_phase = -np.sin(x_values * freq + phase)
        if freq < min_freq:
            d_freq = np.ones_like(x_values)
        elif freq > max_freq:
            d_freq = -np.ones_like(x_values)
        else:
            d_freq = d_phase * x_values
        return np.column_stack((d_freq, d_phase))

    return model, jacobian


def guess_harmonic_parameters(
    y: np.ndarray,
    *,
    min_freq: float,
    max_freq: float,
) -> tuple[float, float]:
    """Initial ``(freq, phase)`` from the strongest FFT bin inside the band.

    ``y`` is sampled at ``x = 0..n-1``.  Falls back to the strongest bin overall
    when no bin inside ``[min_freq, max_freq]`` carries power, and to the band
    centre for a flat signal.  The returned frequency is clipped into the band.
    """

    samples = np.asarray(y, dtype=float)
    n = samples.size
    spectrum = np.fft.rfft(samples - np.mean(samples))
    bin_freq = 2.0 * np.pi * np.arange(spectrum.size) / n

    magnitude = np.abs(spectrum)
    magnitude[0] = 0.0
    if not np.any(magnitude > 0.0):
        return 0.5 * (min_freq + max_freq), 0.0

    significant = magnitude > 1e-9 * float(np.max(magnitude))
    tolerance = 1e-9 * max_freq
    in_band = (bin_freq >= min_freq - tolerance) & (bin_freq <= max_freq + tolerance)
    if np.any(in_band & significant):
        magnitude = np.where(in_band & significant, magnitude, 0.0)

    k = int(np.argmax(magnitude))
    freq = float(np.clip(bin_freq[k], min_freq, max_freq))
    return freq, float(np.angle(spectrum[k]))


def quantile_distance_period(peaks: np.ndarray, weights: np.ndarray) -> list[PeriodCandidate]:
    """Weighted mean of the shorter peak distances.

    Distances above the 65th percentile are discarded and at most half of all
    distances contribute, which drops gaps caused by missing peaks.
    """

    values = as_1d_array(peaks, "peaks", dtype=float)
    peak_weights = as_1d_array(weights, "weights", dtype=float)
    if values.size != peak_weights.size:
        raise ValueError("peaks and weights must have the same length.")

    positions = np.flatnonzero(values)
    distances = np.diff(positions).astype(float)
    if distances.size == 0:
        return []
    if distances.size == 1:
        return [PeriodCandidate(period=float(distances[0]))]

    gap_weights = 0.5 * (peak_weights[positions[1:]] + peak_weights[positions[:-1]])

    low = float(np.min(distances))
    high = float(np.percentile(distances, DISTANCE_PERCENTILE))
    selected = np.flatnonzero((distances >= low) & (distances <= high))[: distances.size // 2]

    kept = distances[selected]
    if kept.size == 1:
        return [PeriodCandidate(period=float(kept[0]))]

    kept_weights = normalize_weights(gap_weights[selected])
    if not np.any(kept_weights):
        return [PeriodCandidate(period=float(np.mean(kept)))]
    return [PeriodCandidate(period=float(np.dot(kept, kept_weights)))]


def combined_period(peaks: np.ndarray, weights: np.ndarray) -> list[PeriodCandidate]:
    """Snap the periodogram period to the multiple closest to the quantile period.

    The result is the mean of the quantile-distance period and the matching
    integer multiple of the strongest periodogram period.
    """

    spectral = periodogram_periods(peaks, weights)
    if not spectral:
        return []
    distance = quantile_distance_period(peaks, weights)
    if not distance:
        return []

    period_spectral = spectral[0].period
    period_distance = distance[0].period
    multiplier = round_half_up(period_distance / period_spectral)
    return [PeriodCandidate(period=0.5 * period_distance + 0.5 * period_spectral * multiplier)]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""

    return int(math.floor(value + 0.5))


ESTIMATORS: dict[str, Estimator] = {
    "periodogram": periodogram_periods,
    "harmonic-fit": harmonic_fit_period,
    "quantile-distance": quantile_distance_period,
    "combined": combined_period,
}


def resolve_estimator(name: str) -> Estimator:
    """Return the estimator registered under ``name``."""

    key = str(name).lower()
    if key not in ESTIMATORS:
        raise ValueError(
            f"Unsupported estimator {name!r}. "
            f"Use one of: {', '.join(ESTIMATORS)}."
        )
    return ESTIMATORS[key]


def estimate_periods(
    peaks: np.ndarray,
    weights: np.ndarray,
    *,
    estimator: EstimatorName = DEFAULT_ESTIMATOR,
) -> list[PeriodCandidate]:
    """Run the named estimator on one peak series."""

    return resolve_estimator(estimator)(peaks, weights)


__all__ = [
    "DEFAULT_ESTIMATOR",
    "ESTIMATORS",
    "Estimator",
    "EstimatorName",
    "PeriodCandidate",
    "banded_cosine",
    "combined_period",
    "estimate_periods",
    "guess_harmonic_parameters",
    "harmonic_fit_period",
    "periodogram_periods",
    "quantile_distance_period",
    "resolve_estimator",
    "round_half_up",
    "scargle_power",
]
