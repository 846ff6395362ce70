"""Choose between candidate periods by the energy they land on."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ais_detection.detection.estimators import PeriodCandidate, round_half_up
from ais_detection.utils.validation import as_1d_array


def period_quality(sums: np.ndarray, *, period: float, offset: int = 0) -> float:
    """Mean of ``sums`` sampled at ``offset + k * period``.

    Positions are rounded to the nearest index; negative positions, repeated
    indices and indices rounding past the end are skipped.  Returns 0 when no
    position is visited.
    """

    values = as_1d_array(sums, "sums", dtype=float)
    if period <= 0.0:
        raise ValueError("period must be positive.")

    total = 0.0
    repeats = 0
    previous_index: int | None = None
    position = float(offset)
    while position < values.size:
        if position >= 0.0:
            index = round_half_up(position)
            if index != previous_index and index < values.size:
                total += float(values[index])
                repeats += 1
                previous_index = index
        position += period

    if repeats == 0:
        return 0.0
    return total / repeats


def pick_best_candidate(
    candidates: Sequence[PeriodCandidate],
    sums: np.ndarray,
) -> PeriodCandidate | None:
    """Return the candidate with the highest :func:`period_quality`.

    A single candidate is returned unchanged; ties keep the earliest candidate.
    """

    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    best = candidates[0]
    best_quality = period_quality(sums, period=best.period, offset=best.offset or 0)
    for candidate in candidates[1:]:
        quality = period_quality(sums, period=candidate.period, offset=candidate.offset or 0)
        if quality > best_quality:
            best, best_quality = candidate, quality
    return best


__all__ = ["period_quality", "pick_best_candidate"]
