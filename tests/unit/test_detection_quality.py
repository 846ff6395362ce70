"""Unit tests for detection.quality."""

from __future__ import annotations

import numpy as np
import pytest

from ais_detection.detection.estimators import PeriodCandidate
from ais_detection.detection.quality import period_quality, pick_best_candidate


def _energy_at_multiples_of_three(length: int = 30) -> np.ndarray:
    sums = np.zeros(length)
    sums[::3] = 10.0
    return sums


def test_period_quality_averages_visited_samples() -> None:
    sums = _energy_at_multiples_of_three()

    assert period_quality(sums, period=3.0) == pytest.approx(10.0)
    # visits 0, 7, 14, 21, 28 of which 0 and 21 carry energy
    assert period_quality(sums, period=7.0) == pytest.approx(4.0)


def test_period_quality_skips_negative_positions_and_duplicates() -> None:
    sums = np.arange(10, dtype=float)

    # -2, 1, 4, 7 -> only 1, 4, 7 are visited
    assert period_quality(sums, period=3.0, offset=-2) == pytest.approx(4.0)
    # 0, 0.4, 0.8, 1.2 ... rounds to 0, 0, 1, 1, 2, ...; each index counted once
    assert period_quality(sums, period=0.4) == pytest.approx(np.mean(np.arange(10)))


def test_period_quality_without_visits_is_zero() -> None:
    assert period_quality(np.ones(5), period=2.0, offset=10) == 0.0


def test_period_quality_rejects_non_positive_period() -> None:
    with pytest.raises(ValueError, match="period must be positive"):
        period_quality(np.ones(5), period=0.0)


def test_pick_best_candidate_prefers_period_matching_energy() -> None:
    sums = _energy_at_multiples_of_three()
    candidates = [PeriodCandidate(period=3.0, offset=0), PeriodCandidate(period=7.0, offset=0)]

    best = pick_best_candidate(candidates, sums)

    assert best == PeriodCandidate(period=3.0, offset=0)


def test_pick_best_candidate_single_candidate_is_returned_unchanged() -> None:
    candidate = PeriodCandidate(period=11.5, offset=None)
    assert pick_best_candidate([candidate], np.zeros(4)) is candidate


def test_pick_best_candidate_ties_keep_first() -> None:
    candidates = [PeriodCandidate(period=5.0), PeriodCandidate(period=6.0)]
    assert pick_best_candidate(candidates, np.zeros(20)) is candidates[0]


def test_pick_best_candidate_empty_is_none() -> None:
    assert pick_best_candidate([], np.ones(4)) is None
