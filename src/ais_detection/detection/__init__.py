from ais_detection.detection.detector import (
    HARMONIC_COUNT,
    DetectedFeature,
    FeatureKind,
    SummingDetector,
    column_sums,
    detect_features,
    detect_repetition,
    row_sums,
)
from ais_detection.detection.estimators import (
    DEFAULT_ESTIMATOR,
    ESTIMATORS,
    EstimatorName,
    PeriodCandidate,
    combined_period,
    estimate_periods,
    harmonic_fit_period,
    periodogram_periods,
    quantile_distance_period,
)
from ais_detection.detection.peaks import PeakSeries, extract_peaks, normalize_weights
from ais_detection.detection.quality import period_quality, pick_best_candidate

__all__ = [
    "DEFAULT_ESTIMATOR",
    "ESTIMATORS",
    "EstimatorName",
    "HARMONIC_COUNT",
    "DetectedFeature",
    "FeatureKind",
    "PeakSeries",
    "PeriodCandidate",
    "SummingDetector",
    "column_sums",
    "combined_period",
    "detect_features",
    "detect_repetition",
    "estimate_periods",
    "extract_peaks",
    "harmonic_fit_period",
    "normalize_weights",
    "period_quality",
    "periodogram_periods",
    "pick_best_candidate",
    "quantile_distance_period",
    "row_sums",
]
