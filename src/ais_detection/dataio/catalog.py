"""Tabular catalogs of detected features."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ais_detection.detection.detector import DetectedFeature

FEATURE_COLUMNS: tuple[str, ...] = (
    "source",
    "kind",
    "period",
    "offset",
    "harmonic_count",
)


def empty_feature_catalog() -> pd.DataFrame:
    """Create an empty DataFrame with the feature catalog columns."""

    return pd.DataFrame(columns=list(FEATURE_COLUMNS))


def features_to_frame(
    features: Iterable[DetectedFeature],
    *,
    source: str | None = None,
) -> pd.DataFrame:
    """One row per detected feature, tagged with ``source`` (e.g. a file name)."""

    rows = [
        {
            "source": source,
            "kind": feature.kind.value,
            "period": float(feature.period),
            "offset": int(feature.offset),
            "harmonic_count": int(feature.harmonic_count),
        }
        for feature in features
    ]
    if not rows:
        return empty_feature_catalog()
    return pd.DataFrame(rows, columns=list(FEATURE_COLUMNS))


def validate_feature_catalog(frame: pd.DataFrame, *, allow_extra: bool = True) -> pd.DataFrame:
    """Check required columns and put them first."""

    missing = sorted(set(FEATURE_COLUMNS) - set(frame.columns))
    if missing:
        raise ValueError(f"Feature catalog is missing required columns: {missing}.")

    if allow_extra:
        extras = [column for column in frame.columns if column not in FEATURE_COLUMNS]
        frame = frame.loc[:, list(FEATURE_COLUMNS) + extras]
    else:
        frame = frame.loc[:, list(FEATURE_COLUMNS)]
    return frame.reset_index(drop=True)


def write_feature_catalog_csv(catalog: pd.DataFrame, path: str | Path) -> Path:
    """Write a feature catalog DataFrame to CSV."""

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    validate_feature_catalog(catalog).to_csv(destination, index=False)
    return destination


def read_feature_catalog_csv(path: str | Path) -> pd.DataFrame:
    """Read a CSV feature catalog written by :func:`write_feature_catalog_csv`."""

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(source)
    frame = pd.read_csv(source)
    if frame.empty:
        return empty_feature_catalog()
    return validate_feature_catalog(frame)


__all__ = [
    "FEATURE_COLUMNS",
    "empty_feature_catalog",
    "features_to_frame",
    "read_feature_catalog_csv",
    "validate_feature_catalog",
    "write_feature_catalog_csv",
]
