"""Unit tests for dataio.catalog."""

from __future__ import annotations

import pandas as pd
import pytest

from ais_detection.dataio.catalog import (
    FEATURE_COLUMNS,
    features_to_frame,
    read_feature_catalog_csv,
    validate_feature_catalog,
    write_feature_catalog_csv,
)
from ais_detection.detection.detector import DetectedFeature, FeatureKind


def _features() -> list[DetectedFeature]:
    return [
        DetectedFeature(kind=FeatureKind.HORIZONTAL_REPETITION, period=4.25, offset=1),
        DetectedFeature(kind=FeatureKind.VERTICAL_REPETITION, period=6.0),
    ]


def test_features_to_frame_has_one_row_per_feature() -> None:
    frame = features_to_frame(_features(), source="orbit_2415.npz")

    assert tuple(frame.columns) == FEATURE_COLUMNS
    assert frame["kind"].tolist() == ["horizontal_repetition", "vertical_repetition"]
    assert frame["period"].tolist() == [4.25, 6.0]
    assert frame["offset"].tolist() == [1, 0]
    assert frame["harmonic_count"].tolist() == [8, 8]
    assert set(frame["source"]) == {"orbit_2415.npz"}


def test_features_to_frame_empty() -> None:
    frame = features_to_frame([])
    assert frame.empty
    assert tuple(frame.columns) == FEATURE_COLUMNS


def test_feature_catalog_csv_roundtrip(tmp_path) -> None:
    frame = features_to_frame(_features(), source="a.npz")
    path = write_feature_catalog_csv(frame, tmp_path / "out" / "features.csv")

    loaded = read_feature_catalog_csv(path)

    assert len(loaded) == 2
    assert loaded["period"].tolist() == [4.25, 6.0]


def test_validate_feature_catalog_requires_columns() -> None:
    with pytest.raises(ValueError, match="missing required columns"):
        validate_feature_catalog(pd.DataFrame({"kind": ["horizontal_repetition"]}))


def test_validate_feature_catalog_orders_required_columns_first() -> None:
    frame = features_to_frame(_features())
    frame.insert(0, "notes", ["x", "y"])

    validated = validate_feature_catalog(frame)

    assert tuple(validated.columns) == (*FEATURE_COLUMNS, "notes")
    assert tuple(validate_feature_catalog(frame, allow_extra=False).columns) == FEATURE_COLUMNS


def test_read_feature_catalog_csv_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        read_feature_catalog_csv(tmp_path / "missing.csv")
