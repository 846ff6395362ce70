from ais_detection.dataio.catalog import (
    FEATURE_COLUMNS,
    empty_feature_catalog,
    features_to_frame,
    read_feature_catalog_csv,
    validate_feature_catalog,
    write_feature_catalog_csv,
)
from ais_detection.dataio.io_npz import DEFAULT_MATRIX_KEY, load_matrix_npz, save_matrix_npz

__all__ = [
    "DEFAULT_MATRIX_KEY",
    "FEATURE_COLUMNS",
    "empty_feature_catalog",
    "features_to_frame",
    "load_matrix_npz",
    "read_feature_catalog_csv",
    "save_matrix_npz",
    "validate_feature_catalog",
    "write_feature_catalog_csv",
]
