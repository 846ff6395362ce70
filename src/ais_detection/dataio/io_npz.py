"""Read/write helpers for NPZ-stored measurement matrices."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np

from ais_detection.utils.validation import as_matrix

_METADATA_KEY = "__metadata_json__"
DEFAULT_MATRIX_KEY = "data"


def save_matrix_npz(
    path: str | Path,
    matrix: np.ndarray,
    *,
    metadata: Mapping[str, Any] | None = None,
    key: str = DEFAULT_MATRIX_KEY,
    compressed: bool = True,
    overwrite: bool = True,
) -> Path:
    """Write one matrix + JSON metadata to an NPZ file."""

    destination = Path(path)
    if destination.suffix != ".npz":
        raise ValueError("path must end with .npz")
    if destination.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file: {destination}")
    if not key:
        raise ValueError("key cannot be empty.")
    if key == _METADATA_KEY:
        raise ValueError(f"{_METADATA_KEY!r} is reserved for internal metadata storage.")

    payload = {
        key: as_matrix(matrix, "matrix"),
        _METADATA_KEY: np.array(json.dumps(dict(metadata or {}), sort_keys=True)),
    }

    destination.parent.mkdir(parents=True, exist_ok=True)
    if compressed:
        np.savez_compressed(destination, **payload)
    else:
        np.savez(destination, **payload)
    return destination


def load_matrix_npz(
    path: str | Path,
    *,
    key: str = DEFAULT_MATRIX_KEY,
) -> tuple[np.ndarray, dict[str, Any]]:
    """Load a matrix + metadata from an NPZ file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    KeyError
        If the file holds no array under ``key``.
    InvalidInputError
        If the stored array is not a valid measurement matrix.
    """

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(source)

    metadata: dict[str, Any] = {}
    with np.load(source, allow_pickle=False) as payload:
        if key not in payload.files:
            raise KeyError(f"{source} has no array named {key!r}.")
        matrix = as_matrix(payload[key], key)
        if _METADATA_KEY in payload.files:
            metadata = json.loads(str(payload[_METADATA_KEY].item()))
    return matrix, metadata


__all__ = ["DEFAULT_MATRIX_KEY", "load_matrix_npz", "save_matrix_npz"]
