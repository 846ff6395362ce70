"""Unit tests for dataio.io_npz."""

from __future__ import annotations

import numpy as np
import pytest

from ais_detection.dataio.io_npz import load_matrix_npz, save_matrix_npz
from ais_detection.utils.validation import InvalidInputError


def test_save_and_load_matrix_roundtrip(tmp_path) -> None:
    path = tmp_path / "ionogram.npz"
    matrix = np.arange(12, dtype=float).reshape(4, 3)
    metadata = {"orbit": 2415, "position": 7}

    save_matrix_npz(path, matrix, metadata=metadata)
    loaded, loaded_metadata = load_matrix_npz(path)

    assert np.array_equal(loaded, matrix)
    assert loaded_metadata == metadata


def test_save_matrix_npz_respects_overwrite_flag(tmp_path) -> None:
    path = tmp_path / "ionogram.npz"
    save_matrix_npz(path, np.ones((2, 2)))

    with pytest.raises(FileExistsError):
        save_matrix_npz(path, np.zeros((2, 2)), overwrite=False)


def test_save_matrix_npz_requires_npz_suffix(tmp_path) -> None:
    with pytest.raises(ValueError, match="must end with .npz"):
        save_matrix_npz(tmp_path / "ionogram.npy", np.ones((2, 2)))


def test_save_matrix_npz_rejects_invalid_matrix(tmp_path) -> None:
    with pytest.raises(InvalidInputError):
        save_matrix_npz(tmp_path / "ionogram.npz", np.ones(4))


def test_load_matrix_npz_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_matrix_npz(tmp_path / "missing.npz")


def test_load_matrix_npz_custom_and_missing_key(tmp_path) -> None:
    path = tmp_path / "ionogram.npz"
    save_matrix_npz(path, np.ones((3, 2)), key="intensity")

    matrix, metadata = load_matrix_npz(path, key="intensity")
    assert matrix.shape == (3, 2)
    assert metadata == {}

    with pytest.raises(KeyError, match="data"):
        load_matrix_npz(path)
