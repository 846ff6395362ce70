#!/usr/bin/env python3
"""Detect row/column repetition in NPZ-stored measurement matrices."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from ais_detection.dataio.catalog import (
    empty_feature_catalog,
    features_to_frame,
    write_feature_catalog_csv,
)
from ais_detection.dataio.io_npz import DEFAULT_MATRIX_KEY, load_matrix_npz
from ais_detection.detection.detector import SummingDetector
from ais_detection.detection.estimators import DEFAULT_ESTIMATOR, ESTIMATORS

DEFAULT_CATALOG_PATH = Path("data/processed/detected_features.csv")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "inputs",
        type=Path,
        nargs="+",
        help="NPZ files (or directories of .npz files) holding one matrix each.",
    )
    parser.add_argument(
        "--estimator",
        choices=sorted(ESTIMATORS),
        default=DEFAULT_ESTIMATOR,
        help=f"Period estimator (default: {DEFAULT_ESTIMATOR}).",
    )
    parser.add_argument(
        "--key",
        default=DEFAULT_MATRIX_KEY,
        help=f"Array name of the matrix inside each NPZ file (default: {DEFAULT_MATRIX_KEY}).",
    )
    parser.add_argument(
        "--catalog-out",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help="Output CSV for the detected feature catalog.",
    )
    parser.add_argument(
        "--figure-dir",
        type=Path,
        default=None,
        help="If set, write one diagnostic PNG per input into this directory.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser


def iter_input_files(inputs: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in inputs:
        if path.is_dir():
            files.extend(sorted(path.glob("*.npz")))
        else:
            files.append(path)
    return files


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    detector = SummingDetector(estimator=args.estimator)
    frames: list[pd.DataFrame] = []
    for path in iter_input_files(list(args.inputs)):
        matrix, _ = load_matrix_npz(path, key=args.key)
        features = detector.detect(matrix)
        frames.append(features_to_frame(features, source=path.name))

        print(f"{path.name}: {len(features)} feature(s)")
        for feature in features:
            print(f"  {feature.kind.value}: period={feature.period:.3f} offset={feature.offset}")

        if args.figure_dir is not None:
            from matplotlib import pyplot as plt

            from ais_detection.plotting.figure_builders import RepetitionFigureBuilder

            figure, _ = RepetitionFigureBuilder().build(matrix, features, title=path.stem)
            destination = args.figure_dir / f"{path.stem}_repetition.png"
            destination.parent.mkdir(parents=True, exist_ok=True)
            figure.savefig(destination, dpi=150)
            plt.close(figure)

    non_empty = [frame for frame in frames if not frame.empty]
    catalog = pd.concat(non_empty, ignore_index=True) if non_empty else empty_feature_catalog()
    catalog_path = write_feature_catalog_csv(catalog, args.catalog_out)
    print(f"Feature rows: {len(catalog)}")
    print(f"Feature catalog CSV: {catalog_path}")


if __name__ == "__main__":
    main()
