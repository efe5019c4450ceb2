"""Fitting of mutational signatures to every patient of a samples table."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from sigfit.bootstrap import backward_elimination
from sigfit.tables import load_samples, load_signatures

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURES_FILE = "data/COSMIC_v3.4_SBS_GRCh37.txt"
OUTPUT_FILE_NAME = "Assignment_Solution_Activities.csv"

Exposures = tuple[list[list[float]], list[float]]


def process_sample(
    index: int,
    col: Sequence[float],
    sigs: Sequence[Sequence[float]],
    threshold: float = 0.01,
    mutation_count: int = -1,
    R: int = 100,
    significance_level: float = 0.01,
) -> tuple[int, list[int], Exposures]:
    """Run backward elimination on one patient's profile.

    Returns ``(index, best_columns, (exposures, errors))``. When the fit
    fails the error is logged and the columns and exposures come back empty.
    """
    try:
        best_columns, result = backward_elimination(
            col, sigs, R, threshold, mutation_count, significance_level
        )
    except (ValueError, ArithmeticError) as exc:
        logger.error("Error processing sample %d: %s", index, exc)
        return index, [], ([], [])
    return index, best_columns, result


def _progress(done: int, total: int) -> None:
    percent = done / total
    bar = "=" * int(20 * percent)
    sys.stdout.write(f"\r[{bar:<20}] {int(100 * percent)}%")
    sys.stdout.flush()


def fit(
    samples_file: str | os.PathLike[str],
    output_folder: str | os.PathLike[str],
    threshold: float = 0.01,
    mutation_count: int = -1,
    R: int = 100,
    significance_level: float = 0.01,
    signatures_file: str | os.PathLike[str] = DEFAULT_SIGNATURES_FILE,
    drop_zeros_columns: bool = False,
) -> Path:
    """Fit signatures to every patient and write the activities table.

    The table goes to ``Assignment_Solution_Activities.csv`` inside
    ``output_folder``, whose path is returned. Signatures eliminated for a
    patient, and every signature of a patient whose fit failed, get ``0``.
    ``drop_zeros_columns`` currently has no effect.
    """
    samples, patient_names = load_samples(samples_file)
    sigs, sig_names = load_signatures(signatures_file)
    if not samples or not samples[0]:
        raise ValueError("samples file holds no data")
    if not sigs or not sigs[0]:
        raise ValueError("signatures file holds no data")

    n_patients = len(samples[0])
    n_sigs = len(sigs[0])

    output = [["Patient", *sig_names[:n_sigs]]]
    for i in range(n_patients):
        column = [row[i] for row in samples]
        _, best_columns, (exposures, _) = process_sample(
            i, column, sigs, threshold, mutation_count, R, significance_level
        )
        row = [patient_names[i]] + ["0"] * n_sigs
        for position, col_index in enumerate(best_columns):
            row[col_index + 1] = f"{exposures[position][0]:.6f}"
        output.append(row)
        _progress(i + 1, n_patients)
    print()

    folder = Path(output_folder)
    folder.mkdir(parents=True, exist_ok=True)
    target = folder / OUTPUT_FILE_NAME
    with target.open("w", newline="") as handle:
        handle.writelines(",".join(row) + "\n" for row in output)
    print(f"✅ Saved: {target}")
    return target