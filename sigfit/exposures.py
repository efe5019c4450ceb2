"""Signature exposures for a matrix of mutational profiles."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from sigfit.decompose import decompose_qp

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]
DecompositionMethod = Callable[[list[float], Matrix], Sequence[float]]


def frobenius_norm(m: Vector, P: Matrix, x: Vector) -> float:
    """Return the reconstruction error ``|m - P x|``."""
    total = 0.0
    for mi, row in zip(m, P):
        approx = sum(p * xj for p, xj in zip(row, x))
        total += (mi - approx) ** 2
    return math.sqrt(total)


def find_sig_exposures(
    M: Matrix,
    P: Matrix,
    decomposition_method: DecompositionMethod = decompose_qp,
) -> tuple[list[list[float]], list[float]]:
    """Decompose every column of ``M`` into the signature columns of ``P``.

    Columns of ``M`` with a positive sum are normalised to sum 1 first.
    Returns ``(exposures, errors)``: an N-by-G matrix of exposures (one row
    per signature) and the reconstruction error of each column.
    """
    if not M or not M[0]:
        raise ValueError("Matrix 'M' must have at least one row and one column.")
    if len(P) != len(M):
        raise ValueError(
            "Matrices 'M' and 'P' must have the same number of rows (mutation types)."
        )
    n = len(P[0]) if P else 0
    if n < 2:
        raise ValueError("Matrix 'P' must have at least 2 columns (signatures).")

    exposure_columns: list[list[float]] = []
    errors: list[float] = []
    for column in zip(*M):
        total = sum(column)
        profile = [v / total for v in column] if total > 0.0 else list(column)
        x = list(decomposition_method(profile, P))
        exposure_columns.append(x[:n])
        errors.append(frobenius_norm(profile, P, x))

    exposures = [list(row) for row in zip(*exposure_columns)]
    return exposures, errors