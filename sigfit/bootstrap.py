"""Bootstrap resampling and backward elimination of signatures."""

from __future__ import annotations

import random
from collections.abc import Sequence

from sigfit.decompose import decompose_qp
from sigfit.exposures import DecompositionMethod, find_sig_exposures

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]


def is_whole_number(val: float, tol: float = 1e-8) -> bool:
    """Return whether ``val`` lies within ``tol`` of an integer."""
    return abs(val - round(val)) < tol


def bootstrapped_patient(
    m: Vector,
    mutation_count: int = -1,
    R: int = 100,
    rng: random.Random | None = None,
) -> list[list[float]]:
    """Draw ``R`` multinomial resamples of the profile ``m``.

    Returns a K-by-R matrix whose columns are mutation frequencies from
    ``mutation_count`` draws each. A non-positive ``mutation_count`` is taken
    from the sum of ``m``, which must then hold whole counts.
    """
    if mutation_count <= 0:
        if not all(is_whole_number(v) for v in m):
            raise ValueError("Provide mutation_count or ensure m contains counts.")
        mutation_count = round(sum(m))
    if mutation_count <= 0:
        raise ValueError("mutation_count must be positive")

    rng = rng if rng is not None else random.Random()
    k = len(m)
    categories = range(k)
    weights = list(m)

    columns = []
    for _ in range(R):
        counts = [0] * k
        for index in rng.choices(categories, weights=weights, k=mutation_count):
            counts[index] += 1
        columns.append([c / mutation_count for c in counts])
    return [list(row) for row in zip(*columns)] if columns else [[] for _ in m]


def compute_p_value(exposures: Matrix, threshold: float) -> list[float]:
    """Return, per signature, the share of resamples with exposure <= ``threshold``."""
    return [
        1.0 - sum(1 for v in row if v > threshold) / len(row) for row in exposures
    ]


def backward_elimination(
    m: Vector,
    P: Matrix,
    R: int = 100,
    threshold: float = 0.01,
    mutation_count: int = -1,
    significance_level: float = 0.01,
    decomposition_method: DecompositionMethod = decompose_qp,
    rng: random.Random | None = None,
) -> tuple[list[int], tuple[list[list[float]], list[float]]]:
    """Drop signatures from ``P`` until every one left is significant.

    In each round the signature with the largest bootstrap p-value is removed
    while that p-value exceeds ``significance_level``. Returns the indices of
    the kept columns and the exposures and error of ``m`` fitted to them.
    """
    best_columns = list(range(len(P[0])))
    P_temp = [list(row) for row in P]
    M = bootstrapped_patient(m, mutation_count, R, rng)

    while True:
        exposures, _ = find_sig_exposures(M, P_temp, decomposition_method)
        p_values = compute_p_value(exposures, threshold)
        idx = max(range(len(p_values)), key=p_values.__getitem__)
        if p_values[idx] <= significance_level:
            break
        del best_columns[idx]
        P_temp = [[row[c] for c in best_columns] for row in P]

    m_matrix = [[v] for v in m]
    return best_columns, find_sig_exposures(m_matrix, P_temp, decomposition_method)