"""Decomposition of a mutational profile into signature exposures."""

from __future__ import annotations

from collections.abc import Sequence

from sigfit.quadprog import solve_qp

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]


def decompose_qp(m: Vector, P: Matrix) -> list[float]:
    """Return the exposures of ``m`` to the signature columns of ``P``.

    Minimises ``|m - P x|^2`` subject to ``sum(x) == 1`` and ``x >= 0``;
    small negative round-off is clipped and the result renormalised to sum 1.
    """
    if not P or not P[0]:
        raise ValueError("P must have at least one row and one column")
    if len(m) != len(P):
        raise ValueError("m must have one entry per row of P")

    n = len(P[0])
    columns = [list(column) for column in zip(*P)]
    G = [[sum(a * b for a, b in zip(ci, cj)) for cj in columns] for ci in columns]
    d = [sum(mk * pk for mk, pk in zip(m, column)) for column in columns]

    C = [[1.0] + [1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]
    b = [1.0] + [0.0] * n

    result = solve_qp(G, d, C, b, meq=1)

    clipped = [max(v, 0.0) for v in result.x]
    total = sum(clipped)
    return [v / total for v in clipped]