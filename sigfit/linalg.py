"""Dense linear-algebra helpers for small upper-triangular systems.

Matrices are lists of rows. Functions never modify their arguments; they
return new lists.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]


class NotPositiveDefiniteError(ValueError):
    """Raised when a Cholesky factorisation meets a non-positive pivot."""

    def __init__(self, minor: int) -> None:
        super().__init__(
            f"leading minor {minor} of the matrix is not positive definite"
        )
        self.minor = minor


def dot(x: Vector, y: Vector) -> float:
    """Return the inner product of two vectors of equal length."""
    return sum(xi * yi for xi, yi in zip(x, y, strict=True))


def cholesky(a: Matrix) -> list[list[float]]:
    """Return the upper triangular ``r`` with ``a == r.T @ r``.

    Only the upper triangle of ``a`` is read. Raises
    :class:`NotPositiveDefiniteError` carrying the 1-based order of the first
    leading minor that is not positive definite.
    """
    n = len(a)
    r = [[0.0] * n for _ in range(n)]
    for j in range(n):
        for k in range(j):
            partial = sum(r[i][k] * r[i][j] for i in range(k))
            r[k][j] = (a[k][j] - partial) / r[k][k]
        s = a[j][j] - sum(r[i][j] * r[i][j] for i in range(j))
        if s <= 0.0:
            raise NotPositiveDefiniteError(j + 1)
        r[j][j] = math.sqrt(s)
    return r


def triangular_multiply(r: Matrix, b: Vector) -> list[float]:
    """Return ``r @ b`` for an upper triangular ``r``."""
    n = len(b)
    return [sum(r[i][j] * b[j] for j in range(i, n)) for i in range(n)]


def triangular_multiply_transpose(r: Matrix, b: Vector) -> list[float]:
    """Return ``r.T @ b`` for an upper triangular ``r``."""
    n = len(b)
    return [sum(r[j][i] * b[j] for j in range(i + 1)) for i in range(n)]


def triangular_solve(r: Matrix, b: Vector) -> list[float]:
    """Solve ``r @ x == b`` for an upper triangular ``r``."""
    n = len(b)
    x = [0.0] * n
    for k in reversed(range(n)):
        partial = sum(r[k][j] * x[j] for j in range(k + 1, n))
        x[k] = (b[k] - partial) / r[k][k]
    return x


def triangular_solve_transpose(r: Matrix, b: Vector) -> list[float]:
    """Solve ``r.T @ x == b`` for an upper triangular ``r``."""
    n = len(b)
    x = [0.0] * n
    for k in range(n):
        partial = sum(r[j][k] * x[j] for j in range(k))
        x[k] = (b[k] - partial) / r[k][k]
    return x


def triangular_invert(r: Matrix) -> list[list[float]]:
    """Return the inverse of an upper triangular ``r`` (also upper triangular)."""
    n = len(r)
    columns = [
        triangular_solve(r, [1.0 if i == j else 0.0 for i in range(n)])
        for j in range(n)
    ]
    return [list(row) for row in zip(*columns)]