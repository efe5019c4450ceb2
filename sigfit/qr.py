"""Updates of a QR factorisation when a column is appended or removed.

``q`` is an n-by-n orthogonal matrix given as a list of its columns.
``r`` is an upper triangular matrix given as a list of packed columns:
column ``c`` holds its ``c + 1`` entries on and above the diagonal.
Both functions return new ``(q, r)`` lists and leave their inputs untouched.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

Columns = Sequence[Sequence[float]]


def _givens(x: float, y: float) -> tuple[float, float, float, float]:
    """Return ``(h, c, s, nu)`` of a rotation taking ``(x, y)`` to ``(h, 0)``."""
    h = math.hypot(x, y)
    if x < 0.0:
        h = -h
    return h, x / h, y / h, y / (x + h)


def _rotate(
    c: float, s: float, nu: float, u: float, v: float
) -> tuple[float, float]:
    temp = c * u + s * v
    return temp, nu * (u + temp) - v


def _rotate_columns(
    q: list[list[float]], i: int, c: float, s: float, nu: float
) -> None:
    pairs = [_rotate(c, s, nu, u, v) for u, v in zip(q[i - 1], q[i])]
    q[i - 1] = [p[0] for p in pairs]
    q[i] = [p[1] for p in pairs]


def qr_insert(
    q: Columns, r: Columns, a: Sequence[float], rank: int
) -> tuple[list[list[float]], list[list[float]]]:
    """Append a column to ``r``.

    ``a`` is the new column expressed in the basis ``q`` (length n) and
    ``rank`` is the number of columns of ``r`` after the insertion. Rotations
    bring the entries of ``a`` beyond ``rank`` to zero; the same rotations are
    applied to the columns of ``q``.
    """
    n = len(q)
    if not 1 <= rank <= n:
        raise ValueError(f"rank must be between 1 and {n}, got {rank}")
    if len(r) != rank - 1:
        raise ValueError(f"r must have {rank - 1} columns, got {len(r)}")
    if len(a) != n:
        raise ValueError(f"a must have length {n}, got {len(a)}")

    a = list(a)
    new_q = [list(column) for column in q]
    for i in range(n - 1, rank - 1, -1):
        if a[i] == 0.0:
            continue
        if a[i - 1] == 0.0:
            a[i - 1] = a[i]
            new_q[i - 1], new_q[i] = new_q[i], new_q[i - 1]
        else:
            h, c, s, nu = _givens(a[i - 1], a[i])
            a[i - 1] = h
            _rotate_columns(new_q, i, c, s, nu)

    new_r = [list(column) for column in r]
    new_r.append(a[:rank])
    return new_q, new_r


def qr_delete(
    q: Columns, r: Columns, rank: int, col: int
) -> tuple[list[list[float]], list[list[float]]]:
    """Drop the ``col``-th (1-based) column of ``r``, which has ``rank`` columns.

    Rotations on the rows of ``r`` restore its upper triangular form, and the
    same rotations are applied to the columns of ``q``.
    """
    if len(r) != rank:
        raise ValueError(f"r must have {rank} columns, got {len(r)}")
    if not 1 <= col <= rank:
        raise ValueError(f"col must be between 1 and {rank}, got {col}")

    new_q = [list(column) for column in q]
    new_r = [list(column) for column in r]
    for i in range(col, rank):
        below = new_r[i][i]
        if below == 0.0:
            continue
        above = new_r[i][i - 1]
        if above == 0.0:
            for column in new_r[i:rank]:
                column[i - 1], column[i] = column[i], column[i - 1]
            new_q[i - 1], new_q[i] = new_q[i], new_q[i - 1]
        else:
            _, c, s, nu = _givens(above, below)
            for column in new_r[i:rank]:
                column[i - 1], column[i] = _rotate(c, s, nu, column[i - 1], column[i])
            _rotate_columns(new_q, i, c, s, nu)
        new_r[i - 1] = new_r[i][:i]
    return new_q, new_r[: rank - 1]