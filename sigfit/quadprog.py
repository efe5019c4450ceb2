"""Strictly convex quadratic programming by the Goldfarb-Idnani dual method.

Solves::

    minimise    1/2 x^T G x - a^T x
    subject to  C1^T x  = b1     (the first ``meq`` columns of C)
                C2^T x >= b2     (the remaining columns)

Matrices are lists of rows; ``C`` has one column per constraint.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from sigfit.linalg import (
    cholesky,
    dot,
    triangular_invert,
    triangular_multiply,
    triangular_multiply_transpose,
    triangular_solve,
    triangular_solve_transpose,
)
from sigfit.qr import qr_delete, qr_insert

Vector = Sequence[float]
Matrix = Sequence[Sequence[float]]


class InfeasibleError(ValueError):
    """Raised when the constraints of a quadratic program cannot be met."""


@dataclass(frozen=True)
class QPResult:
    """Solution of a quadratic program.

    ``x`` is the constrained minimiser and ``f`` the objective value there;
    ``xu`` is the unconstrained minimiser. ``iterations`` holds the number of
    passes of the main loop (one more than the constraints added) and the
    number of constraints dropped. ``lagrangian`` has one multiplier per
    constraint; ``iact`` lists the 0-based indices of the active constraints.
    """

    x: list[float]
    f: float
    xu: list[float]
    iterations: tuple[int, int]
    lagrangian: list[float]
    iact: list[int]


def calculate_vsmall() -> float:
    """Return a small number bounding the relative precision of float arithmetic."""
    vsmall = 1e-60
    while True:
        vsmall += vsmall
        if vsmall * 0.1 + 1.0 > 1.0 and vsmall * 0.2 + 1.0 > 1.0:
            return vsmall


def _ratio(value: float, norm: float) -> float:
    return value / norm if norm else math.inf


def _packed_back_solve(r: Sequence[Sequence[float]], d: Vector) -> list[float]:
    """Solve ``r @ x == d`` where ``r`` is upper triangular in packed columns."""
    x = list(d)
    for i in reversed(range(len(x))):
        x[i] /= r[i][i]
        column = r[i]
        for k in range(i):
            x[k] -= x[i] * column[k]
    return x


def _goldfarb_idnani(
    j: list[list[float]],
    x: list[float],
    constraints: list[list[float]],
    b: Sequence[float],
    meq: int,
    obj: float,
) -> tuple[list[float], float, tuple[int, int], list[float], list[int]]:
    n = len(x)
    vsmall = calculate_vsmall()
    norms = [math.sqrt(dot(c, c)) for c in constraints]

    r: list[list[float]] = []
    active: list[int] = []
    u_active: list[float] = []
    full_iterations = 1
    partial_iterations = 0

    while True:
        slacks = []
        for normal, bound in zip(constraints, b):
            s = dot(x, normal) - bound
            slacks.append(0.0 if abs(s) < vsmall else s)
        for k in active:
            slacks[k] = 0.0

        iadd: int | None = None
        max_violation = 0.0
        for i, (s, norm) in enumerate(zip(slacks, norms)):
            if s < -max_violation * norm:
                iadd = i
                max_violation = _ratio(-s, norm)
            elif i < meq and s > max_violation * norm:
                iadd = i
                max_violation = _ratio(s, norm)

        if iadd is None:
            lagrangian = [0.0] * len(constraints)
            for k, uk in zip(active, u_active):
                lagrangian[k] = uk
            return x, obj, (full_iterations, partial_iterations), lagrangian, list(active)

        normal = constraints[iadd]
        slack = slacks[iadd]
        reverse = slack > 0.0
        u = 0.0

        while True:
            dv = [dot(column, normal) for column in j]
            nact = len(active)

            zv = [0.0] * n
            for coef, column in zip(dv[nact:], j[nact:]):
                zv = [z + coef * c for z, c in zip(zv, column)]

            rv = _packed_back_solve(r, dv[:nact])

            idel: int | None = None
            t1 = math.inf
            for pos, (k, uk, rk) in enumerate(zip(active, u_active, rv)):
                if k >= meq and ((not reverse and rk > 0.0) or (reverse and rk < 0.0)):
                    candidate = uk / abs(rk)
                    if idel is None or candidate < t1:
                        t1 = candidate
                        idel = pos

            t2_infinite = abs(dot(zv, zv)) <= vsmall
            ztn = t2 = 0.0
            if not t2_infinite:
                ztn = dot(zv, normal)
                t2 = abs(slack) / ztn

            if idel is None and t2_infinite:
                raise InfeasibleError("Infeasible constraints")

            full_step = not t2_infinite and (idel is None or t1 >= t2)
            step_length = t2 if full_step else t1
            step = -step_length if reverse else step_length

            if not t2_infinite:
                x = [xi + step * zi for xi, zi in zip(x, zv)]
                obj += step * ztn * (step / 2.0 + u)

            u_active = [uk - step * rk for uk, rk in zip(u_active, rv)]
            u += step

            if full_step:
                break

            assert idel is not None
            j, r = qr_delete(j, r, nact, idel + 1)
            del active[idel]
            del u_active[idel]
            partial_iterations += 1

            if not t2_infinite:
                slack = dot(x, normal) - b[iadd]

        active.append(iadd)
        u_active.append(u)
        j, r = qr_insert(j, r, dv, len(active))
        full_iterations += 1


def solve_qp(
    G: Matrix,
    a: Vector,
    C: Matrix | None = None,
    b: Vector | None = None,
    meq: int = 0,
    factorized: bool = False,
) -> QPResult:
    """Minimise ``1/2 x^T G x - a^T x`` subject to ``C^T x (=|>=) b``.

    With ``factorized`` set, ``G`` is taken to be ``R^-1`` where ``R`` is the
    upper triangular factor of the objective matrix. Without constraints a
    single inactive dummy constraint is used. Raises ``ValueError`` on
    mismatched shapes, :class:`~sigfit.linalg.NotPositiveDefiniteError` when
    ``G`` is not positive definite and :class:`InfeasibleError` when no point
    meets the constraints.
    """
    n = len(G)
    if n == 0 or any(len(row) != n for row in G):
        raise ValueError("G must be square")

    if not C:
        C = [[0.0] for _ in range(n)]
        b = [-1.0]
    b = [] if b is None else [float(v) for v in b]
    m = len(C[0])

    if len(a) != n:
        raise ValueError("a must have same dimension as G")
    if len(C) != n:
        raise ValueError("C must have same row count as G")
    if any(len(row) != m for row in C):
        raise ValueError("all rows of C must have the same length")
    if len(b) != m:
        raise ValueError("b must match columns of C")

    a = [float(v) for v in a]
    if factorized:
        j_rows = [
            [float(v) if col >= row_index else 0.0 for col, v in enumerate(row)]
            for row_index, row in enumerate(G)
        ]
        xu = triangular_multiply(j_rows, triangular_multiply_transpose(j_rows, a))
    else:
        factor = cholesky(G)
        xu = triangular_solve(factor, triangular_solve_transpose(factor, a))
        j_rows = triangular_invert(factor)

    obj = -dot(a, xu) / 2.0
    j = [list(column) for column in zip(*j_rows)]
    constraints = [[float(v) for v in column] for column in zip(*C)]

    x, f, iterations, lagrangian, active = _goldfarb_idnani(
        j, list(xu), constraints, b, meq, obj
    )
    return QPResult(
        x=x,
        f=f,
        xu=list(xu),
        iterations=iterations,
        lagrangian=lagrangian,
        iact=active,
    )