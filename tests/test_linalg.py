import pytest

from sigfit.linalg import (
    NotPositiveDefiniteError,
    cholesky,
    dot,
    triangular_invert,
    triangular_multiply,
    triangular_multiply_transpose,
    triangular_solve,
    triangular_solve_transpose,
)

SPD = [
    [4.0, 2.0, 0.6],
    [2.0, 5.0, 1.5],
    [0.6, 1.5, 3.0],
]

UPPER = [
    [2.0, -1.0, 0.5],
    [0.0, 3.0, 1.25],
    [0.0, 0.0, 1.5],
]

IDENTITY = [[1.0 if i == j else 0.0 for j in range(3)] for i in range(3)]


def _matmul(x, y):
    return [[sum(a * b for a, b in zip(row, col)) for col in zip(*y)] for row in x]


def _transpose(x):
    return [list(row) for row in zip(*x)]


def test_dot_value():
    assert dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0


def test_dot_of_empty_vectors_is_zero():
    assert dot([], []) == 0.0


def test_dot_rejects_different_lengths():
    with pytest.raises(ValueError):
        dot([1.0, 2.0], [1.0])


def test_cholesky_reconstructs_matrix():
    r = cholesky(SPD)
    product = _matmul(_transpose(r), r)
    assert len(product) == len(SPD)
    for row, expected in zip(product, SPD):
        assert row == pytest.approx(expected, abs=1e-12)


def test_cholesky_is_upper_triangular_with_positive_diagonal():
    r = cholesky(SPD)
    assert all(r[i][j] == 0.0 for i in range(3) for j in range(i))
    assert all(r[i][i] > 0.0 for i in range(3))


def test_cholesky_reads_only_upper_triangle():
    garbage = [row[:] for row in SPD]
    garbage[1][0] = 99.0
    garbage[2][0] = -7.0
    garbage[2][1] = 42.0
    assert cholesky(garbage) == cholesky(SPD)


def test_cholesky_reports_failing_minor():
    with pytest.raises(NotPositiveDefiniteError) as excinfo:
        cholesky([[1.0, 2.0], [2.0, 1.0]])
    assert excinfo.value.minor == 2


def test_cholesky_first_minor_failure():
    with pytest.raises(NotPositiveDefiniteError) as excinfo:
        cholesky([[0.0, 0.0], [0.0, 1.0]])
    assert excinfo.value.minor == 1


def test_not_positive_definite_is_value_error():
    with pytest.raises(ValueError):
        cholesky([[-1.0]])


def test_multiply_matches_full_product():
    b = [1.0, -2.0, 0.5]
    expected = [row[0] for row in _matmul(UPPER, [[v] for v in b])]
    result = triangular_multiply(UPPER, b)
    assert result == pytest.approx(expected, abs=1e-12)


def test_multiply_transpose_matches_full_product():
    b = [1.0, -2.0, 0.5]
    expected = [row[0] for row in _matmul(_transpose(UPPER), [[v] for v in b])]
    result = triangular_multiply_transpose(UPPER, b)
    assert result == pytest.approx(expected, abs=1e-12)


def test_solve_inverts_multiply():
    b = [0.3, -1.7, 2.2]
    result = triangular_solve(UPPER, triangular_multiply(UPPER, b))
    assert result == pytest.approx(b, abs=1e-12)


def test_solve_transpose_inverts_multiply_transpose():
    b = [0.3, -1.7, 2.2]
    product = triangular_multiply_transpose(UPPER, b)
    result = triangular_solve_transpose(UPPER, product)
    assert result == pytest.approx(b, abs=1e-12)


def test_solve_does_not_modify_input():
    b = [1.0, 2.0, 3.0]
    triangular_solve(UPPER, b)
    assert b == [1.0, 2.0, 3.0]


def test_invert_gives_identity():
    inverse = triangular_invert(UPPER)
    left = _matmul(UPPER, inverse)
    right = _matmul(inverse, UPPER)
    assert len(inverse) == 3
    for row, expected in zip(left, IDENTITY):
        assert row == pytest.approx(expected, abs=1e-12)
    for row, expected in zip(right, IDENTITY):
        assert row == pytest.approx(expected, abs=1e-12)


def test_invert_is_upper_triangular():
    inverse = triangular_invert(UPPER)
    assert all(inverse[i][j] == 0.0 for i in range(3) for j in range(i))


def test_cholesky_then_solves_give_inverse_action():
    a = [1.0, 2.0, 3.0]
    r = cholesky(SPD)
    x = triangular_solve(r, triangular_solve_transpose(r, a))
    back = [dot(row, x) for row in SPD]
    assert back == pytest.approx(a, abs=1e-12)


def test_invert_zero_diagonal_raises():
    with pytest.raises(ZeroDivisionError):
        triangular_invert([[0.0, 1.0], [0.0, 1.0]])