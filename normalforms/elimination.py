"""Pivot selection and GCD-based zeroing primitives.

The zeroing routines combine the pivot row/column with another one through a
2x2 transform built from ``gcd_kb``::

    [p  -y/g]
    [q   x/g]      with  p*x + q*y = g,

whose determinant is ``(p*x + q*y) / g = 1``. The same transform is applied
to the tracking matrix, so the tracking matrix stays unimodular and always
records every operation performed on the subject matrix.

``zero_row``/``zero_col`` and ``find_row_pivot``/``find_col_pivot`` are exact
mirrors of each other under transposition.
"""

from typing import Optional, Tuple

from .matrix import IntegerMatrix


def find_pivot(A: IntegerMatrix, k: int) -> Optional[Tuple[int, int]]:
    """Locate a pivot for position ``(k, k)`` of a two-sided elimination.

    The existing ``(k, k)`` entry is preferred. Otherwise the active
    submatrix (rows and columns ``>= k``) is scanned column by column and the
    first nonzero entry is returned.

    Returns:
        ``(i, j)`` of the pivot, or ``None`` if the active submatrix is zero.
    """
    m, n = A.shape
    data = A.data
    if k < m and k < n and data[k][k] != 0:
        return k, k
    for j in range(k, n):
        for i in range(k, m):
            if data[i][j] != 0:
                return i, j
    return None


def find_row_pivot(A: IntegerMatrix, row: int, col: int) -> Optional[int]:
    """First column ``j >= col`` with ``A[row][j] != 0``, preferring ``col``."""
    entries = A.data[row]
    for j in range(col, A.ncols):
        if entries[j] != 0:
            return j
    return None


def find_col_pivot(A: IntegerMatrix, row: int, col: int) -> Optional[int]:
    """First row ``i >= row`` with ``A[i][col] != 0``, preferring ``row``."""
    data = A.data
    for i in range(row, A.nrows):
        if data[i][col] != 0:
            return i
    return None


def is_row_zero_after(A: IntegerMatrix, k: int) -> bool:
    """True if every entry of row ``k`` right of ``A[k][k]`` is zero."""
    return all(x == 0 for x in A.data[k][k + 1:])


def is_col_zero_after(A: IntegerMatrix, k: int) -> bool:
    """True if every entry of column ``k`` below ``A[k][k]`` is zero."""
    return all(A.data[i][k] == 0 for i in range(k + 1, A.nrows))


def zero_row(A: IntegerMatrix, U: IntegerMatrix, k: int, start: Optional[int] = None) -> None:
    """Zero ``A[k][start+1:]`` using column operations.

    The pivot is ``A[k][start]`` (``start`` defaults to ``k``). Every column
    operation is mirrored on ``U``, a right factor, so ``A_in @ U`` keeps
    tracking ``A``. On return ``A[k][start]`` holds the gcd of the row tail.
    """
    ring = A.ring
    c = k if start is None else start
    row = A.data[k]

    for j in range(c + 1, A.ncols):
        y = row[j]
        if ring.is_zero(y):
            continue
        x = row[c]
        g, p, q = ring.gcd_kb(x, y)
        xd = ring.exact_div(x, g)
        yd = ring.neg(ring.exact_div(y, g))

        A.apply_col_2x2(c, j, p, q, yd, xd)
        U.apply_col_2x2(c, j, p, q, yd, xd)


def zero_col(A: IntegerMatrix, U: IntegerMatrix, k: int, start: Optional[int] = None) -> None:
    """Zero the entries of column ``k`` below row ``start`` using row operations.

    Mirror image of ``zero_row``: the pivot is ``A[start][k]`` (``start``
    defaults to ``k``) and every row operation is mirrored on ``U``, a left
    factor, so ``U @ A_in`` keeps tracking ``A``.
    """
    ring = A.ring
    r = k if start is None else start

    for i in range(r + 1, A.nrows):
        y = A.data[i][k]
        if ring.is_zero(y):
            continue
        x = A.data[r][k]
        g, p, q = ring.gcd_kb(x, y)
        xd = ring.exact_div(x, g)
        yd = ring.neg(ring.exact_div(y, g))

        A.apply_row_2x2(r, i, p, q, yd, xd)
        U.apply_row_2x2(r, i, p, q, yd, xd)


def zero_row_and_col(
    A: IntegerMatrix,
    U: IntegerMatrix,
    V: IntegerMatrix,
    k: int,
) -> int:
    """Zero row ``k`` and column ``k`` of ``A`` outside the diagonal.

    Alternates ``zero_row`` (tracked in the right factor ``V``) and
    ``zero_col`` (tracked in the left factor ``U``). Each round that does not
    finish strictly decreases ``|A[k][k]|``, so the loop terminates.

    Returns:
        The number of rounds performed.
    """
    rounds = 0
    while not (is_row_zero_after(A, k) and is_col_zero_after(A, k)):
        zero_row(A, V, k)
        zero_col(A, U, k)
        rounds += 1
    return rounds
