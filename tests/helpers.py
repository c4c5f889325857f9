import random
from typing import List

from normalforms.matrix import IntegerMatrix
from normalforms.ring import RoundingMode

Rows = List[List[int]]


def make_random_rows(nrows: int, ncols: int, low: int = -9, high: int = 9) -> Rows:
    """Random integer rows drawn with the stdlib RNG (seed it first)."""
    return [[random.randint(low, high) for _ in range(ncols)] for _ in range(nrows)]


def matmul(*factors: Rows) -> Rows:
    """Exact product of nested-list matrices."""
    result = IntegerMatrix.from_rows(factors[0])
    for f in factors[1:]:
        result = result @ IntegerMatrix.from_rows(f)
    return result.data


def transpose(rows: Rows) -> Rows:
    return [list(col) for col in zip(*rows)]


def det_cofactor(rows: Rows) -> int:
    """
    Naive determinant by cofactor expansion along the first row.
    Only for small square matrices in tests.
    """
    n = len(rows)
    assert all(len(row) == n for row in rows)

    if n == 0:
        return 1
    if n == 1:
        return rows[0][0]
    if n == 2:
        (a, b), (c, d) = rows
        return a * d - b * c

    det = 0
    for j in range(n):
        if rows[0][j] == 0:
            continue
        minor = [row[:j] + row[j + 1:] for row in rows[1:]]
        term = rows[0][j] * det_cofactor(minor)
        det += term if j % 2 == 0 else -term
    return det


def _in_residue_range(x: int, d: int, mode: RoundingMode) -> bool:
    if mode is RoundingMode.NEGATIVE_OFF_DIAGONAL:
        return -d < x <= 0
    return 0 <= x < d


def verify_row_hermite(H: Rows, mode: RoundingMode) -> bool:
    """
    Check the row-style Hermite shape:
    - leading entries move strictly right, zero rows come last;
    - every leading entry is positive;
    - entries above a leading entry are residues of it under ``mode``.
    """
    last_pivot_col = -1
    zero_row_seen = False

    for r, row in enumerate(H):
        pivot_col = next((c for c, x in enumerate(row) if x != 0), -1)

        if pivot_col == -1:
            zero_row_seen = True
            continue
        if zero_row_seen or pivot_col <= last_pivot_col:
            return False
        d = row[pivot_col]
        if d <= 0:
            return False
        for i in range(r):
            if not _in_residue_range(H[i][pivot_col], d, mode):
                return False
        last_pivot_col = pivot_col

    return True


def verify_column_hermite(H: Rows, mode: RoundingMode) -> bool:
    """Column-style shape: the transpose is in row-style Hermite form."""
    return verify_row_hermite(transpose(H), mode)


def verify_smith(S: Rows) -> bool:
    """
    Check Smith shape: diagonal, nonnegative, each nonzero diagonal entry
    divides the next, zeros trail.
    """
    for r, row in enumerate(S):
        for c, x in enumerate(row):
            if r != c and x != 0:
                return False

    diag = [S[i][i] for i in range(min(len(S), len(S[0]) if S else 0))]
    if any(d < 0 for d in diag):
        return False
    for a, b in zip(diag, diag[1:]):
        if a == 0:
            if b != 0:
                return False
        elif b % a != 0:
            return False
    return True
