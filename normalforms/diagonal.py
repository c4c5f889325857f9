"""Helpers for diagonal matrices: shape dispatch and the Smith divisibility chain."""

import logging
from enum import Enum

from .matrix import IntegerMatrix

logger = logging.getLogger(__name__)


class MatrixShape(Enum):
    GENERAL = "general"
    DIAGONAL = "diagonal"


def classify(A: IntegerMatrix) -> MatrixShape:
    """Return ``DIAGONAL`` for a square matrix with no off-diagonal entries."""
    n, m = A.shape
    if n != m:
        return MatrixShape.GENERAL
    for i, row in enumerate(A.data):
        for j, x in enumerate(row):
            if i != j and x != 0:
                return MatrixShape.GENERAL
    return MatrixShape.DIAGONAL


def merge_diagonal_pair(
    A: IntegerMatrix,
    U: IntegerMatrix,
    V: IntegerMatrix,
    i: int,
    j: int,
) -> None:
    """Replace diagonal entries ``(a, b)`` at ``i`` and ``j`` by ``(g, l)``.

    ``g = gcd(a, b)`` and ``l = a*b/g`` (an lcm up to sign). With
    ``p*a + q*b = g`` the transforms are::

        U2 = [[p, q], [-b/g, a/g]]      V2 = [[1, t], [1, 1 + t]],  t = -q*b/g

    and ``U2 @ diag(a, b) @ V2 == diag(g, l)``; both have determinant 1.
    Rows ``i, j`` of ``A`` and ``U`` and columns ``i, j`` of ``A`` and ``V``
    are updated, and ``A`` stays diagonal.

    Args:
        A: Diagonal matrix, updated in place.
        U: Left factor, updated in place.
        V: Right factor, updated in place.
        i: Index of the entry that receives the gcd.
        j: Index of the entry that receives the lcm.
    """
    ring = A.ring
    a = A.data[i][i]
    b = A.data[j][j]
    g, p, q = ring.gcd_kb(a, b)

    if ring.is_zero(g):
        return

    ad = ring.exact_div(a, g)
    bd = ring.exact_div(b, g)
    t = ring.neg(ring.mul(q, bd))
    t1 = ring.add(1, t)

    A.apply_row_2x2(i, j, p, q, ring.neg(bd), ad)
    U.apply_row_2x2(i, j, p, q, ring.neg(bd), ad)
    A.apply_col_2x2(i, j, 1, 1, t, t1)
    V.apply_col_2x2(i, j, 1, 1, t, t1)


def enforce_divisibility(A: IntegerMatrix, U: IntegerMatrix, V: IntegerMatrix) -> int:
    """Turn a diagonal matrix into Smith form.

    Walks the diagonal; for each ``i`` every later entry ``d_j`` that is not a
    multiple of ``d_i`` is merged into ``(gcd, lcm)``. After index ``i`` is
    processed ``d_i`` is the gcd of ``d_i .. d_r`` and divides all of them,
    and later merges only touch entries that it already divides. Zero entries
    move to the end because ``gcd(0, x) = |x|`` and ``lcm(0, x) = 0``.
    Finally negative entries are negated, which is folded into ``U``.

    Returns:
        The number of merges performed.
    """
    ring = A.ring
    r = min(A.nrows, A.ncols)
    merges = 0

    for i in range(r):
        for j in range(i + 1, r):
            a = A.data[i][i]
            b = A.data[j][j]
            if ring.is_zero(b) and ring.is_zero(a):
                continue
            if not ring.is_zero(a) and b % a == 0:
                continue
            logger.debug("merging diagonal entries %d (%d) and %d (%d)", i, a, j, b)
            merge_diagonal_pair(A, U, V, i, j)
            merges += 1

    for i in range(r):
        if A.data[i][i] < 0:
            A.negate_row(i)
            U.negate_row(i)

    return merges
