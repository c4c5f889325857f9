"""Exact integer determinants by fraction-free (Bareiss) elimination.

Bareiss elimination keeps every intermediate value integral: after step
``k`` each entry of the trailing block is a ``(k+1) x (k+1)`` minor of the
input, and the division by the previous pivot is exact. The determinant is
used as an oracle (``is_unimodular``), never inside the factorization loop.
"""

from .exceptions import DimensionError
from .matrix import IntegerMatrix, coerce
from .ring import ZZ


def det_bareiss_inplace(M: IntegerMatrix) -> int:
    """Determinant of ``M`` computed in place; ``M`` is destroyed.

    Args:
        M: Square integer matrix. Its ring decides whether intermediate
            products are range-checked.

    Returns:
        The exact determinant.

    Raises:
        DimensionError: If ``M`` is not square.
        EntryOverflowError: If ``M`` uses a bounded ring and an
            intermediate value leaves its range.
    """
    n, m = M.shape
    if n != m:
        raise DimensionError(f"Determinant requires a square matrix, got {M.shape}")
    if n == 0:
        return 1

    ring = M.ring
    A = M.data
    sign = 1
    prev = 1

    for k in range(n - 1):
        if A[k][k] == 0:
            for i in range(k + 1, n):
                if A[i][k] != 0:
                    M.swap_rows(k, i)
                    sign = -sign
                    break
            else:
                return 0

        akk = A[k][k]
        for i in range(k + 1, n):
            Ai = A[i]
            aik = Ai[k]
            Ak = A[k]
            for j in range(k + 1, n):
                cross = ring.sub(ring.mul(Ai[j], akk), ring.mul(aik, Ak[j]))
                Ai[j] = ring.exact_div(cross, prev)
        prev = akk

    return ring.mul(sign, A[n - 1][n - 1])


def det_bareiss(matrix) -> int:
    """Determinant of ``matrix`` without modifying it.

    Accepts nested lists, numpy integer arrays and ``IntegerMatrix``.
    """
    return det_bareiss_inplace(coerce(matrix))


def is_unimodular(matrix) -> bool:
    """True iff ``matrix`` is an integer matrix with determinant exactly 1 or -1.

    Anything else, including non-square, non-2-D or non-integer input, is
    reported as not unimodular rather than raising.
    """
    try:
        M = coerce(matrix)
    except (DimensionError, TypeError):
        return False
    if M.nrows != M.ncols:
        return False
    # Exact answer regardless of the storage width.
    M = IntegerMatrix(ZZ, M.data, width=M.ncols)
    return abs(det_bareiss_inplace(M)) == 1
