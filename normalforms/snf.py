import logging

from .diagonal import enforce_divisibility
from .elimination import find_pivot, zero_row_and_col
from .factorization import Smith
from .matrix import IntegerMatrix, coerce, commit, export

logger = logging.getLogger(__name__)


def snf_diagonalize(A: IntegerMatrix, U: IntegerMatrix, V: IntegerMatrix) -> None:
    """
    Smith normal form of A in place, tracking U (rows) and V (columns).

    - For k < min(m, n): move a pivot to (k, k) and clear row k and
      column k around it.
    - Stop early once the remaining submatrix is zero.
    - Enforce the divisibility chain on the resulting diagonal.

    Rectangular input needs no padding.
    """
    m, n = A.shape

    for k in range(min(m, n)):
        pivot = find_pivot(A, k)
        if pivot is None:
            logger.debug("remaining submatrix from index %d is zero", k)
            break
        i, j = pivot
        if (i, j) != (k, k):
            logger.debug("pivot for step %d found at (%d, %d)", k, i, j)
        A.swap_rows(k, i)
        U.swap_rows(k, i)
        A.swap_cols(k, j)
        V.swap_cols(k, j)

        rounds = zero_row_and_col(A, U, V, k)
        logger.debug("step %d cleared in %d rounds, pivot %d", k, rounds, A.data[k][k])

    merges = enforce_divisibility(A, U, V)
    logger.debug("divisibility chain enforced with %d merges", merges)


def smith_normal_form_inplace(matrix) -> Smith:
    """
    Smith normal form, overwriting ``matrix`` with S.

    Returns Smith(S, U, V) with U @ A @ V == S, where S is ``matrix``.
    """
    A = coerce(matrix, inplace=True)
    U = IntegerMatrix.identity(A.nrows, A.ring)
    V = IntegerMatrix.identity(A.ncols, A.ring)
    snf_diagonalize(A, U, V)
    return Smith(commit(matrix, A), export(matrix, U), export(matrix, V))


def smith_normal_form(matrix) -> Smith:
    """
    Smith normal form of a copy of ``matrix``.

    Accepts nested lists, numpy integer arrays and IntegerMatrix, square or
    rectangular. Returns Smith(S, U, V) with S = U @ A @ V diagonal,
    nonnegative, and each nonzero diagonal entry dividing the next.
    """
    A = coerce(matrix)
    U = IntegerMatrix.identity(A.nrows, A.ring)
    V = IntegerMatrix.identity(A.ncols, A.ring)
    snf_diagonalize(A, U, V)
    return Smith(export(matrix, A), export(matrix, U), export(matrix, V))
