"""Row- and column-style Hermite normal forms.

Both algorithms produce the echelon form with positive pivots and reduced
entries beside each pivot; for a square nonsingular matrix this is the
triangular HNF with a positive diagonal. The row-style driver is the exact
transpose of the column-style one, so::

    row_hermite(A).H == column_hermite(A.T).H.T
"""

import logging

from .diagonal import MatrixShape, classify
from .elimination import find_col_pivot, find_row_pivot, zero_col, zero_row
from .factorization import ColumnHermite, RowHermite
from .matrix import IntegerMatrix, coerce, commit, export
from .reduction import reduce_cols_off_diagonal, reduce_rows_off_diagonal
from .ring import RoundingMode

logger = logging.getLogger(__name__)


def _has_diagonal_fast_path(A: IntegerMatrix) -> bool:
    """A square diagonal matrix without zeros is already HNF up to signs."""
    if classify(A) is not MatrixShape.DIAGONAL:
        return False
    return all(d != 0 for d in A.diag())


def hnf_columns(A: IntegerMatrix, U: IntegerMatrix, mode: RoundingMode) -> None:
    """Column-style HNF of ``A`` in place, with column operations tracked in ``U``.

    Sweeps the rows; the pivot column ``c`` advances each time a row has a
    nonzero entry in columns ``>= c``. Rows without one keep their entries
    left of ``c`` and are skipped.
    """
    m, n = A.shape

    if _has_diagonal_fast_path(A):
        logger.debug("diagonal input, normalizing signs only")
        for k in range(n):
            if A.data[k][k] < 0:
                A.negate_col(k)
                U.negate_col(k)
        return

    c = 0
    for r in range(m):
        if c == n:
            break
        j = find_row_pivot(A, r, c)
        if j is None:
            logger.debug("row %d has no pivot at or after column %d", r, c)
            continue
        if j != c:
            logger.debug("swapping columns %d and %d", c, j)
            A.swap_cols(c, j)
            U.swap_cols(c, j)
        zero_row(A, U, r, c)
        reduce_cols_off_diagonal(A, U, r, c, mode)
        c += 1


def hnf_rows(A: IntegerMatrix, U: IntegerMatrix, mode: RoundingMode) -> None:
    """Row-style HNF of ``A`` in place, with row operations tracked in ``U``.

    Mirror of ``hnf_columns``: sweeps the columns and advances the pivot row
    ``r`` each time a column has a nonzero entry in rows ``>= r``.
    """
    m, n = A.shape

    if _has_diagonal_fast_path(A):
        logger.debug("diagonal input, normalizing signs only")
        for k in range(m):
            if A.data[k][k] < 0:
                A.negate_row(k)
                U.negate_row(k)
        return

    r = 0
    for c in range(n):
        if r == m:
            break
        i = find_col_pivot(A, r, c)
        if i is None:
            logger.debug("column %d has no pivot at or below row %d", c, r)
            continue
        if i != r:
            logger.debug("swapping rows %d and %d", r, i)
            A.swap_rows(r, i)
            U.swap_rows(r, i)
        zero_col(A, U, c, r)
        reduce_rows_off_diagonal(A, U, r, c, mode)
        r += 1


def column_hermite_inplace(
    matrix,
    rounding_mode: RoundingMode = RoundingMode.NEGATIVE_OFF_DIAGONAL,
) -> ColumnHermite:
    """Column-style Hermite normal form, overwriting ``matrix`` with ``H``.

    Args:
        matrix: Integer matrix as nested lists, a numpy integer array or an
            ``IntegerMatrix``. Its storage becomes ``H``.
        rounding_mode: Sign convention of the reduced off-diagonal entries.

    Returns:
        ``ColumnHermite(H, U)`` with ``A @ U == H``; ``H`` is ``matrix``.
    """
    mode = RoundingMode(rounding_mode)
    A = coerce(matrix, inplace=True)
    U = IntegerMatrix.identity(A.ncols, A.ring)
    hnf_columns(A, U, mode)
    return ColumnHermite(commit(matrix, A), export(matrix, U))


def column_hermite(
    matrix,
    rounding_mode: RoundingMode = RoundingMode.NEGATIVE_OFF_DIAGONAL,
) -> ColumnHermite:
    """Column-style Hermite normal form of a copy of ``matrix``.

    Returns:
        ``ColumnHermite(H, U)`` with ``A @ U == H``, ``H`` lower triangular.
    """
    mode = RoundingMode(rounding_mode)
    A = coerce(matrix)
    U = IntegerMatrix.identity(A.ncols, A.ring)
    hnf_columns(A, U, mode)
    return ColumnHermite(export(matrix, A), export(matrix, U))


def row_hermite_inplace(
    matrix,
    rounding_mode: RoundingMode = RoundingMode.NEGATIVE_OFF_DIAGONAL,
) -> RowHermite:
    """Row-style Hermite normal form, overwriting ``matrix`` with ``H``.

    Returns:
        ``RowHermite(H, U)`` with ``U @ A == H``; ``H`` is ``matrix``.
    """
    mode = RoundingMode(rounding_mode)
    A = coerce(matrix, inplace=True)
    U = IntegerMatrix.identity(A.nrows, A.ring)
    hnf_rows(A, U, mode)
    return RowHermite(commit(matrix, A), export(matrix, U))


def row_hermite(
    matrix,
    rounding_mode: RoundingMode = RoundingMode.NEGATIVE_OFF_DIAGONAL,
) -> RowHermite:
    """Row-style Hermite normal form of a copy of ``matrix``.

    Args:
        matrix: Integer matrix as nested lists, a numpy integer array or an
            ``IntegerMatrix``; left untouched.
        rounding_mode: ``NEGATIVE_OFF_DIAGONAL`` (default) keeps entries
            above each pivot in ``(-d, 0]``, ``POSITIVE_OFF_DIAGONAL`` in
            ``[0, d)``.

    Returns:
        ``RowHermite(H, U)`` with ``U @ A == H``, ``H`` upper triangular.

    Raises:
        DimensionError: If the rows of ``matrix`` differ in length.
        EntryOverflowError: If fixed-width storage cannot hold a value.
    """
    mode = RoundingMode(rounding_mode)
    A = coerce(matrix)
    U = IntegerMatrix.identity(A.nrows, A.ring)
    hnf_rows(A, U, mode)
    return RowHermite(export(matrix, A), export(matrix, U))
