"""Sign normalization and off-diagonal reduction for Hermite normal forms."""

from .matrix import IntegerMatrix
from .ring import RoundingMode

NEGATIVE_OFF_DIAGONAL = RoundingMode.NEGATIVE_OFF_DIAGONAL
POSITIVE_OFF_DIAGONAL = RoundingMode.POSITIVE_OFF_DIAGONAL


def reduce_cols_off_diagonal(
    A: IntegerMatrix,
    U: IntegerMatrix,
    row: int,
    col: int,
    mode: RoundingMode = NEGATIVE_OFF_DIAGONAL,
) -> None:
    """Normalize the pivot ``A[row][col]`` and reduce the entries left of it.

    Column ``col`` is negated if the pivot is negative. Each ``A[row][j]``
    with ``j < col`` is then replaced by its residue modulo the pivot by
    subtracting a multiple of column ``col`` from column ``j``; ``mode``
    picks the residue in ``(-d, 0]`` (negative) or ``[0, d)`` (positive).
    Changes are mirrored on the right factor ``U``.
    """
    ring = A.ring
    if A.data[row][col] < 0:
        A.negate_col(col)
        U.negate_col(col)

    d = A.data[row][col]
    if ring.is_zero(d):
        return
    for j in range(col):
        x = A.data[row][j]
        q = ring.div_round(x, d, mode)
        if q == 0:
            continue
        c = ring.neg(q)
        A.add_col_multiple(j, col, c)
        U.add_col_multiple(j, col, c)


def reduce_rows_off_diagonal(
    A: IntegerMatrix,
    U: IntegerMatrix,
    row: int,
    col: int,
    mode: RoundingMode = NEGATIVE_OFF_DIAGONAL,
) -> None:
    """Mirror of ``reduce_cols_off_diagonal`` working on rows.

    Row ``row`` is negated if the pivot is negative, then each ``A[i][col]``
    with ``i < row`` is reduced modulo the pivot. Changes are mirrored on the
    left factor ``U``.
    """
    ring = A.ring
    if A.data[row][col] < 0:
        A.negate_row(row)
        U.negate_row(row)

    d = A.data[row][col]
    if ring.is_zero(d):
        return
    for i in range(row):
        x = A.data[i][col]
        q = ring.div_round(x, d, mode)
        if q == 0:
            continue
        c = ring.neg(q)
        A.add_row_multiple(i, row, c)
        U.add_row_multiple(i, row, c)
