import logging

from .determinant import det_bareiss, det_bareiss_inplace, is_unimodular
from .exceptions import DimensionError, EntryOverflowError, NormalFormError
from .factorization import ColumnHermite, RowHermite, Smith
from .hermite import (
    column_hermite,
    column_hermite_inplace,
    row_hermite,
    row_hermite_inplace,
)
from .matrix import IntegerMatrix
from .reduction import NEGATIVE_OFF_DIAGONAL, POSITIVE_OFF_DIAGONAL
from .ring import ZZ, IntegerRing, RoundingMode, gcd_kb
from .snf import smith_normal_form, smith_normal_form_inplace

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ColumnHermite",
    "DimensionError",
    "EntryOverflowError",
    "IntegerMatrix",
    "IntegerRing",
    "NEGATIVE_OFF_DIAGONAL",
    "NormalFormError",
    "POSITIVE_OFF_DIAGONAL",
    "RoundingMode",
    "RowHermite",
    "Smith",
    "ZZ",
    "column_hermite",
    "column_hermite_inplace",
    "det_bareiss",
    "det_bareiss_inplace",
    "gcd_kb",
    "is_unimodular",
    "row_hermite",
    "row_hermite_inplace",
    "smith_normal_form",
    "smith_normal_form_inplace",
]
