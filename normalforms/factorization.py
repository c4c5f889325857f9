"""Result bundles returned by the factorization entry points.

Each bundle holds matrices in the caller's storage kind (nested lists, numpy
arrays or ``IntegerMatrix``) and unpacks like a tuple::

    H, U = row_hermite(A)
    S, U, V = smith_normal_form(A)
"""

from dataclasses import dataclass
from typing import Any

from .matrix import transpose_like


@dataclass(frozen=True)
class RowHermite:
    """Row-style Hermite normal form: ``U @ A == H``, ``H`` upper triangular."""

    H: Any
    U: Any

    def __iter__(self):
        return iter((self.H, self.U))

    def transpose(self) -> "ColumnHermite":
        """Column-style factorization of ``A.T``: ``A.T @ U.T == H.T``."""
        return ColumnHermite(transpose_like(self.H), transpose_like(self.U))


@dataclass(frozen=True)
class ColumnHermite:
    """Column-style Hermite normal form: ``A @ U == H``, ``H`` lower triangular."""

    H: Any
    U: Any

    def __iter__(self):
        return iter((self.H, self.U))

    def transpose(self) -> RowHermite:
        """Row-style factorization of ``A.T``: ``U.T @ A.T == H.T``."""
        return RowHermite(transpose_like(self.H), transpose_like(self.U))


@dataclass(frozen=True)
class Smith:
    """Smith normal form: ``U @ A @ V == S`` with ``S`` diagonal."""

    S: Any
    U: Any
    V: Any

    def __iter__(self):
        return iter((self.S, self.U, self.V))

    def transpose(self) -> "Smith":
        """A Smith factorization of ``A.T``: ``V.T @ A.T @ U.T == S.T``.

        This is a valid factorization of ``A.T`` but need not equal what
        ``smith_normal_form(A.T)`` returns; only ``S`` is shared.
        """
        return Smith(
            transpose_like(self.S),
            transpose_like(self.V),
            transpose_like(self.U),
        )
