from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, List, Tuple

import numpy as np

from .exceptions import DimensionError
from .ring import ZZ, IntegerRing


def _as_int(x: Any) -> int:
    if isinstance(x, bool) or not isinstance(x, Integral):
        raise TypeError(f"Matrix entries must be integers, got {x!r}")
    return int(x)


@dataclass
class IntegerMatrix:
    """Dense integer matrix stored as a list of rows.

    The row lists are mutated in place by the elementary operations below,
    each of which is unimodular (det = +-1) and routes its arithmetic
    through ``ring`` so fixed-width overflow is caught where it happens.
    """

    ring: IntegerRing
    data: List[List[int]]
    width: int = field(default=0, repr=False)

    def __post_init__(self):
        if not self.data:
            return
        ncols = len(self.data[0])
        for row in self.data:
            if len(row) != ncols:
                raise DimensionError("All rows must have the same length")
        # Normalize entries in place so an owned row list stays the same object.
        for row in self.data:
            for j, x in enumerate(row):
                if type(x) is not int:
                    row[j] = _as_int(x)
                self.ring.check(row[j])

    @property
    def nrows(self) -> int:
        return len(self.data)

    @property
    def ncols(self) -> int:
        return len(self.data[0]) if self.data else self.width

    @property
    def shape(self) -> Tuple[int, int]:
        return self.nrows, self.ncols

    @classmethod
    def from_rows(cls, rows, ring: IntegerRing = ZZ) -> "IntegerMatrix":
        """Copy ``rows`` (any nested iterable of integers) into a new matrix."""
        return cls(ring, [list(row) for row in rows])

    @classmethod
    def identity(cls, n: int, ring: IntegerRing = ZZ) -> "IntegerMatrix":
        rows = [[1 if i == j else 0 for j in range(n)] for i in range(n)]
        return cls(ring, rows, width=n)

    @classmethod
    def zeros(cls, nrows: int, ncols: int, ring: IntegerRing = ZZ) -> "IntegerMatrix":
        return cls(ring, [[0] * ncols for _ in range(nrows)], width=ncols)

    @classmethod
    def diagonal(cls, diag: List[int], ring: IntegerRing = ZZ) -> "IntegerMatrix":
        n = len(diag)
        rows = [[0] * n for _ in range(n)]
        for i, v in enumerate(diag):
            rows[i][i] = v
        return cls(ring, rows, width=n)

    def copy(self) -> "IntegerMatrix":
        return IntegerMatrix(self.ring, [row[:] for row in self.data], width=self.ncols)

    def transpose(self) -> "IntegerMatrix":
        t = [list(col) for col in zip(*self.data)]
        if not t:
            t = [[] for _ in range(self.ncols)]
        return IntegerMatrix(self.ring, t, width=self.nrows)

    def diag(self) -> List[int]:
        return [self.data[i][i] for i in range(min(self.nrows, self.ncols))]

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntegerMatrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    def __matmul__(self, other: "IntegerMatrix") -> "IntegerMatrix":
        rA, cA = self.shape
        rB, cB = other.shape

        if cA != rB:
            raise DimensionError(f"Dimension mismatch: {cA} != {rB}")

        ring = self.ring
        A = self.data
        B = other.data

        # Pre-allocate result
        C = [[0] * cB for _ in range(rA)]

        for i in range(rA):
            Ai = A[i]
            Ci = C[i]
            for k in range(cA):
                aik = Ai[k]
                if aik == 0:
                    continue
                Bk = B[k]
                for j in range(cB):
                    Ci[j] += aik * Bk[j]
            for j in range(cB):
                ring.check(Ci[j])

        return IntegerMatrix(ring, C, width=cB)

    # --- elementary unimodular operations (in place) ---

    def swap_rows(self, i: int, j: int) -> None:
        if i != j:
            self.data[i], self.data[j] = self.data[j], self.data[i]

    def swap_cols(self, i: int, j: int) -> None:
        if i == j:
            return
        for row in self.data:
            row[i], row[j] = row[j], row[i]

    def negate_row(self, i: int) -> None:
        ring = self.ring
        self.data[i] = [ring.neg(x) for x in self.data[i]]

    def negate_col(self, j: int) -> None:
        ring = self.ring
        for row in self.data:
            row[j] = ring.neg(row[j])

    def add_row_multiple(self, target: int, source: int, c: int) -> None:
        """In-place: row_target <- row_target + c * row_source."""
        if c == 0:
            return
        ring = self.ring
        row_s = self.data[source]
        self.data[target] = [
            ring.add(x, ring.mul(c, y)) for x, y in zip(self.data[target], row_s)
        ]

    def add_col_multiple(self, target: int, source: int, c: int) -> None:
        """In-place: col_target <- col_target + c * col_source."""
        if c == 0:
            return
        ring = self.ring
        for row in self.data:
            row[target] = ring.add(row[target], ring.mul(c, row[source]))

    def apply_row_2x2(self, r: int, i: int, s: int, t: int, u: int, v: int) -> None:
        """In-place:  [row_r; row_i] <- [s t; u v] [row_r; row_i]."""
        ring = self.ring
        row_r = self.data[r]
        row_i = self.data[i]
        new_r = [
            ring.add(ring.mul(s, x), ring.mul(t, y))
            for x, y in zip(row_r, row_i)
        ]
        new_i = [
            ring.add(ring.mul(u, x), ring.mul(v, y))
            for x, y in zip(row_r, row_i)
        ]
        self.data[r] = new_r
        self.data[i] = new_i

    def apply_col_2x2(self, c: int, j: int, s: int, t: int, u: int, v: int) -> None:
        """In-place:  [col_c, col_j] <- [col_c, col_j] [s u; t v]."""
        ring = self.ring
        for row in self.data:
            x, y = row[c], row[j]
            row[c] = ring.add(ring.mul(s, x), ring.mul(t, y))
            row[j] = ring.add(ring.mul(u, x), ring.mul(v, y))

    def assign(self, other: "IntegerMatrix") -> None:
        """Overwrite the entries of ``self`` with those of ``other`` in place."""
        if self.shape != other.shape:
            raise DimensionError(f"Cannot assign {other.shape} into {self.shape}")
        for row, src in zip(self.data, other.data):
            row[:] = src

    def to_numpy(self, dtype=object) -> np.ndarray:
        arr = np.empty(self.shape, dtype=dtype)
        for i, row in enumerate(self.data):
            for j, x in enumerate(row):
                arr[i, j] = x
        return arr

    def to_sympy(self):
        import sympy as sp
        return sp.Matrix(self.nrows, self.ncols, lambda i, j: self.data[i][j])


# --- storage coercion -------------------------------------------------------
#
# The public entry points accept nested lists, numpy integer arrays and
# IntegerMatrix objects. ``coerce`` produces the working IntegerMatrix and
# ``export`` converts a working matrix back to the caller's storage kind.


def coerce(matrix, inplace: bool = False) -> IntegerMatrix:
    """Build the working matrix for ``matrix``.

    With ``inplace`` the caller's row lists (or IntegerMatrix) are used
    directly whenever no overflow is possible; bounded storage always gets a
    scratch copy that ``commit`` writes back after a successful call.
    """
    if isinstance(matrix, IntegerMatrix):
        if inplace and not matrix.ring.bounded:
            return matrix
        return matrix.copy()

    if isinstance(matrix, np.ndarray):
        if matrix.ndim != 2:
            raise DimensionError(f"Expected a 2-D array, got {matrix.ndim}-D")
        ring = IntegerRing.for_dtype(matrix.dtype)
        rows = [[_as_int(x) for x in row] for row in matrix.tolist()]
        return IntegerMatrix(ring, rows, width=matrix.shape[1])

    rows = matrix if inplace else [list(row) for row in matrix]
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise TypeError("Expected a list of row lists, a numpy array or an IntegerMatrix")
    if inplace and len({id(row) for row in rows}) != len(rows):
        # Column operations visit every row once; shared rows must be split.
        rows[:] = [list(row) for row in rows]
    return IntegerMatrix(ZZ, rows)


def commit(matrix, work: IntegerMatrix):
    """Write ``work`` back into the caller's storage and return that storage."""
    if isinstance(matrix, IntegerMatrix):
        if matrix is not work:
            matrix.assign(work)
        return matrix
    if isinstance(matrix, np.ndarray):
        matrix[...] = export(matrix, work)
        return matrix
    # Nested lists were mutated directly.
    return work.data


def export(like, work: IntegerMatrix):
    """Convert the call-owned ``work`` to the same storage kind as ``like``."""
    if isinstance(like, IntegerMatrix):
        return work
    if isinstance(like, np.ndarray):
        return work.to_numpy(dtype=like.dtype)
    return work.data


def transpose_like(m):
    """Transpose a matrix in any supported storage kind."""
    if isinstance(m, IntegerMatrix):
        return m.transpose()
    if isinstance(m, np.ndarray):
        return m.T.copy()
    return [list(col) for col in zip(*m)]
