from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .exceptions import EntryOverflowError


class RoundingMode(Enum):
    """Rounding of the quotient used by off-diagonal reduction.

    ``NEGATIVE_OFF_DIAGONAL`` rounds up, so reduced entries land in
    ``(-d, 0]``. ``POSITIVE_OFF_DIAGONAL`` rounds down, so they land in
    ``[0, d)``. ``ROUND_UP`` and ``ROUND_DOWN`` are aliases of the same two
    members.
    """

    NEGATIVE_OFF_DIAGONAL = "up"
    POSITIVE_OFF_DIAGONAL = "down"
    ROUND_UP = "up"
    ROUND_DOWN = "down"


@dataclass(frozen=True)
class IntegerRing:
    """The ring of integers, optionally restricted to a fixed-width range.

    All arithmetic of the factorization engine is routed through a ring.
    The default ring is unbounded and never fails; a bounded ring raises
    ``EntryOverflowError`` as soon as a result leaves
    ``[min_value, max_value]`` instead of wrapping around.
    """

    min_value: Optional[int] = None
    max_value: Optional[int] = None

    @classmethod
    def for_bits(cls, bits: int) -> "IntegerRing":
        """Signed two's-complement range with ``bits`` bits."""
        return cls(-(1 << (bits - 1)), (1 << (bits - 1)) - 1)

    @classmethod
    def for_dtype(cls, dtype) -> "IntegerRing":
        """Ring matching a numpy dtype; ``object`` dtype is unbounded."""
        dtype = np.dtype(dtype)
        if dtype.kind == "O":
            return cls()
        if dtype.kind not in "iu":
            raise TypeError(f"Expected an integer dtype, got {dtype}")
        info = np.iinfo(dtype)
        return cls(int(info.min), int(info.max))

    @property
    def bounded(self) -> bool:
        return self.min_value is not None or self.max_value is not None

    def contains(self, x: int) -> bool:
        if self.min_value is not None and x < self.min_value:
            return False
        if self.max_value is not None and x > self.max_value:
            return False
        return True

    def check(self, x: int) -> int:
        if not self.contains(x):
            raise EntryOverflowError(x, self.min_value, self.max_value)
        return x

    def is_zero(self, a: int) -> bool:
        return a == 0

    def add(self, a: int, b: int) -> int:
        return self.check(a + b)

    def sub(self, a: int, b: int) -> int:
        return self.check(a - b)

    def mul(self, a: int, b: int) -> int:
        return self.check(a * b)

    def neg(self, a: int) -> int:
        return self.check(-a)

    def exact_div(self, a: int, b: int) -> int:
        q, r = divmod(a, b)
        if r != 0:
            raise ValueError(f"Exact division {a}/{b} impossible over the integers")
        return self.check(q)

    def div_round(self, a: int, b: int, mode: RoundingMode) -> int:
        """Quotient of ``a / b`` rounded according to ``mode``."""
        if mode is RoundingMode.NEGATIVE_OFF_DIAGONAL:
            return self.check(-((-a) // b))
        return self.check(a // b)

    def gcdex_primitive(self, a: int, b: int) -> Tuple[int, int, int]:
        """
        Plain extended Euclidean algorithm.
        Returns (g, s, t) such that s*a + t*b = g, where g may be negative.
        """
        r0, r1 = a, b
        s0, s1 = 1, 0
        t0, t1 = 0, 1

        while r1 != 0:
            q = r0 // r1
            r0, r1 = r1, r0 - q * r1
            s0, s1 = s1, s0 - q * s1
            t0, t1 = t1, t0 - q * t1

        return r0, s0, t0

    def gcd_kb(self, x: int, y: int) -> Tuple[int, int, int]:
        """
        GCD with Bezout coefficients in the Kannan-Bachem form.

        Returns (g, p, q) with p*x + q*y = g and |q| <= max(|x|, |y|).
        When x == y the result is (x, 1, 0) so that eliminating an entry
        equal to the pivot keeps the pivot row/column in place; otherwise
        g = gcd(x, y) >= 0.
        """
        if x == y:
            return self.check(x), 1, 0

        g, p, q = self.gcdex_primitive(x, y)
        if g < 0:
            g, p, q = -g, -p, -q

        xd = x // g
        yd = y // g
        if xd != 0:
            # Slide (p, q) along (-yd, xd) to the q of least magnitude.
            a = abs(xd)
            r = q % a
            if 2 * r > a:
                r -= a
            shift = (r - q) // xd
            p, q = p - shift * yd, r

        return self.check(g), self.check(p), self.check(q)


ZZ = IntegerRing()


def gcd_kb(x: int, y: int) -> Tuple[int, int, int]:
    """Kannan-Bachem GCD over the unbounded integers. See ``IntegerRing.gcd_kb``."""
    return ZZ.gcd_kb(x, y)
