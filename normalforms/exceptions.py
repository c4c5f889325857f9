"""Exception hierarchy for normalforms.

Every error raised on purpose by the library derives from
``NormalFormError``. The concrete classes also derive from the matching
builtin (``ValueError``, ``OverflowError``) so callers that only know the
builtins still catch them.
"""


class NormalFormError(Exception):
    """Base exception for all normalforms errors."""
    pass


class DimensionError(NormalFormError, ValueError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised for ragged row data, arrays that are not two-dimensional, and
    non-square input where a square matrix is structurally required.
    Always raised before any mutation of the caller's data.
    """
    pass


class EntryOverflowError(NormalFormError, OverflowError):
    """
    An integer left the range of a fixed-width representation.

    Raised by a bounded ``IntegerRing`` as soon as an intermediate or final
    value falls outside ``[min_value, max_value]``. The factorization that
    triggered it is abandoned as a whole.

    Attributes:
        value: The offending exact value.
        min_value: Smallest representable value.
        max_value: Largest representable value.
    """

    def __init__(self, value: int, min_value: int, max_value: int):
        super().__init__(
            f"Integer {value} outside representable range "
            f"[{min_value}, {max_value}]"
        )
        self.value = value
        self.min_value = min_value
        self.max_value = max_value
