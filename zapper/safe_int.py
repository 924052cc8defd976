"""Checked integers for amount bookkeeping and solver intermediates.

Amounts on the ledger are uint128, but the optimal-swap quadratic multiplies
three of them together and goes negative along the way. Two wrappers cover
both needs:

- SafeInt (alias S): non-negative bookkeeping; a negative difference is an
  Underflow.
- WideInt (alias W): signed solver math; differences may go negative.

Every result is kept inside the signed 512-bit range, division by zero is an
error rather than a crash, and values only leave the wrappers as ledger
amounts through to_uint128(), which refuses anything that does not fit:

    shares = S(deposit).multiply_ratio(total_share, depth)
    return shares.to_uint128()
"""

from __future__ import annotations

UINT128_MAX = 2**128 - 1

# Int512
INT512_MIN = -(2**511)
INT512_MAX = 2**511 - 1


class SafeIntError(ArithmeticError):
    """Checked arithmetic failed."""

    pass


class DivisionByZero(SafeIntError):
    pass


class Underflow(SafeIntError):
    """A SafeInt difference went below zero."""

    pass


class Overflow(SafeIntError):
    """A result left the Int512 range."""

    pass


class Uint128Overflow(Overflow):
    """A value does not fit the ledger's uint128 amount type."""

    pass


def _raw(operand: SafeInt | int) -> int:
    return operand._value if isinstance(operand, SafeInt) else operand


class SafeInt:
    """Non-negative checked integer.

    Attributes:
        value: The wrapped int
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Wrap value.

        Raises:
            TypeError: For anything but an int or a wrapper (bools included)
            Overflow: If value is outside Int512
        """
        if isinstance(value, SafeInt):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} requires int, got {type(value).__name__}")
        if not INT512_MIN <= value <= INT512_MAX:
            raise Overflow(f"Value exceeds Int512 range: {value}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def _wrap(self, value: int) -> SafeInt:
        # results keep the receiver's type so W stays signed through a chain
        return type(self)(value)

    def _difference(self, left: int, right: int) -> SafeInt:
        if left < right:
            raise Underflow(f"Underflow: {left} - {right} = {left - right}")
        return self._wrap(left - right)

    def _quotient(self, numerator: int, denominator: int) -> SafeInt:
        if denominator == 0:
            raise DivisionByZero(f"Division by zero: {numerator} // 0")
        return self._wrap(numerator // denominator)

    # --- Operators ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return self._wrap(self._value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return self._wrap(self._value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        return self._difference(self._value, _raw(other))

    def __rsub__(self, other: int) -> SafeInt:
        return self._difference(other, self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division, rounding toward negative infinity like int."""
        return self._quotient(self._value, _raw(other))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return self._quotient(other, self._value)

    def __truediv__(self, other: object) -> SafeInt:
        raise TypeError("True division is not supported; use // for integer division")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _raw(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _raw(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _raw(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _raw(other)

    # --- Ledger operations ---

    def multiply_ratio(self, numerator: SafeInt | int, denominator: SafeInt | int) -> SafeInt:
        """self * numerator // denominator, with the product kept wide.

        Raises:
            DivisionByZero: If denominator is zero
        """
        return (self * numerator) // denominator

    def min(self, other: SafeInt | int) -> SafeInt:
        return self._wrap(min(self._value, _raw(other)))

    def to_uint128(self) -> int:
        """Unwrap as a ledger amount.

        Raises:
            Uint128Overflow: If the value is negative or above 2^128 - 1
        """
        if self._value < 0:
            raise Uint128Overflow(f"Negative value cannot be uint128: {self._value}")
        if self._value > UINT128_MAX:
            raise Uint128Overflow(f"Value exceeds uint128 max: {self._value}")
        return self._value


class WideInt(SafeInt):
    """Signed Int512 for the quadratic solver. Differences may be negative."""

    __slots__ = ()

    def _difference(self, left: int, right: int) -> WideInt:
        return WideInt(left - right)

    def __neg__(self) -> WideInt:
        return WideInt(-self._value)


S = SafeInt
W = WideInt
