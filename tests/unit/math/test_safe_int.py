"""Tests for SafeInt and WideInt checked arithmetic."""

import pytest

from zapper.safe_int import (
    INT512_MAX,
    INT512_MIN,
    UINT128_MAX,
    DivisionByZero,
    Overflow,
    S,
    SafeInt,
    SafeIntError,
    Uint128Overflow,
    Underflow,
    W,
    WideInt,
)


class TestWrapping:
    def test_accepts_ints_and_wrappers(self):
        assert S(42).value == 42
        assert S(W(42)).value == 42
        assert SafeInt is S and WideInt is W

    @pytest.mark.parametrize("bad", ["42", 4.2, True, None])
    def test_rejects_non_ints(self, bad):
        with pytest.raises(TypeError):
            S(bad)

    def test_int512_is_the_working_range(self):
        assert W(INT512_MIN).value == INT512_MIN
        assert S(INT512_MAX).value == INT512_MAX
        with pytest.raises(Overflow):
            S(INT512_MAX + 1)
        with pytest.raises(Overflow):
            W(INT512_MIN - 1)

    def test_error_hierarchy(self):
        assert issubclass(SafeIntError, ArithmeticError)
        assert issubclass(Uint128Overflow, Overflow)
        for error in (DivisionByZero, Underflow, Overflow):
            assert issubclass(error, SafeIntError)


class TestSafeIntOperators:
    def test_mixed_operands(self):
        """Plain ints work on either side."""
        assert S(7) + 3 == 10
        assert 3 + S(7) == 10
        assert 3 * S(7) == 21
        assert 20 - S(7) == 13
        assert 20 // S(7) == 2

    def test_difference_below_zero_is_underflow(self):
        with pytest.raises(Underflow, match="3 - 8"):
            S(3) - 8
        with pytest.raises(Underflow):
            3 - S(8)

    def test_product_leaving_int512(self):
        with pytest.raises(Overflow):
            S(2**256) * S(2**256)

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero, match="Division by zero"):
            S(9) // 0
        with pytest.raises(DivisionByZero):
            9 // S(0)

    def test_true_division_refused(self):
        with pytest.raises(TypeError, match="use //"):
            S(9) / 3

    def test_ordering_and_equality(self):
        assert S(2) < 3 <= S(3)
        assert S(4) > W(-1)
        assert S(5) == W(5)
        assert S(5) != "5"
        assert len({S(5), S(5)}) == 1

    def test_truthiness(self):
        assert not S(0)
        assert S(1)


class TestLedgerOperations:
    def test_multiply_ratio_keeps_wide_product(self):
        assert S(UINT128_MAX).multiply_ratio(UINT128_MAX, UINT128_MAX) == UINT128_MAX

    def test_multiply_ratio_by_zero_depth(self):
        with pytest.raises(DivisionByZero):
            S(10).multiply_ratio(5, 0)

    def test_min(self):
        assert S(9).min(4) == 4
        assert S(4).min(S(9)) == 4

    def test_to_uint128_bounds(self):
        assert S(UINT128_MAX).to_uint128() == UINT128_MAX
        with pytest.raises(Uint128Overflow, match="exceeds uint128"):
            S(UINT128_MAX + 1).to_uint128()
        with pytest.raises(Uint128Overflow, match="Negative"):
            W(-1).to_uint128()


class TestWideInt:
    def test_differences_may_be_negative(self):
        assert W(2) - 5 == -3
        assert 2 - W(5) == -3
        assert -W(4) == -4

    def test_type_is_preserved(self):
        for result in (W(2) + 1, W(2) * S(3), W(9) // 2, W(1) - 4):
            assert isinstance(result, WideInt)

    def test_floor_division_of_negatives(self):
        assert W(-9) // 2 == -5

    def test_still_range_checked(self):
        with pytest.raises(Overflow):
            W(-(2**300)) * 2**300
