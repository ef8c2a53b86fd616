"""
Unit tests for AmountResult (Ok / Err).

Verifies:
- Left-most error wins and is returned untouched
- Unary and scalar operations pass errors through
- Equality across Amount, AmountResult and CurrencyError
- Inspection helpers and totals
"""

import pytest
from decimal import Decimal

from money_kernel.domain.currency import Currency
from money_kernel.domain.errors import DivisionByZero, Mismatch
from money_kernel.domain.values import Amount, AmountResult, Err, Ok, total
from money_kernel.exceptions import ResultUnwrapError

EUR = Currency("EUR")
USD = Currency("USD")
GBP = Currency("GBP")


def eur(value) -> Amount:
    return Amount(Decimal(str(value)), EUR)


def usd(value) -> Amount:
    return Amount(Decimal(str(value)), USD)


def W(value) -> AmountResult:
    return AmountResult.of(value)


class TestConstruction:

    def test_of_wraps_each_kind(self):
        assert W(eur(1)) == Ok(eur(1))
        assert W(DivisionByZero()) == Err(DivisionByZero())
        ok = Ok(eur(1))
        assert W(ok) is ok

    def test_of_rejects_other_types(self):
        with pytest.raises(TypeError):
            AmountResult.of(Decimal(1))

    def test_variants_validate_payload(self):
        with pytest.raises(TypeError):
            Ok(DivisionByZero())
        with pytest.raises(TypeError):
            Err(eur(1))

    def test_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError, match="abstract"):
            AmountResult()

    def test_cannot_add_variants(self):
        with pytest.raises(TypeError, match="closed"):
            class Pending(AmountResult):
                pass

    def test_every_result_is_ok_or_err(self):
        for result in (W(eur(1)), W(DivisionByZero()), eur(1) + usd(1)):
            assert result.is_ok() != result.is_err()

    def test_pattern_matching(self):
        match eur(3) + usd(1):
            case Ok(amount):
                pytest.fail(f"unexpected {amount}")
            case Err(Mismatch(left, right)):
                assert (left, right) == (EUR, USD)


class TestAdd:

    def test_result_add_amount(self):
        assert W(eur(1)) + eur(3) == eur(4)
        assert W(DivisionByZero()) + eur(1) == W(DivisionByZero())
        assert W(Mismatch(EUR, USD)) + eur(1) == W(Mismatch(EUR, USD))

    def test_result_add_result(self):
        assert W(eur(3)) + W(eur(1)) == eur(4)
        assert W(eur(3)) + W(DivisionByZero()) == W(DivisionByZero())
        assert W(eur(3)) + W(Mismatch(EUR, USD)) == W(Mismatch(EUR, USD))

    def test_ok_plus_other_currency_mismatches(self):
        assert W(eur(3)) + usd(1) == Mismatch(EUR, USD)

    def test_left_error_wins_over_right_error(self):
        assert W(Mismatch(USD, EUR)) + W(Mismatch(EUR, USD)) == W(Mismatch(USD, EUR))
        assert W(Mismatch(EUR, USD)) + W(Mismatch(USD, EUR)) == W(Mismatch(EUR, USD))
        assert W(DivisionByZero()) + W(Mismatch(EUR, USD)) == DivisionByZero()

    def test_error_returned_is_the_same_object(self):
        err = Err(Mismatch(EUR, USD))
        assert (err + usd(200)) is err
        assert (err + Amount(1, GBP)) is err
        assert (err - W(eur(1))) is err

    def test_accumulate_with_augmented_assignment(self):
        accum = W(eur(2))
        accum += eur(12)
        assert accum == eur(14)
        accum += usd(1)
        assert accum == W(Mismatch(EUR, USD))
        accum += eur(5)
        assert accum == W(Mismatch(EUR, USD))

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            W(eur(1)) + 1
        with pytest.raises(TypeError):
            W(DivisionByZero()) + "x"


class TestSubtract:

    def test_chains(self):
        assert eur(2) - eur(3) == eur(-1)
        assert (eur(1) - eur(2)) - eur(3) == eur(-4)
        assert eur(1) - (eur(2) - eur(3)) == eur(2)

    def test_errors(self):
        assert W(Mismatch(USD, EUR)) - W(Mismatch(EUR, USD)) == W(Mismatch(USD, EUR))
        assert W(eur(1)) - W(DivisionByZero()) == DivisionByZero()

    def test_subtract_assign(self):
        accum = W(eur(2))
        accum -= eur(8)
        assert accum == eur(-6)
        accum -= usd(1)
        assert accum == W(Mismatch(EUR, USD))


class TestUnaryAndScalar:

    def test_negate(self):
        assert -W(eur(2)) == eur(-2)
        err = W(DivisionByZero())
        assert -err is err

    def test_abs(self):
        assert abs(W(eur(-2))) == eur(2)
        assert abs(W(Mismatch(EUR, USD))) == Mismatch(EUR, USD)

    def test_scale(self):
        assert W(eur(2)) * Decimal(3) == eur(6)
        assert Decimal(3) * W(eur(2)) == eur(6)
        assert W(Mismatch(EUR, USD)) * Decimal(3) == W(Mismatch(EUR, USD))

    def test_divide(self):
        assert W(eur(10)) / Decimal(5) == eur(2)
        assert W(eur(10)) / Decimal(0) == W(DivisionByZero())
        assert W(Mismatch(USD, EUR)) / Decimal(3) == W(Mismatch(USD, EUR))
        assert W(DivisionByZero()) / Decimal(3) == W(DivisionByZero())

    def test_error_wins_over_zero_divisor(self):
        assert W(Mismatch(EUR, USD)) / 0 == Mismatch(EUR, USD)

    def test_converted_to(self):
        assert W(usd(10)).converted_to(EUR, Decimal("0.5")) == eur(5)
        assert W(DivisionByZero()).converted_to(EUR, 2) == DivisionByZero()

    def test_map(self):
        assert W(eur(2)).map(lambda a: a * 5) == eur(10)
        err = W(DivisionByZero())
        assert err.map(lambda a: a * 5) is err


class TestEquality:

    def test_ok_against_amount(self):
        assert W(eur(10)) == eur(10)
        assert W(eur(10)) != eur(12)
        assert W(eur(10)) != usd(10)

    def test_err_against_error(self):
        assert W(DivisionByZero()) == DivisionByZero()
        assert W(DivisionByZero()) != Mismatch(EUR, USD)
        assert W(Mismatch(EUR, USD)) == Mismatch(EUR, USD)
        assert W(Mismatch(EUR, USD)) != Mismatch(USD, EUR)

    def test_error_against_result(self):
        assert DivisionByZero() == W(DivisionByZero())
        assert Mismatch(EUR, USD) == W(Mismatch(EUR, USD))
        assert Mismatch(USD, EUR) != W(Mismatch(EUR, USD))
        assert DivisionByZero() != W(eur(10))

    def test_cross_kind_is_false(self):
        assert W(eur(10)) != DivisionByZero()
        assert W(eur(10)) != W(DivisionByZero())
        assert W(DivisionByZero()) != eur(10)

    def test_hash_matches_payload(self):
        assert hash(W(eur(1))) == hash(eur(1))
        assert hash(W(DivisionByZero())) == hash(DivisionByZero())
        assert len({W(eur(1)), W(eur("1.0")), W(DivisionByZero())}) == 2

    def test_ordering_results_unsupported(self):
        with pytest.raises(TypeError):
            W(eur(1)) < W(eur(2))


class TestInspection:

    def test_predicates(self):
        assert W(eur(19)).is_ok()
        assert not W(eur(19)).is_err()
        assert W(Mismatch(EUR, USD)).is_err()
        assert W(Mismatch(EUR, USD)).is_mismatch()
        assert not W(Mismatch(EUR, USD)).is_division_by_zero()
        assert W(DivisionByZero()).is_division_by_zero()
        assert not W(eur(1)).is_mismatch()

    def test_unwrap(self):
        assert W(eur(10)).unwrap() == eur(10)
        with pytest.raises(ResultUnwrapError) as exc_info:
            W(DivisionByZero()).unwrap()
        assert exc_info.value.code == "RESULT_UNWRAP"
        assert exc_info.value.result == W(DivisionByZero())

    def test_unwrap_err(self):
        assert W(DivisionByZero()).unwrap_err() == DivisionByZero()
        with pytest.raises(ResultUnwrapError):
            W(eur(10)).unwrap_err()

    def test_unwrap_or_ok_err(self):
        assert W(DivisionByZero()).unwrap_or(eur(0)) == eur(0)
        assert W(eur(3)).unwrap_or(eur(0)) == eur(3)
        assert W(eur(3)).ok() == eur(3)
        assert W(eur(3)).err() is None
        assert W(DivisionByZero()).ok() is None
        assert W(DivisionByZero()).err() == DivisionByZero()

    def test_display(self):
        assert str(W(eur(2))) == "€ 2.00"
        assert f"{W(usd('5.4'))}" == "$ 5.40"
        assert f"{(usd(2) / Decimal(3)) + usd(1):.3}" == "$ 1.666"
        assert str(W(Mismatch(USD, EUR))) == "mismatch currency 'USD' and 'EUR'"
        assert f"{W(DivisionByZero()):.3}" == "divide by zero"


class TestTotal:

    def test_sums_amounts(self):
        assert total([eur(1), eur(2)]) == eur(3)
        assert total(iter([eur(1), eur(2), eur(3)])) == eur(6)

    def test_sums_results(self):
        assert total([W(eur(1)), eur(2)]) == eur(3)

    def test_first_error_wins(self):
        assert total([eur(2), usd(3), usd(4)]) == W(Mismatch(EUR, USD))
        assert total([eur(1), W(Mismatch(USD, EUR)), eur(2)]) == W(Mismatch(USD, EUR))
        assert total([W(DivisionByZero())]) == DivisionByZero()

    def test_empty_requires_currency(self):
        with pytest.raises(ValueError, match="empty"):
            total([])
        assert total([], currency="EUR") == eur(0)

    def test_currency_fixes_the_target(self):
        assert total([eur(1), eur(2)], currency=EUR) == eur(3)
        assert total([usd(1)], currency=EUR) == W(Mismatch(EUR, USD))
