"""
Values -- the currency-tagged amount algebra.

Responsibility:
    Provides Amount (a Decimal quantity bound to a Currency), AmountResult
    (``Ok(Amount)`` or ``Err(CurrencyError)``) and ExchangeRate, together
    with the operator matrix defined across them.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O apart from debug
    logging. Depends only on domain.currency and domain.errors.

Propagation rule:
    Any operation that could mix currencies returns an AmountResult. If an
    operand is already ``Err``, the leftmost ``Err`` is returned unchanged and
    no currency or zero check is evaluated. Once a chain has failed, it stays
    failed:

        (eur(10) + usd(5)) + eur(1)     -> Err(Mismatch(EUR, USD))
        (eur(10) + usd(5)) + gbp(1)     -> Err(Mismatch(EUR, USD))

Failure modes:
    - Mismatch / DivisionByZero are returned inside Err, never raised.
    - CurrencyMismatchError is raised by <, <=, >, >= across currencies.
    - ValueError / TypeError on construction with bad quantity or currency.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import ROUND_DOWN, Context, Decimal, InvalidOperation

from money_kernel.domain.currency import Currency
from money_kernel.domain.errors import CurrencyError, DivisionByZero, Mismatch
from money_kernel.exceptions import (
    CurrencyMismatchError,
    InvalidExchangeRateError,
    ResultUnwrapError,
)
from money_kernel.logging_config import get_logger

logger = get_logger("domain.values")

DISPLAY_PLACES = 2

Scalar = Decimal | int | str


def _as_decimal(value: object) -> Decimal | None:
    """Coerce a scalar operand; None means the operand is not a scalar.

    Raises:
        ValueError: If ``value`` is a string that is not a finite number.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        try:
            result = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Invalid scalar: {value!r}") from e
        if not result.is_finite():
            raise ValueError(f"Scalar must be finite: {value!r}")
        return result
    return None


def _truncate(quantity: Decimal, places: int) -> Decimal:
    """Cut ``quantity`` to ``places`` decimals toward zero, independent of the active context."""
    context = Context(prec=max(quantity.adjusted(), 0) + places + 1, rounding=ROUND_DOWN)
    truncated = quantity.quantize(Decimal(1).scaleb(-places), context=context)
    return truncated.copy_abs() if truncated.is_zero() else truncated


@dataclass(frozen=True, slots=True, eq=False)
class Amount:
    """
    A quantity of money in one currency.

    Contract:
        Pairs a Decimal quantity with its Currency. Any sign and magnitude is
        valid. Immutable; every operation returns a new value.

    Guarantees:
        - quantity is always a finite Decimal (never float)
        - currency is always a registry-validated Currency
        - ``==`` is total: amounts in different currencies are never equal
        - add/subtract/divide return AmountResult; negate/scale/convert do not

    Non-goals:
        - Does NOT round to the currency's minor unit
        - Does NOT look up exchange rates
    """

    quantity: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, Decimal):
            try:
                object.__setattr__(self, "quantity", Decimal(str(self.quantity)))
            except (InvalidOperation, ValueError) as e:
                raise ValueError(f"Invalid quantity: {self.quantity}") from e
        if not self.quantity.is_finite():
            raise ValueError(f"Quantity must be finite: {self.quantity}")

        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", Currency(self.currency))
        elif not isinstance(self.currency, Currency):
            raise TypeError(f"currency must be Currency or str, got {type(self.currency)}")

    @classmethod
    def of(cls, quantity: Scalar, currency: str | Currency) -> Amount:
        """Factory accepting a Decimal, int or numeric string."""
        return cls(quantity=quantity, currency=Currency.of(currency))

    @classmethod
    def zero(cls, currency: str | Currency) -> Amount:
        return cls(quantity=Decimal("0"), currency=Currency.of(currency))

    @property
    def is_zero(self) -> bool:
        return self.quantity.is_zero()

    @property
    def is_positive(self) -> bool:
        return self.quantity > 0

    @property
    def is_negative(self) -> bool:
        return self.quantity < 0

    def converted_to(self, target_currency: str | Currency, rate: Scalar) -> Amount:
        """
        Re-express this amount in ``target_currency``.

        ``rate`` is the number of target units per unit of this amount's
        currency. It is used as given: no lookup, no sign check. Getting its
        value and direction right is the caller's job.
        """
        factor = _as_decimal(rate)
        if factor is None:
            raise TypeError(f"rate must be Decimal, int or str, got {type(rate)}")
        return Amount(quantity=self.quantity * factor, currency=Currency.of(target_currency))

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other: Amount | AmountResult) -> AmountResult:
        if not isinstance(other, (Amount, AmountResult)):
            return NotImplemented
        return _combine(self, other, operator.add)

    def __sub__(self, other: Amount | AmountResult) -> AmountResult:
        if not isinstance(other, (Amount, AmountResult)):
            return NotImplemented
        return _combine(self, other, operator.sub)

    def __neg__(self) -> Amount:
        return Amount(quantity=-self.quantity, currency=self.currency)

    def __abs__(self) -> Amount:
        return Amount(quantity=abs(self.quantity), currency=self.currency)

    def __mul__(self, factor: Scalar) -> Amount:
        """Scale by a scalar. Never fails and never touches the currency."""
        value = _as_decimal(factor)
        if value is None:
            return NotImplemented
        return Amount(quantity=self.quantity * value, currency=self.currency)

    def __rmul__(self, factor: Scalar) -> Amount:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Scalar) -> AmountResult:
        value = _as_decimal(divisor)
        if value is None:
            return NotImplemented
        if value == 0:
            logger.debug(
                "division_by_zero",
                extra={"currency": self.currency.code, "quantity": self.quantity},
            )
            return Err(DivisionByZero())
        return Ok(Amount(quantity=self.quantity / value, currency=self.currency))

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Amount):
            return self.currency == other.currency and self.quantity == other.quantity
        if isinstance(other, (AmountResult, CurrencyError)):
            return isinstance(other, Ok) and self == other.amount
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.quantity, self.currency))

    def _require_same_currency(self, other: Amount) -> None:
        # Ordering has no bool answer across currencies: fail fast.
        if self.currency != other.currency:
            logger.warning(
                "ordering_currency_mismatch",
                extra={"left": self.currency.code, "right": other.currency.code},
            )
            raise CurrencyMismatchError(self.currency.code, other.currency.code)

    def __lt__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._require_same_currency(other)
        return self.quantity < other.quantity

    def __le__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._require_same_currency(other)
        return self.quantity <= other.quantity

    def __gt__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._require_same_currency(other)
        return self.quantity > other.quantity

    def __ge__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._require_same_currency(other)
        return self.quantity >= other.quantity

    # -- display ------------------------------------------------------------

    def __format__(self, format_spec: str) -> str:
        """Render as ``"<symbol> <quantity>"``; ``".N"`` selects N places.

        Extra digits are truncated, not rounded: 1.666... shows as ``1.66``.
        """
        places = DISPLAY_PLACES
        if format_spec:
            if not (format_spec.startswith(".") and format_spec[1:].isdigit()):
                raise ValueError(f"Invalid format specifier {format_spec!r} for Amount")
            places = int(format_spec[1:])
        return f"{self.currency.symbol} {_truncate(self.quantity, places):f}"

    def __str__(self) -> str:
        return format(self, "")

    def __repr__(self) -> str:
        return f"Amount({self.quantity!r}, {self.currency!r})"


class AmountResult:
    """
    Outcome of an operation that could fail: ``Ok(Amount)`` or ``Err(CurrencyError)``.

    Contract:
        Exactly two concrete variants exist. An Err is terminal for chained
        arithmetic: it is returned as-is by every operation that consumes it.
        The amount inside an Ok is only reachable by inspecting the variant
        (``unwrap``, ``ok``, ``isinstance`` or ``match``).

    Example:
        match invoice + fee:
            case Ok(amount):
                book(amount)
            case Err(Mismatch(left, right)):
                reject(left, right)
    """

    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        if cls is AmountResult:
            raise TypeError("AmountResult is abstract; build Ok, Err or AmountResult.of()")
        return super().__new__(cls)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError("AmountResult is closed; it cannot be subclassed")

    @staticmethod
    def of(value: Amount | CurrencyError | AmountResult) -> AmountResult:
        """Wrap an Amount in Ok and a CurrencyError in Err."""
        if isinstance(value, AmountResult):
            return value
        if isinstance(value, Amount):
            return Ok(value)
        if isinstance(value, CurrencyError):
            return Err(value)
        raise TypeError(f"Cannot build AmountResult from {type(value)}")

    def is_ok(self) -> bool:
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        return isinstance(self, Err)

    def is_mismatch(self) -> bool:
        return isinstance(self, Err) and isinstance(self.error, Mismatch)

    def is_division_by_zero(self) -> bool:
        return isinstance(self, Err) and isinstance(self.error, DivisionByZero)

    def ok(self) -> Amount | None:
        return self.amount if isinstance(self, Ok) else None

    def err(self) -> CurrencyError | None:
        return self.error if isinstance(self, Err) else None

    def unwrap(self) -> Amount:
        """Return the amount, or raise ResultUnwrapError for an Err."""
        if isinstance(self, Ok):
            return self.amount
        raise ResultUnwrapError(self, expected="Ok")

    def unwrap_err(self) -> CurrencyError:
        if isinstance(self, Err):
            return self.error
        raise ResultUnwrapError(self, expected="Err")

    def unwrap_or(self, default: Amount) -> Amount:
        return self.amount if isinstance(self, Ok) else default

    def map(self, fn: Callable[[Amount], Amount]) -> AmountResult:
        """Apply an infallible ``fn`` to the amount of an Ok."""
        if isinstance(self, Err):
            return self
        return Ok(fn(self.amount))

    def converted_to(self, target_currency: str | Currency, rate: Scalar) -> AmountResult:
        return self.map(lambda amount: amount.converted_to(target_currency, rate))

    def __add__(self, other: Amount | AmountResult) -> AmountResult:
        if not isinstance(other, (Amount, AmountResult)):
            return NotImplemented
        return _combine(self, other, operator.add)

    def __sub__(self, other: Amount | AmountResult) -> AmountResult:
        if not isinstance(other, (Amount, AmountResult)):
            return NotImplemented
        return _combine(self, other, operator.sub)

    def __neg__(self) -> AmountResult:
        return self.map(operator.neg)

    def __abs__(self) -> AmountResult:
        return self.map(abs)

    def __mul__(self, factor: Scalar) -> AmountResult:
        if _as_decimal(factor) is None:
            return NotImplemented
        return self.map(lambda amount: amount * factor)

    def __rmul__(self, factor: Scalar) -> AmountResult:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Scalar) -> AmountResult:
        if _as_decimal(divisor) is None:
            return NotImplemented
        if isinstance(self, Err):
            return self
        return self.amount / divisor


@dataclass(frozen=True, slots=True, eq=False)
class Ok(AmountResult):
    """Successful result holding an Amount."""

    amount: Amount

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Amount):
            raise TypeError(f"Ok requires an Amount, got {type(self.amount)}")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Ok):
            return self.amount == other.amount
        if isinstance(other, Amount):
            return self.amount == other
        if isinstance(other, (Err, CurrencyError)):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        # Ok(a) == a, so both must hash alike.
        return hash(self.amount)

    def __format__(self, format_spec: str) -> str:
        return format(self.amount, format_spec)

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True, slots=True, eq=False)
class Err(AmountResult):
    """Failed result holding the CurrencyError that caused it."""

    error: CurrencyError

    def __post_init__(self) -> None:
        if not isinstance(self.error, CurrencyError):
            raise TypeError(f"Err requires a CurrencyError, got {type(self.error)}")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Err):
            return self.error == other.error
        if isinstance(other, CurrencyError):
            return self.error == other
        if isinstance(other, (Ok, Amount)):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.error)

    def __format__(self, format_spec: str) -> str:
        return str(self.error)

    def __str__(self) -> str:
        return str(self.error)


def _combine(
    left: Amount | AmountResult,
    right: Amount | AmountResult,
    op: Callable[[Decimal, Decimal], Decimal],
) -> AmountResult:
    """Apply a currency-checked binary ``op``; the leftmost Err always wins."""
    if isinstance(left, Err):
        return left
    if isinstance(right, Err):
        return right

    lhs = left.amount if isinstance(left, Ok) else left
    rhs = right.amount if isinstance(right, Ok) else right
    if lhs.currency != rhs.currency:
        logger.debug(
            "currency_mismatch",
            extra={"left": lhs.currency.code, "right": rhs.currency.code, "op": op.__name__},
        )
        return Err(Mismatch(lhs.currency, rhs.currency))
    return Ok(Amount(quantity=op(lhs.quantity, rhs.quantity), currency=lhs.currency))


def total(
    items: Iterable[Amount | AmountResult],
    currency: str | Currency | None = None,
) -> AmountResult:
    """
    Sum amounts and results left to right.

    With ``currency`` the sum starts from zero in that currency, so an empty
    iterable totals to zero and any other currency is a Mismatch. Without it
    the first item fixes the currency and an empty iterable is rejected.

    Raises:
        ValueError: If ``items`` is empty and no currency is given.
    """
    iterator = iter(items)
    if currency is not None:
        accumulated: AmountResult = Ok(Amount.zero(currency))
    else:
        try:
            accumulated = AmountResult.of(next(iterator))
        except StopIteration:
            raise ValueError("Cannot total an empty iterable without a currency") from None

    for item in iterator:
        accumulated = accumulated + item
    return accumulated


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """
    Caller-supplied exchange rate between two currencies.

    Contract:
        1 unit of from_currency = ``rate`` units of to_currency. The rate must
        be positive. Nothing is looked up; the object only packages a rate the
        caller already has, so that the source currency can be checked.

    Non-goals:
        - Does NOT store effective dates or sources
        - Does NOT triangulate cross rates
    """

    from_currency: Currency
    to_currency: Currency
    rate: Decimal

    def __post_init__(self) -> None:
        if isinstance(self.from_currency, str):
            object.__setattr__(self, "from_currency", Currency(self.from_currency))
        if isinstance(self.to_currency, str):
            object.__setattr__(self, "to_currency", Currency(self.to_currency))

        if not isinstance(self.rate, Decimal):
            try:
                object.__setattr__(self, "rate", Decimal(str(self.rate)))
            except (InvalidOperation, ValueError) as e:
                raise InvalidExchangeRateError(str(self.rate), "not a number") from e

        if not self.rate.is_finite() or self.rate <= 0:
            raise InvalidExchangeRateError(str(self.rate), "rate must be positive")

    @classmethod
    def of(
        cls,
        from_currency: str | Currency,
        to_currency: str | Currency,
        rate: Scalar,
    ) -> ExchangeRate:
        return cls(
            from_currency=Currency.of(from_currency),
            to_currency=Currency.of(to_currency),
            rate=rate,
        )

    def convert(self, value: Amount | AmountResult) -> AmountResult:
        """
        Convert an amount held in from_currency.

        Returns:
            The incoming Err unchanged; ``Err(Mismatch(value.currency,
            from_currency))`` for an amount in another currency; otherwise
            Ok of the converted amount.
        """
        result = AmountResult.of(value)
        if isinstance(result, Err):
            return result
        amount = result.amount
        if amount.currency != self.from_currency:
            logger.debug(
                "conversion_currency_mismatch",
                extra={"left": amount.currency.code, "right": self.from_currency.code},
            )
            return Err(Mismatch(amount.currency, self.from_currency))
        return Ok(amount.converted_to(self.to_currency, self.rate))

    def inverse(self) -> ExchangeRate:
        """USD->EUR at 0.85 becomes EUR->USD at 1/0.85."""
        return ExchangeRate(
            from_currency=self.to_currency,
            to_currency=self.from_currency,
            rate=Decimal("1") / self.rate,
        )

    @property
    def pair(self) -> tuple[str, str]:
        return (self.from_currency.code, self.to_currency.code)

    def __str__(self) -> str:
        return f"{self.from_currency}/{self.to_currency} = {self.rate}"
