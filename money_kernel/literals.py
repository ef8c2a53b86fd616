"""
Literal construction helpers.

Shorthand for building exact Decimals and Amounts from numeric literals:

    from money_kernel.literals import dec, eur, usd

    eur(10) + eur("15.2")          # Ok(Amount(Decimal('25.2'), Currency('EUR')))
    usd(10000).converted_to("EUR", dec(0.928))

Every ISO code in the registry has a lower-case helper (``chf``, ``kwd``,
...). ``try`` is a keyword, so the Turkish lira helper is ``try_``.
Float literals go through ``str`` so ``dec(0.1) == Decimal("0.1")``.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from money_kernel.domain.currency import Currency, CurrencyRegistry
from money_kernel.domain.values import Amount

Literal = int | str | float | Decimal


def dec(literal: Literal) -> Decimal:
    """Exact Decimal for an int, str, float or Decimal literal."""
    if isinstance(literal, Decimal):
        return literal
    if isinstance(literal, bool) or not isinstance(literal, (int, str, float)):
        raise TypeError(f"Cannot build Decimal literal from {type(literal)}")
    return Decimal(str(literal))


def amount(literal: Literal, currency: str | Currency) -> Amount:
    """Same as ``Amount(dec(literal), currency)``."""
    return Amount(quantity=dec(literal), currency=Currency.of(currency))


def _constructor(code: str) -> Callable[[Literal], Amount]:
    currency = Currency(code)

    def build(literal: Literal) -> Amount:
        return Amount(quantity=dec(literal), currency=currency)

    build.__name__ = build.__qualname__ = code.lower()
    build.__doc__ = f"Amount in {currency.name} ({currency.code})."
    return build


usd = _constructor("USD")
eur = _constructor("EUR")
gbp = _constructor("GBP")
jpy = _constructor("JPY")
chf = _constructor("CHF")


def __getattr__(name: str) -> Callable[[Literal], Amount]:
    code = name[:-1] if name.endswith("_") else name
    if code.islower() and CurrencyRegistry.is_valid(code):
        helper = _constructor(code.upper())
        globals()[name] = helper
        return helper
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
