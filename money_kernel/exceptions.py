"""
Typed exception hierarchy for the money kernel.

===============================================================================
WHAT IS RAISED AND WHAT IS RETURNED
===============================================================================

Currency mismatches in arithmetic and division by zero are NOT exceptions.
They are ordinary values (``Mismatch``, ``DivisionByZero``) carried inside an
``Err`` result, and callers inspect them:

    result = invoice + refund
    if result.is_err():
        log.warning("cannot total", extra={"error": str(result.unwrap_err())})

Exceptions in this module are reserved for programming-logic violations:
the caller asked for something the algebra cannot express as a value.

    MoneyKernelError (base)
    |
    +-- CurrencyMismatchError       ordering amounts of different currencies
    +-- ResultUnwrapError           unwrap() on Err / unwrap_err() on Ok
    +-- InvalidExchangeRateError    zero or negative ExchangeRate
    +-- SerializationError          malformed serialized payload

Every class has a ``code`` class attribute (machine-readable, stable) and
stores its context as attributes, so log formatters can emit structured
fields instead of parsing messages.
"""

from __future__ import annotations

from typing import Any


class MoneyKernelError(Exception):
    """Base exception for all money kernel errors."""

    code: str = "MONEY_KERNEL_ERROR"


class CurrencyMismatchError(MoneyKernelError):
    """Ordering comparison attempted between two different currencies.

    Equality is total and never raises; ordering must return a plain bool, so
    a cross-currency comparison has no representable answer and fails fast.
    """

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str):
        self.currency1 = currency1
        self.currency2 = currency2
        super().__init__(f"Cannot order amounts in different currencies: {currency1} vs {currency2}")


class ResultUnwrapError(MoneyKernelError):
    """The wrong variant of an AmountResult was unwrapped."""

    code: str = "RESULT_UNWRAP"

    def __init__(self, result: Any, expected: str):
        self.result = result
        self.expected = expected
        super().__init__(f"Expected {expected} result, got {result!r}")


class InvalidExchangeRateError(MoneyKernelError):
    """Exchange rate value is zero, negative or not a number."""

    code: str = "INVALID_EXCHANGE_RATE"

    def __init__(self, rate_value: str, reason: str):
        self.rate_value = rate_value
        self.reason = reason
        super().__init__(f"Invalid exchange rate value {rate_value}: {reason}")


class SerializationError(MoneyKernelError):
    """A serialized amount, error or result payload could not be decoded."""

    code: str = "SERIALIZATION_ERROR"

    def __init__(self, payload: Any, reason: str):
        self.payload = payload
        self.reason = reason
        super().__init__(f"Cannot deserialize {payload!r}: {reason}")
