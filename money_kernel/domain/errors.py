"""
CurrencyError -- the closed set of reasons an amount operation can fail.

These are values, not exceptions: they travel inside ``Err`` results and are
compared, logged and serialized like any other domain value. There are
exactly two variants:

    Mismatch(left, right)   add/subtract between different currencies,
                            currencies kept in operand order
    DivisionByZero()        division whose divisor was zero

``Mismatch(EUR, USD)`` and ``Mismatch(USD, EUR)`` are different values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from money_kernel.domain.currency import Currency


class CurrencyError:
    """Base of the CurrencyError variants. Not instantiated directly."""

    __slots__ = ()

    code: ClassVar[str] = "CURRENCY_ERROR"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError("CurrencyError is closed; it cannot be subclassed")


@dataclass(frozen=True, slots=True)
class Mismatch(CurrencyError):
    """Operands of a binary operation were in different currencies."""

    left: Currency
    right: Currency

    code: ClassVar[str] = "CURRENCY_MISMATCH"

    def __str__(self) -> str:
        return f"mismatch currency '{self.left.code}' and '{self.right.code}'"


@dataclass(frozen=True, slots=True)
class DivisionByZero(CurrencyError):
    """The divisor of a division was zero."""

    code: ClassVar[str] = "DIVISION_BY_ZERO"

    def __str__(self) -> str:
        return "divide by zero"
