"""Pure domain layer: currencies, amounts, results and their algebra."""

from money_kernel.domain.currency import Currency, CurrencyInfo, CurrencyRegistry
from money_kernel.domain.errors import CurrencyError, DivisionByZero, Mismatch
from money_kernel.domain.values import (
    Amount,
    AmountResult,
    Err,
    ExchangeRate,
    Ok,
    total,
)

__all__ = [
    "Amount",
    "AmountResult",
    "Currency",
    "CurrencyError",
    "CurrencyInfo",
    "CurrencyRegistry",
    "DivisionByZero",
    "Err",
    "ExchangeRate",
    "Mismatch",
    "Ok",
    "total",
]
