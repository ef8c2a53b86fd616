"""
Money Kernel

A closed arithmetic algebra for currency-tagged amounts:
- Decimal quantities only, never float
- Amounts in different currencies are never silently combined
- Fallible operations return Ok/Err results whose errors stick
"""

from decimal import Decimal

from money_kernel.domain import (
    Amount,
    AmountResult,
    Currency,
    CurrencyError,
    DivisionByZero,
    Err,
    ExchangeRate,
    Mismatch,
    Ok,
    total,
)

__version__ = "0.4.0"

__all__ = [
    "Amount",
    "AmountResult",
    "Currency",
    "CurrencyError",
    "Decimal",
    "DivisionByZero",
    "Err",
    "ExchangeRate",
    "Mismatch",
    "Ok",
    "total",
]
