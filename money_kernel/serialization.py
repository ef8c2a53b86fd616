"""
Structured serialization of amounts, errors and results.

Payloads are plain JSON-compatible values:

    Amount          {"quantity": "10.50", "currency": "EUR"}
    DivisionByZero  "DivisionByZero"
    Mismatch        {"Mismatch": ["EUR", "USD"]}
    Ok              {"Ok": {"quantity": "10.50", "currency": "EUR"}}
    Err             {"Err": {"Mismatch": ["EUR", "USD"]}}

Quantities are written as strings so no precision is lost through JSON
floats. Decoding restores values equal to the originals; malformed payloads
raise SerializationError.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Any

from money_kernel.domain.currency import Currency
from money_kernel.domain.errors import CurrencyError, DivisionByZero, Mismatch
from money_kernel.domain.values import Amount, AmountResult, Err, Ok
from money_kernel.exceptions import SerializationError

Serializable = Amount | CurrencyError | AmountResult


def amount_to_dict(amount: Amount) -> dict[str, str]:
    return {"quantity": str(amount.quantity), "currency": amount.currency.code}


def amount_from_dict(data: Any) -> Amount:
    if not isinstance(data, dict) or set(data) != {"quantity", "currency"}:
        raise SerializationError(data, "expected keys 'quantity' and 'currency'")
    quantity = data["quantity"]
    if not isinstance(quantity, (str, int)) or isinstance(quantity, bool):
        raise SerializationError(data, "quantity must be a decimal string")
    try:
        return Amount(quantity=Decimal(str(quantity)), currency=Currency(data["currency"]))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise SerializationError(data, str(e)) from e


def error_to_dict(error: CurrencyError) -> str | dict[str, list[str]]:
    if isinstance(error, Mismatch):
        return {"Mismatch": [error.left.code, error.right.code]}
    if isinstance(error, DivisionByZero):
        return "DivisionByZero"
    raise TypeError(f"Unknown CurrencyError variant: {type(error)}")


def error_from_dict(data: Any) -> CurrencyError:
    if data == "DivisionByZero":
        return DivisionByZero()
    if isinstance(data, dict) and set(data) == {"Mismatch"}:
        pair = data["Mismatch"]
        if not isinstance(pair, list) or len(pair) != 2:
            raise SerializationError(data, "Mismatch must hold two currency codes")
        try:
            return Mismatch(Currency(pair[0]), Currency(pair[1]))
        except ValueError as e:
            raise SerializationError(data, str(e)) from e
    raise SerializationError(data, "not a CurrencyError")


def result_to_dict(result: AmountResult) -> dict[str, Any]:
    if isinstance(result, Ok):
        return {"Ok": amount_to_dict(result.amount)}
    if isinstance(result, Err):
        return {"Err": error_to_dict(result.error)}
    raise TypeError(f"Unknown AmountResult variant: {type(result)}")


def result_from_dict(data: Any) -> AmountResult:
    if isinstance(data, dict) and set(data) == {"Ok"}:
        return Ok(amount_from_dict(data["Ok"]))
    if isinstance(data, dict) and set(data) == {"Err"}:
        return Err(error_from_dict(data["Err"]))
    raise SerializationError(data, "expected a single 'Ok' or 'Err' key")


def to_payload(value: Serializable) -> Any:
    """Encode any of the three core types."""
    if isinstance(value, Amount):
        return amount_to_dict(value)
    if isinstance(value, AmountResult):
        return result_to_dict(value)
    if isinstance(value, CurrencyError):
        return error_to_dict(value)
    raise TypeError(f"Cannot serialize {type(value)}")


def from_payload(data: Any) -> Serializable:
    """Decode a payload, recognising the variant from its shape."""
    if isinstance(data, dict) and "quantity" in data:
        return amount_from_dict(data)
    if isinstance(data, dict) and set(data) & {"Ok", "Err"}:
        return result_from_dict(data)
    return error_from_dict(data)


def dumps(value: Serializable, **kwargs: Any) -> str:
    return json.dumps(to_payload(value), ensure_ascii=False, **kwargs)


def loads(text: str | bytes) -> Serializable:
    """Decode JSON text or bytes; undecodable input raises SerializationError."""
    try:
        data = json.loads(text)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError both derive from ValueError
        raise SerializationError(text, f"invalid JSON: {e}") from e
    return from_payload(data)
