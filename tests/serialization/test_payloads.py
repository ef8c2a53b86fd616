"""
Serialization of amounts, errors and results.

Verifies the payload shapes, that decoding restores equal values, and that
malformed payloads fail with SerializationError rather than a raw
KeyError/TypeError.
"""

import json

import pytest
from decimal import Decimal

from money_kernel.domain.currency import Currency
from money_kernel.domain.errors import DivisionByZero, Mismatch
from money_kernel.domain.values import Amount, Err, Ok
from money_kernel.exceptions import SerializationError
from money_kernel.serialization import (
    amount_from_dict,
    amount_to_dict,
    dumps,
    error_from_dict,
    error_to_dict,
    from_payload,
    loads,
    result_from_dict,
    result_to_dict,
    to_payload,
)

EUR = Currency("EUR")
USD = Currency("USD")


class TestPayloadShapes:

    def test_amount(self):
        assert amount_to_dict(Amount.of("10.50", "EUR")) == {"quantity": "10.50", "currency": "EUR"}

    def test_errors(self):
        assert error_to_dict(DivisionByZero()) == "DivisionByZero"
        assert error_to_dict(Mismatch(EUR, USD)) == {"Mismatch": ["EUR", "USD"]}

    def test_results(self):
        assert result_to_dict(Ok(Amount.of(1, "USD"))) == {"Ok": {"quantity": "1", "currency": "USD"}}
        assert result_to_dict(Err(Mismatch(USD, EUR))) == {"Err": {"Mismatch": ["USD", "EUR"]}}
        assert result_to_dict(Err(DivisionByZero())) == {"Err": "DivisionByZero"}

    def test_to_payload_dispatch(self):
        assert to_payload(Amount.of(2, "EUR"))["currency"] == "EUR"
        assert to_payload(Err(DivisionByZero())) == {"Err": "DivisionByZero"}
        assert to_payload(Mismatch(EUR, USD)) == {"Mismatch": ["EUR", "USD"]}

    def test_to_payload_rejects_other_types(self):
        with pytest.raises(TypeError):
            to_payload(Decimal("1"))


class TestDecoding:

    def test_amount_keeps_precision(self):
        amount = Amount.of("0.1000000000000000000000001", "EUR")
        decoded = amount_from_dict(amount_to_dict(amount))
        assert decoded == amount
        assert str(decoded.quantity) == "0.1000000000000000000000001"

    def test_mismatch_keeps_operand_order(self):
        decoded = error_from_dict({"Mismatch": ["USD", "EUR"]})
        assert decoded == Mismatch(USD, EUR)
        assert decoded != Mismatch(EUR, USD)

    def test_results(self):
        assert result_from_dict({"Ok": {"quantity": "-3", "currency": "GBP"}}) == Amount.of(-3, "GBP")
        assert result_from_dict({"Err": "DivisionByZero"}) == DivisionByZero()

    def test_from_payload_detects_shape(self):
        assert from_payload({"quantity": "1", "currency": "EUR"}) == Amount.of(1, "EUR")
        assert isinstance(from_payload({"Ok": {"quantity": "1", "currency": "EUR"}}), Ok)
        assert from_payload("DivisionByZero") == DivisionByZero()
        assert from_payload({"Mismatch": ["EUR", "USD"]}) == Mismatch(EUR, USD)

    def test_json_text(self):
        text = dumps(Amount.of("5.40", "EUR") + Amount.of(1, "USD"))
        assert json.loads(text) == {"Err": {"Mismatch": ["EUR", "USD"]}}
        assert loads(text) == Err(Mismatch(EUR, USD))

    def test_json_text_amount(self):
        assert loads(dumps(Amount.of("5.40", "EUR"))) == Amount.of("5.40", "EUR")


class TestMalformedPayloads:

    @pytest.mark.parametrize("payload", [
        {"quantity": "1"},
        {"quantity": "1", "currency": "EUR", "extra": 1},
        {"quantity": 1.5, "currency": "EUR"},
        {"quantity": "abc", "currency": "EUR"},
        {"quantity": "NaN", "currency": "EUR"},
        {"quantity": "1", "currency": "XXY"},
        {"quantity": True, "currency": "EUR"},
        ["1", "EUR"],
    ])
    def test_bad_amount(self, payload):
        with pytest.raises(SerializationError) as exc_info:
            amount_from_dict(payload)
        assert exc_info.value.code == "SERIALIZATION_ERROR"
        assert exc_info.value.payload == payload

    @pytest.mark.parametrize("payload", [
        "Unknown",
        {"Mismatch": ["EUR"]},
        {"Mismatch": "EUR,USD"},
        {"Mismatch": ["EUR", "QQQ"]},
        None,
    ])
    def test_bad_error(self, payload):
        with pytest.raises(SerializationError):
            error_from_dict(payload)

    @pytest.mark.parametrize("payload", [
        {},
        {"Ok": {"quantity": "1", "currency": "EUR"}, "Err": "DivisionByZero"},
        {"Ok": "DivisionByZero"},
        {"Err": {"quantity": "1", "currency": "EUR"}},
    ])
    def test_bad_result(self, payload):
        with pytest.raises(SerializationError):
            result_from_dict(payload)

    def test_invalid_json(self):
        with pytest.raises(SerializationError, match="invalid JSON"):
            loads("{not json")

    @pytest.mark.parametrize("raw", [b"\xff\xfe\xfa", b"\xc3\x28", b"\x80abc"])
    def test_undecodable_bytes(self, raw):
        with pytest.raises(SerializationError) as exc_info:
            loads(raw)
        assert exc_info.value.payload == raw
