"""
Pytest fixtures for the money kernel test suite.

Provides:
- Common Currency objects
- An isolated decimal context per test
- Structured log capture for the money_kernel logger hierarchy
"""

import json
import logging
from decimal import localcontext
from io import StringIO

import pytest

from money_kernel.domain.currency import Currency
from money_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


@pytest.fixture
def eur_currency() -> Currency:
    return Currency("EUR")


@pytest.fixture
def usd_currency() -> Currency:
    return Currency("USD")


@pytest.fixture
def gbp_currency() -> Currency:
    return Currency("GBP")


@pytest.fixture(autouse=True)
def _isolated_decimal_context():
    """Keep per-test decimal precision/rounding changes from leaking."""
    with localcontext():
        yield


@pytest.fixture
def captured_logs():
    """Route money_kernel logs at DEBUG into a buffer of parsed JSON records."""
    reset_logging()
    LogContext.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(level=logging.DEBUG, handler=handler)

    def records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield records
    LogContext.clear()
    reset_logging()
