"""
Structured logging for the money kernel.

Every module logs through ``get_logger(<dotted name>)``, which places it under
the ``money_kernel`` logger. Domain code passes machine-readable fields via
``extra``::

    logger.debug("currency_mismatch", extra={"left": "EUR", "right": "USD", "op": "add"})

``StructuredFormatter`` turns each record into one JSON line. Caller-scoped
fields (``correlation_id``, ``operation``) come from ``LogContext`` and are
attached to every record emitted while they are bound.

Nothing is printed until ``configure_logging()`` (or
``money_config.apply_config()``) installs a handler.
"""

from __future__ import annotations

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

ROOT_LOGGER_NAME = "money_kernel"


class LogContext:
    """Context-local fields merged into every structured record."""

    _fields: dict[str, ContextVar[str | None]] = {
        "correlation_id": ContextVar("money_kernel_correlation_id", default=None),
        "operation": ContextVar("money_kernel_operation", default=None),
    }

    @classmethod
    def set(cls, *, correlation_id: str | None = None, operation: str | None = None) -> None:
        """Set fields for the rest of the current context. None leaves a field as is."""
        for name, value in (("correlation_id", correlation_id), ("operation", operation)):
            if value is not None:
                cls._fields[name].set(value)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        values = {name: var.get() for name, var in cls._fields.items()}
        return {name: value for name, value in values.items() if value is not None}

    @classmethod
    def clear(cls) -> None:
        for var in cls._fields.values():
            var.set(None)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[type[LogContext]]:
        """Bind fields inside a ``with`` block, restoring the previous values on exit."""
        unknown = sorted(set(fields) - set(cls._fields))
        if unknown:
            raise TypeError(f"Unknown log context fields: {unknown}")
        tokens = [
            (cls._fields[name], cls._fields[name].set(value))
            for name, value in fields.items()
            if value is not None
        ]
        try:
            yield cls
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _to_json(value: Any) -> Any:
    # Decimal quantities keep their exact digits; domain values use str().
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: core fields, context, extras, exception."""

    def format(self, record: logging.LogRecord) -> str:
        document: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS:
                document.setdefault(key, value)
        if record.exc_info and record.exc_info[1] is not None:
            document.update(self._exception_fields(record))
        return json.dumps(document, default=_to_json, ensure_ascii=False)

    def _exception_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        exc = record.exc_info[1]
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # MoneyKernelError keeps its context (currency1, payload, ...) as attributes
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
        fields["traceback"] = self.formatException(record.exc_info)
        return fields


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` under the money_kernel hierarchy."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


_state_lock = threading.Lock()
_handler: logging.Handler | None = None


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
    structured: bool = True,
) -> None:
    """Install a single handler on the money_kernel logger.

    Only the first call takes effect until ``reset_logging()``.
    """
    global _handler
    with _state_lock:
        if _handler is not None:
            return
        _handler = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)

    if structured:
        _handler.setFormatter(StructuredFormatter())
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False
    root.addHandler(_handler)


def reset_logging() -> None:
    """Remove the installed handler and restore propagation. Used by tests."""
    global _handler
    with _state_lock:
        _handler = None
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
