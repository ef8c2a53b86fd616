"""
Configuration loader (``money_config.loader``).

Responsibility
--------------
Loads a YAML file and parses it into a frozen ``MoneyKernelConfig``.
Callers should normally go through ``money_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or out-of-range values  -> ``ValueError``.
"""

from __future__ import annotations

import decimal
import hashlib
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from money_config.schema import DEFAULT_DECIMAL_PRECISION, LoggingConfig, MoneyKernelConfig

_ROUNDING_MODES = frozenset(
    name for name in dir(decimal) if name.startswith("ROUND_")
)
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_TOP_LEVEL_KEYS = frozenset({"decimal", "logging"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping: {path}")
    return data


def parse_logging(data: dict[str, Any]) -> LoggingConfig:
    level = str(data.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {sorted(_LOG_LEVELS)}")
    structured = data.get("structured", True)
    if not isinstance(structured, bool):
        raise ValueError(f"logging.structured must be a boolean, got {structured!r}")
    return LoggingConfig(level=level, structured=structured)


def parse_config(data: dict[str, Any], source: str | None = None) -> MoneyKernelConfig:
    """
    Parse a ``MoneyKernelConfig`` from a dict.

    Expected shape::

        decimal:
          precision: 28
          rounding: ROUND_HALF_EVEN
        logging:
          level: INFO
          structured: true

    Raises:
        ValueError: on unknown sections, non-positive precision, unknown
            rounding mode or log level.
    """
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

    decimal_data = data.get("decimal") or {}
    precision = decimal_data.get("precision", DEFAULT_DECIMAL_PRECISION)
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
        raise ValueError(f"decimal.precision must be a positive integer, got {precision!r}")

    rounding = str(decimal_data.get("rounding", decimal.ROUND_HALF_EVEN)).upper()
    if rounding not in _ROUNDING_MODES:
        raise ValueError(f"Unknown rounding mode {rounding!r}; expected one of {sorted(_ROUNDING_MODES)}")

    return MoneyKernelConfig(
        decimal_precision=precision,
        decimal_rounding=rounding,
        logging=parse_logging(data.get("logging") or {}),
        source=source,
    )


def load_config(path: Path) -> MoneyKernelConfig:
    return parse_config(load_yaml_file(path), source=str(path))


def compute_checksum(config: MoneyKernelConfig) -> str:
    """Deterministic SHA-256 of the settings, ignoring where they came from."""
    settings = asdict(config)
    settings.pop("source", None)
    canonical = json.dumps(settings, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def log_level(config: MoneyKernelConfig) -> int:
    return logging.getLevelName(config.logging.level)
