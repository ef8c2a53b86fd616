"""
MoneyKernelConfig schema.

Typed, frozen form of the YAML configuration. The loader parses YAML into
these dataclasses; ``apply_config`` pushes them into the decimal context and
the logging system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN

DEFAULT_DECIMAL_PRECISION = 28


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings for the money_kernel logger hierarchy."""

    level: str = "INFO"
    structured: bool = True  # JSON lines via StructuredFormatter


@dataclass(frozen=True)
class MoneyKernelConfig:
    """Runtime settings. The kernel itself never reads this."""

    decimal_precision: int = DEFAULT_DECIMAL_PRECISION
    decimal_rounding: str = ROUND_HALF_EVEN
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: str | None = None  # file the config was loaded from
