"""
money_config -- single public entrypoint for money_kernel configuration.

Responsibility:
    ``get_active_config()`` is the only way to obtain settings;
    ``apply_config()`` is the only place they take effect. The kernel never
    imports this package.

Failure modes:
    - ``FileNotFoundError`` -- the requested or env-named file is missing.
    - ``ValueError`` -- the file fails schema validation.
"""

from __future__ import annotations

import decimal
import os
from pathlib import Path

from money_config.loader import compute_checksum, load_config, log_level
from money_config.schema import LoggingConfig, MoneyKernelConfig
from money_kernel.logging_config import LogContext, configure_logging, get_logger

_logger = get_logger("config")

CONFIG_ENV_VAR = "MONEY_KERNEL_CONFIG"
_DEFAULT_CONFIG_FILE = Path(__file__).parent / "defaults.yaml"

__all__ = [
    "CONFIG_ENV_VAR",
    "LoggingConfig",
    "MoneyKernelConfig",
    "apply_config",
    "get_active_config",
]


def get_active_config(config_path: Path | str | None = None) -> MoneyKernelConfig:
    """Load the active configuration.

    Resolution order: ``config_path``, then the file named by the
    ``MONEY_KERNEL_CONFIG`` environment variable, then the bundled
    ``defaults.yaml``. Emits a ``MONEY_CONFIG_TRACE`` log record tagged with
    ``operation="load_config"``.
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = env_path if env_path else _DEFAULT_CONFIG_FILE

    with LogContext.bind(operation="load_config"):
        config = load_config(Path(config_path))
        _logger.info(
            "MONEY_CONFIG_TRACE",
            extra={
                "trace_type": "MONEY_CONFIG_TRACE",
                "config_source": config.source,
                "checksum": compute_checksum(config),
                "decimal_precision": config.decimal_precision,
                "decimal_rounding": config.decimal_rounding,
            },
        )
    return config


def apply_config(config: MoneyKernelConfig) -> decimal.Context:
    """Apply settings to the current thread's decimal context and to logging.

    Returns the updated decimal context.
    """
    context = decimal.getcontext()
    context.prec = config.decimal_precision
    context.rounding = config.decimal_rounding
    configure_logging(level=log_level(config), structured=config.logging.structured)

    with LogContext.bind(operation="apply_config"):
        _logger.debug(
            "money_config_applied",
            extra={
                "checksum": compute_checksum(config),
                "decimal_precision": context.prec,
                "decimal_rounding": context.rounding,
            },
        )
    return context
