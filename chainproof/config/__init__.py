"""
Runtime Configuration Module

Provides configuration loading and management for chainproof.
"""

from .runtime import (
    LedgerConfig,
    LoggingConfig,
    NormalizerConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LedgerConfig",
    "LoggingConfig",
    "NormalizerConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
