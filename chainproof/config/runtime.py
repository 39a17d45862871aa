"""
Runtime Configuration

Central configuration for proof normalization, parsing and ledger extraction.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class LedgerConfig:
    """Which sub-branch and anchor type identify the target ledger."""
    anchor_branch_label: str = "btc_anchor_branch"
    anchor_type: str = "btc"
    # btc merkle roots are displayed in reversed byte order
    reverse_expected_value: bool = True


@dataclass
class NormalizerConfig:
    """Configuration for proof normalization."""
    proof_type: str = "Chainpoint"


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CHAINPROOF_LEDGER_LABEL: Label of the ledger anchor sub-branch
        - CHAINPROOF_LEDGER_ANCHOR_TYPE: Anchor type of the target ledger
        - CHAINPROOF_PROOF_TYPE: Type marker of canonical proof objects
        - CHAINPROOF_LOG_LEVEL: Log level
        - CHAINPROOF_LOG_FILE: Log file path
        """
        overrides: dict[str, Any] = {}

        # Ledger settings
        if os.getenv("CHAINPROOF_LEDGER_LABEL"):
            overrides.setdefault("ledger", {})["anchor_branch_label"] = os.getenv("CHAINPROOF_LEDGER_LABEL")
        if os.getenv("CHAINPROOF_LEDGER_ANCHOR_TYPE"):
            overrides.setdefault("ledger", {})["anchor_type"] = os.getenv("CHAINPROOF_LEDGER_ANCHOR_TYPE")

        # Normalizer settings
        if os.getenv("CHAINPROOF_PROOF_TYPE"):
            overrides.setdefault("normalizer", {})["proof_type"] = os.getenv("CHAINPROOF_PROOF_TYPE")

        # Logging
        if os.getenv("CHAINPROOF_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("CHAINPROOF_LOG_LEVEL")
        if os.getenv("CHAINPROOF_LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv("CHAINPROOF_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        ledger_data = data.get("ledger", {})
        normalizer_data = data.get("normalizer", {})
        logging_data = data.get("logging", {})

        return cls(
            ledger=LedgerConfig(**ledger_data) if ledger_data else LedgerConfig(),
            normalizer=NormalizerConfig(**normalizer_data) if normalizer_data else NormalizerConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "ledger": {
                "anchor_branch_label": self.ledger.anchor_branch_label,
                "anchor_type": self.ledger.anchor_type,
                "reverse_expected_value": self.ledger.reverse_expected_value,
            },
            "normalizer": {
                "proof_type": self.normalizer.proof_type,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
