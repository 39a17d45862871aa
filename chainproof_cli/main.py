"""
Module 05 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m chainproof_cli normalize <path> [--json]
    python -m chainproof_cli flatten <path> [--json]
    python -m chainproof_cli ledger <path> [--label L] [--anchor-type T] [--json]
    python -m chainproof_cli config --show

Environment Variables:
    CHAINPROOF_LEDGER_LABEL        Ledger anchor branch label (default: btc_anchor_branch)
    CHAINPROOF_LEDGER_ANCHOR_TYPE  Ledger anchor type (default: btc)
    CHAINPROOF_PROOF_TYPE          Proof object type marker (default: Chainpoint)
    CHAINPROOF_LOG_LEVEL           Log level (default: INFO)
    CHAINPROOF_LOG_FILE            Log file path
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from chainproof.config import RuntimeConfig, get_default_config, set_default_config
from chainproof_cli.commands import proofs


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        type=str,
        help="JSON file with one proof or an array of proofs ('-' for stdin)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="chainproof",
        description="chainproof CLI - Normalize, parse and flatten anchor proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- normalize command ---
    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Classify proof items and drop the invalid ones",
        description="Normalize a mixed collection of proofs and report dropped items.",
    )
    _add_input_args(normalize_parser)
    normalize_parser.set_defaults(func=proofs.normalize_cmd)

    # --- flatten command ---
    flatten_parser = subparsers.add_parser(
        "flatten",
        help="Flatten proofs into one record per anchor",
        description="Normalize, parse and flatten proofs into per-anchor records.",
    )
    _add_input_args(flatten_parser)
    flatten_parser.set_defaults(func=proofs.flatten_cmd)

    # --- ledger command ---
    ledger_parser = subparsers.add_parser(
        "ledger",
        help="Extract ledger anchoring data per proof",
        description="Extract the raw ledger transaction and anchor of each proof.",
    )
    _add_input_args(ledger_parser)
    ledger_parser.add_argument(
        "--label",
        type=str,
        default=None,
        help="Ledger anchor branch label (default: from config)",
    )
    ledger_parser.add_argument(
        "--anchor-type",
        type=str,
        default=None,
        help="Ledger anchor type (default: from config)",
    )
    ledger_parser.set_defaults(func=proofs.ledger_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show effective configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(get_default_config().to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: chainproof config --show")
    return EXIT_SUCCESS


def load_config(config_path: Path | None) -> RuntimeConfig:
    """Load configuration from YAML (if given), then overlay environment."""
    if config_path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(config_path).with_env_overrides()


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    set_default_config(config)

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
