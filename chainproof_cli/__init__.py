"""
Module 05 - chainproof CLI

Command-line interface for proof normalization and flattening.

Usage:
    python -m chainproof_cli normalize proofs.json
    python -m chainproof_cli flatten proofs.json --json
    python -m chainproof_cli ledger proofs.json
    python -m chainproof_cli config --show
"""

__version__ = "0.1.0"
