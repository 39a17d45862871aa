"""
CLI command modules.
"""

from chainproof_cli.commands import proofs

__all__ = ["proofs"]
