"""
Module 02 - Hashing Utilities
Hash operations used when evaluating proof branch operations.

This module provides:
- SHA-256 and double SHA-256 for raw bytes
- Named hash operations as they appear in proof ops
- Hex helpers for un-prefixed hex strings and ledger byte order

Determinism Notes:
- Always hash raw bytes exactly as given
- Hex strings are lowercase and carry no 0x prefix
"""
from __future__ import annotations

import hashlib
import re
from typing import Callable


_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha256d(data: bytes) -> bytes:
    """
    Compute double SHA-256 (sha256(sha256(data))).

    This is the Bitcoin transaction and block hashing rule.
    """
    return sha256(sha256(data))


def _hashlib_op(name: str) -> Callable[[bytes], bytes]:
    def _apply(data: bytes) -> bytes:
        return hashlib.new(name, data).digest()
    return _apply


HASH_OPS: dict[str, Callable[[bytes], bytes]] = {
    "sha-224": _hashlib_op("sha224"),
    "sha-256": sha256,
    "sha-384": _hashlib_op("sha384"),
    "sha-512": _hashlib_op("sha512"),
    "sha3-224": _hashlib_op("sha3_224"),
    "sha3-256": _hashlib_op("sha3_256"),
    "sha3-384": _hashlib_op("sha3_384"),
    "sha3-512": _hashlib_op("sha3_512"),
    "sha-256-x2": sha256d,
}


def apply_hash_op(op: str, data: bytes) -> bytes:
    """
    Apply a named hash operation to data.

    Args:
        op: Operation name as found in a proof, e.g. "sha-256"
        data: Bytes to hash

    Returns:
        Digest bytes

    Raises:
        KeyError: If the operation name is not supported
    """
    return HASH_OPS[op](data)


def is_hex_string(value: str) -> bool:
    """Check for a non-empty, even-length hex string without prefix."""
    return bool(_HEX_RE.fullmatch(value)) and len(value) % 2 == 0


def op_value_to_bytes(value: str) -> bytes:
    """
    Decode an l/r operand.

    Hex operands are decoded as bytes; any other string is taken as UTF-8
    text (e.g. "node_id:..." markers).
    """
    if is_hex_string(value):
        return bytes.fromhex(value)
    return value.encode("utf-8")


def reverse_hex(data: bytes) -> str:
    """Hex of data in reversed byte order (Bitcoin display order)."""
    return data[::-1].hex()


__all__ = [
    "HASH_OPS",
    "sha256",
    "sha256d",
    "apply_hash_op",
    "is_hex_string",
    "op_value_to_bytes",
    "reverse_hex",
]
