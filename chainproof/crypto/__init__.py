"""
Core cryptographic utilities.

Module 02 provides the hash operations used to evaluate proof branches.
"""
from .hashing import (
    HASH_OPS,
    sha256,
    sha256d,
    apply_hash_op,
    is_hex_string,
    op_value_to_bytes,
    reverse_hex,
)

__all__ = [
    "HASH_OPS",
    "sha256",
    "sha256d",
    "apply_hash_op",
    "is_hex_string",
    "op_value_to_bytes",
    "reverse_hex",
]
