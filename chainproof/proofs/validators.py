"""
Module 03 - Proof Intake
File: validators.py

Purpose: Shape predicates for proof handles, proof strings and
collection arguments. No state; nothing here inspects proof contents.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from collections.abc import Mapping
from typing import Any

from chainproof.crypto.hashing import is_hex_string
from chainproof.schemas.errors import InvalidArgumentException
from chainproof.schemas.proof import ProofHandle


_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


def is_valid_proof_handle(handle: Any) -> bool:
    """
    Check that a proof handle has the expected keys.

    A handle is valid if it is a non-empty mapping with both ``uri`` and
    ``hashIdNode`` keys, or a ProofHandle model. Values are not inspected.
    """
    if isinstance(handle, ProofHandle):
        return True
    if isinstance(handle, Mapping) and handle:
        return "uri" in handle and "hashIdNode" in handle
    return False


def require_array(value: Any, name: str = "value") -> None:
    """
    Guard for operations taking an ordered collection.

    Raises:
        InvalidArgumentException: If value is not a list or tuple
    """
    if not isinstance(value, (list, tuple)):
        raise InvalidArgumentException(
            f"{name} arg must be an Array",
            argument=name,
            details={"actual_type": type(value).__name__},
        )


def require_proof_handles(handles: Any) -> None:
    """
    Guard for operations taking proof handles.

    Raises:
        InvalidArgumentException: If handles is not an array or any
            element is not a valid proof handle
    """
    require_array(handles, "proofHandles")
    invalid = [idx for idx, handle in enumerate(handles) if not is_valid_proof_handle(handle)]
    if invalid:
        raise InvalidArgumentException(
            "proofHandles Array contains invalid Objects",
            argument="proofHandles",
            details={"invalid_indices": invalid},
        )


def is_json(value: Any) -> bool:
    """True for a string holding a JSON object or array."""
    if not isinstance(value, str):
        return False
    try:
        decoded = json.loads(value)
    except ValueError:
        return False
    return isinstance(decoded, (dict, list))


def is_base64(value: Any) -> bool:
    """True for a non-empty, padded, standard-alphabet base64 string."""
    if not isinstance(value, str) or not value or len(value) % 4 != 0:
        return False
    if not _BASE64_RE.match(value):
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def is_hex(value: Any) -> bool:
    """True for a non-empty, even-length hex string."""
    return isinstance(value, str) and is_hex_string(value)


__all__ = [
    "is_valid_proof_handle",
    "require_array",
    "require_proof_handles",
    "is_json",
    "is_base64",
    "is_hex",
]
