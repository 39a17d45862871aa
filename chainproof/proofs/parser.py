"""
Module 03 - Proof Intake
File: parser.py

Purpose: Turn a raw proof into a ParsedProof tree.

Supported encodings:
- Proof object (mapping)
- JSON text of a proof object
- Binary: zlib-deflated MessagePack of a proof object, given as bytes,
  hex text or base64 text

Branch evaluation rules:
1. A top-level branch starts from the proof hash; a child branch starts
   from its parent's final value
2. {"l": v} prepends v, {"r": v} appends v (hex decoded, else UTF-8)
3. {"op": name} replaces the value with its digest
4. {"anchors": [...]} records anchors; expected_value is the current value
   (byte-reversed for the ledger anchor type)
5. On the ledger anchor branch, the value right before the first
   sha-256-x2 op is the raw ledger transaction
"""

from __future__ import annotations

import base64
import json
import logging
import zlib
from collections.abc import Mapping
from typing import Any, Sequence

import msgpack
from pydantic import ValidationError

from chainproof.config import LedgerConfig, get_default_config
from chainproof.crypto.hashing import apply_hash_op, is_hex_string, op_value_to_bytes, reverse_hex
from chainproof.proofs.validators import is_base64, is_hex, is_json, require_array
from chainproof.schemas.errors import SchemaValidationException, UnknownProofFormatException
from chainproof.schemas.proof import Anchor, Branch, ParsedProof


logger = logging.getLogger(__name__)

RAW_TX_OP = "sha-256-x2"


# =============================================================================
# Decoding
# =============================================================================

def decode_binary_proof(data: bytes) -> dict[str, Any]:
    """
    Decode a binary proof into a proof object.

    Raises:
        UnknownProofFormatException: If data is not deflated MessagePack
            of a mapping
    """
    try:
        inflated = zlib.decompress(data)
    except zlib.error as e:
        raise UnknownProofFormatException(
            "binary proof is not zlib compressed",
            details={"reason": str(e)},
        ) from e

    try:
        obj = msgpack.unpackb(inflated, raw=False)
    except (ValueError, msgpack.UnpackException) as e:
        raise UnknownProofFormatException(
            "binary proof is not valid MessagePack",
            details={"reason": str(e)},
        ) from e

    if not isinstance(obj, dict):
        raise UnknownProofFormatException(
            "binary proof does not hold a proof object",
            details={"decoded_type": type(obj).__name__},
        )
    return obj


def decode_proof(proof: Any) -> Mapping[str, Any]:
    """
    Decode any supported proof encoding into a proof object.

    Hex text is tried before base64 text since hex strings are often
    valid base64 as well.

    Raises:
        UnknownProofFormatException: If proof matches no supported encoding
    """
    if isinstance(proof, Mapping):
        return proof

    if isinstance(proof, (bytes, bytearray)):
        return decode_binary_proof(bytes(proof))

    if isinstance(proof, str):
        if is_json(proof):
            obj = json.loads(proof)
            if not isinstance(obj, dict):
                raise UnknownProofFormatException("JSON proof must be an object")
            return obj
        if is_hex(proof):
            return decode_binary_proof(bytes.fromhex(proof))
        if is_base64(proof):
            return decode_binary_proof(base64.b64decode(proof))

    raise UnknownProofFormatException(details={"type": type(proof).__name__})


# =============================================================================
# Tree construction
# =============================================================================

def _operand(value: Any, path: str) -> bytes:
    if not isinstance(value, str):
        raise SchemaValidationException("operation operand must be a string", field_path=path)
    return op_value_to_bytes(value)


def _parse_anchor(raw: Any, current: bytes, ledger: LedgerConfig, path: str) -> Anchor:
    if not isinstance(raw, Mapping):
        raise SchemaValidationException("anchor must be an object", field_path=path)

    if ledger.reverse_expected_value and raw.get("type") == ledger.anchor_type:
        expected_value = reverse_hex(current)
    else:
        expected_value = current.hex()

    anchor_id = raw.get("anchor_id")
    try:
        return Anchor(
            type=raw.get("type"),
            anchor_id=str(anchor_id) if anchor_id is not None else None,
            expected_value=expected_value,
            uris=raw.get("uris") or [],
        )
    except ValidationError as e:
        raise SchemaValidationException(f"invalid anchor: {e}", field_path=path) from e


def _parse_branch(raw: Any, start: bytes, ledger: LedgerConfig, path: str) -> Branch:
    if not isinstance(raw, Mapping):
        raise SchemaValidationException("branch must be an object", field_path=path)

    label = raw.get("label")
    is_ledger_branch = label == ledger.anchor_branch_label
    current = start
    raw_tx: str | None = None
    anchors: list[Anchor] = []

    for op_idx, op in enumerate(raw.get("ops") or []):
        op_path = f"{path}.ops[{op_idx}]"
        if not isinstance(op, Mapping):
            raise SchemaValidationException("operation must be an object", field_path=op_path)

        if "l" in op:
            current = _operand(op["l"], op_path) + current
        elif "r" in op:
            current = current + _operand(op["r"], op_path)
        elif "op" in op:
            if is_ledger_branch and raw_tx is None and op["op"] == RAW_TX_OP:
                raw_tx = current.hex()
            try:
                current = apply_hash_op(op["op"], current)
            except (KeyError, TypeError) as e:
                raise UnknownProofFormatException(
                    f"unsupported hash operation: {op['op']!r}",
                    details={"path": op_path},
                ) from e
        elif "anchors" in op:
            for anchor_idx, anchor in enumerate(op["anchors"] or []):
                anchors.append(
                    _parse_anchor(anchor, current, ledger, f"{op_path}.anchors[{anchor_idx}]")
                )
        else:
            raise SchemaValidationException("unrecognized branch operation", field_path=op_path)

    children = None
    if raw.get("branches"):
        children = _parse_branches(raw["branches"], current, ledger, f"{path}.branches")

    return Branch(label=label, anchors=anchors, branches=children, raw_tx=raw_tx)


def _parse_branches(
    raw_branches: Any,
    start: bytes,
    ledger: LedgerConfig,
    path: str,
) -> list[Branch]:
    if not isinstance(raw_branches, list):
        raise SchemaValidationException("branches must be an array", field_path=path)
    return [
        _parse_branch(raw, start, ledger, f"{path}[{idx}]")
        for idx, raw in enumerate(raw_branches)
    ]


def build_parsed_proof(obj: Mapping[str, Any], ledger: LedgerConfig | None = None) -> ParsedProof:
    """
    Evaluate a decoded proof object into a ParsedProof tree.

    Raises:
        SchemaValidationException: If required fields are missing or malformed
        UnknownProofFormatException: If a branch uses an unsupported hash op
    """
    if ledger is None:
        ledger = get_default_config().ledger

    proof_hash = obj.get("hash")
    if not isinstance(proof_hash, str) or not is_hex_string(proof_hash):
        raise SchemaValidationException("proof hash must be a hex string", field_path="hash")
    start = bytes.fromhex(proof_hash)

    branches = _parse_branches(obj.get("branches") or [], start, ledger, "branches")

    try:
        parsed = ParsedProof(
            hash=proof_hash,
            hash_id_node=obj.get("hash_id_node"),
            hash_id_core=obj.get("hash_id_core"),
            hash_submitted_node_at=obj.get("hash_submitted_node_at"),
            hash_submitted_core_at=obj.get("hash_submitted_core_at"),
            branches=branches,
        )
    except ValidationError as e:
        raise SchemaValidationException(f"invalid proof: {e}") from e

    logger.debug(f"Parsed proof {parsed.hash_id_node} with {len(parsed.branches)} top-level branches")
    return parsed


# =============================================================================
# Public API
# =============================================================================

def parse_proof(proof: Any, ledger: LedgerConfig | None = None) -> ParsedProof:
    """
    Parse one proof in any supported format.

    Args:
        proof: ParsedProof, proof object, JSON text, or binary proof
            (bytes, hex text or base64 text)
        ledger: Ledger settings (defaults to config)

    Returns:
        The parsed proof tree

    Raises:
        UnknownProofFormatException: If proof matches no supported encoding
        SchemaValidationException: If the decoded proof is malformed
    """
    if isinstance(proof, ParsedProof):
        return proof
    return build_parsed_proof(decode_proof(proof), ledger)


def parse_proofs(proofs: Sequence[Any], ledger: LedgerConfig | None = None) -> list[ParsedProof]:
    """
    Parse a batch of proofs, each in any supported format.

    Fails on the first proof that cannot be parsed.

    Raises:
        InvalidArgumentException: If proofs is not an array
        UnknownProofFormatException: If any proof matches no supported encoding
        SchemaValidationException: If any decoded proof is malformed
    """
    require_array(proofs, "proofs")
    return [parse_proof(proof, ledger) for proof in proofs]


__all__ = [
    "decode_binary_proof",
    "decode_proof",
    "build_parsed_proof",
    "parse_proof",
    "parse_proofs",
]
