"""
Module 04 - Proof Flattening
File: flatten.py

Purpose: Flatten parsed proof trees into one record per anchor.

Ordering rules:
1. Pre-order: a branch's own anchors precede its descendants' anchors
2. Sibling branches and anchors keep their input order
3. All records of one proof precede those of the next proof

Each record carries the label of the branch that directly holds the
anchor, never a path of ancestor labels.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from pydantic import ValidationError

from chainproof.proofs.validators import require_array
from chainproof.schemas.errors import SchemaValidationException
from chainproof.schemas.proof import (
    Branch,
    BranchAnchorRecord,
    FlatAnchorRecord,
    ParsedProof,
)


def coerce_model(value: Any, model: type, kind: str):
    """Accept a model instance or validate a mapping into one."""
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        try:
            return model.model_validate(value)
        except ValidationError as e:
            raise SchemaValidationException(f"invalid {kind}: {e}") from e
    raise SchemaValidationException(
        f"{kind} must be an object",
        details={"actual_type": type(value).__name__},
    )


def flatten_branches(branches: Sequence[Branch | Mapping[str, Any]]) -> list[BranchAnchorRecord]:
    """
    Flatten a level of proof branches, depth first.

    Args:
        branches: Branches of one level of a proof tree

    Returns:
        One record per anchor found at any depth

    Raises:
        InvalidArgumentException: If branches is not an array
    """
    require_array(branches, "proofBranchArray")
    records: list[BranchAnchorRecord] = []

    for item in branches:
        branch = coerce_model(item, Branch, "branch")
        for anchor in branch.anchors or []:
            records.append(
                BranchAnchorRecord(
                    branch=branch.label or None,
                    uri=anchor.canonical_uri,
                    type=anchor.type,
                    anchor_id=anchor.anchor_id,
                    expected_value=anchor.expected_value,
                )
            )
        if branch.branches:
            records.extend(flatten_branches(branch.branches))

    return records


def flatten_proofs(parsed_proofs: Sequence[ParsedProof | Mapping[str, Any]]) -> list[FlatAnchorRecord]:
    """
    Flatten parsed proofs into fully denormalized anchor records.

    Raises:
        InvalidArgumentException: If parsed_proofs is not an array
    """
    require_array(parsed_proofs, "parsedProofs")
    records: list[FlatAnchorRecord] = []

    for item in parsed_proofs:
        proof = coerce_model(item, ParsedProof, "parsed proof")
        for partial in flatten_branches(proof.branches):
            records.append(FlatAnchorRecord(**proof.proof_fields, **partial.model_dump()))

    return records


__all__ = [
    "coerce_model",
    "flatten_branches",
    "flatten_proofs",
]
