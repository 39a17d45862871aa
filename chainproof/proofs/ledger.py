"""
Module 04 - Proof Flattening
File: ledger.py

Purpose: Extract ledger anchoring data (e.g. the Bitcoin transaction and
block) from parsed proofs.

Ledger anchoring always sits exactly one level below a calendar branch:

    proof
      └── calendar branch          (direct child)
            └── ledger branch      (label, e.g. "btc_anchor_branch")
                  └── anchor       (type, e.g. "btc")

so the lookup is a shallow, label-keyed search rather than a full tree walk.
Proofs that have not reached ledger anchoring yet yield empty records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Sequence

from chainproof.config import get_default_config
from chainproof.proofs.flatten import coerce_model
from chainproof.proofs.validators import require_array
from chainproof.schemas.errors import MalformedLedgerBranchException, SchemaValidationException
from chainproof.schemas.proof import Branch, LedgerExtractionRecord, ParsedProof


logger = logging.getLogger(__name__)


def _top_level(item: Any) -> tuple[str | None, list[Branch] | None]:
    """Split a proof-level element into its hash_id_node and branches."""
    if isinstance(item, ParsedProof):
        return item.hash_id_node, item.branches
    if isinstance(item, Mapping):
        raw_branches = item.get("branches")
        if raw_branches is None:
            return item.get("hash_id_node"), None
        require_array(raw_branches, "branches")
        return item.get("hash_id_node"), [coerce_model(b, Branch, "branch") for b in raw_branches]
    raise SchemaValidationException(
        "proof branch element must be an object",
        details={"actual_type": type(item).__name__},
    )


def find_ledger_branch(children: Sequence[Branch], ledger_label: str) -> Branch | None:
    """
    Find the ledger sub-branch below a proof's direct children.

    The first child (in order) with a matching sub-branch wins, and within
    it the first matching sub-branch. Later matches are ignored.
    """
    found: Branch | None = None
    for child in children:
        if not child.branches:
            continue
        for sub_branch in child.branches:
            if sub_branch.label != ledger_label:
                continue
            if found is None:
                found = sub_branch
            else:
                logger.debug(f"Ignoring additional '{ledger_label}' branch")
    return found


def flatten_ledger_branches(
    proof_branch_array: Sequence[ParsedProof | Mapping[str, Any]],
    ledger_label: str | None = None,
    anchor_type: str | None = None,
) -> list[LedgerExtractionRecord]:
    """
    Extract the raw ledger transaction and ledger anchor for each proof.

    Args:
        proof_branch_array: Parsed proofs (or mappings carrying hash_id_node
            and branches)
        ledger_label: Label of the ledger anchor branch (defaults to config,
            "btc_anchor_branch")
        anchor_type: Anchor type of the target ledger (defaults to config,
            "btc")

    Returns:
        One record per input element, in order. Fields other than
        hash_id_node stay None when no ledger data is present.

    Raises:
        InvalidArgumentException: If proof_branch_array is not an array
        MalformedLedgerBranchException: If a ledger branch has no anchor array
    """
    require_array(proof_branch_array, "proofBranchArray")
    ledger = get_default_config().ledger
    ledger_label = ledger_label or ledger.anchor_branch_label
    anchor_type = anchor_type or ledger.anchor_type

    records: list[LedgerExtractionRecord] = []
    for item in proof_branch_array:
        hash_id_node, branches = _top_level(item)
        fields: dict[str, Any] = {"hash_id_node": hash_id_node}

        ledger_branch = find_ledger_branch(branches or [], ledger_label)
        if ledger_branch is not None:
            if ledger_branch.anchors is None:
                raise MalformedLedgerBranchException(
                    f"'{ledger_label}' branch has no anchors",
                    hash_id_node=hash_id_node,
                    label=ledger_label,
                )
            fields["raw_ledger_tx"] = ledger_branch.raw_tx
            anchor = next((a for a in ledger_branch.anchors if a.type == anchor_type), None)
            if anchor is not None:
                # merkle root and height of the anchoring block
                fields["expected_value"] = anchor.expected_value
                fields["anchor_id"] = anchor.anchor_id
        else:
            logger.debug(f"No '{ledger_label}' branch for {hash_id_node}")

        records.append(LedgerExtractionRecord(**fields))

    return records


def flatten_btc_branches(
    proof_branch_array: Sequence[ParsedProof | Mapping[str, Any]],
) -> list[LedgerExtractionRecord]:
    """Bitcoin shorthand for flatten_ledger_branches."""
    return flatten_ledger_branches(proof_branch_array, "btc_anchor_branch", "btc")


__all__ = [
    "find_ledger_branch",
    "flatten_ledger_branches",
    "flatten_btc_branches",
]
