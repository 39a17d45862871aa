"""
Module 03 - Proof Intake
File: normalize.py

Purpose: Normalize a mixed collection of proof-like items before parsing.

Each item is classified as a canonical proof object, an encoded proof
string, or invalid. Invalid items are dropped and reported; they never
abort the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from chainproof.config import get_default_config
from chainproof.proofs.validators import is_base64, is_json, require_array
from chainproof.schemas.proof import ParsedProof


logger = logging.getLogger(__name__)


class ProofClassification(str, Enum):
    """How a single input item is handled."""
    EXTRACTED_STRING = "extracted_string"  # {proof: "..."} -> "..."
    PROOF_OBJECT = "proof_object"
    ENCODED_STRING = "encoded_string"
    MISSING_PROOF = "missing_proof"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_kept(self) -> bool:
        return self not in (ProofClassification.MISSING_PROOF, ProofClassification.UNRECOGNIZED)


@dataclass(frozen=True)
class ClassifiedProof:
    """Classification of one input item."""
    index: int
    classification: ProofClassification
    value: Any = None
    diagnostic: str | None = None


@dataclass
class NormalizationResult:
    """Kept proofs, in input order, and the diagnostics for dropped items."""
    proofs: list[Any] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)
    items: list[ClassifiedProof] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.items) - len(self.proofs)


def classify_proof(item: Any, index: int = 0, proof_type: str | None = None) -> ClassifiedProof:
    """
    Classify one proof-like item. First matching rule wins:

    1. ParsedProof: keep as is
    2. Mapping with a string ``proof`` field: keep that string
    3. Mapping whose ``type`` is the proof type marker: keep as is
    4. JSON or base64 string: keep as is
    5. Mapping without a proof but with ``hashIdNode``: drop
    6. Anything else: drop
    """
    if proof_type is None:
        proof_type = get_default_config().normalizer.proof_type

    if isinstance(item, ParsedProof):
        return ClassifiedProof(index, ProofClassification.PROOF_OBJECT, item)

    is_mapping = isinstance(item, Mapping)

    if is_mapping and isinstance(item.get("proof"), str):
        # Probably a retrieval result; the proof itself is the string
        return ClassifiedProof(index, ProofClassification.EXTRACTED_STRING, item["proof"])

    if is_mapping and item.get("type") == proof_type:
        return ClassifiedProof(index, ProofClassification.PROOF_OBJECT, item)

    if isinstance(item, str) and (is_json(item) or is_base64(item)):
        return ClassifiedProof(index, ProofClassification.ENCODED_STRING, item)

    if is_mapping and not item.get("proof") and "hashIdNode" in item:
        return ClassifiedProof(
            index,
            ProofClassification.MISSING_PROOF,
            diagnostic=f"no proof for hashIdNode {item['hashIdNode']}",
        )

    return ClassifiedProof(
        index,
        ProofClassification.UNRECOGNIZED,
        diagnostic=(
            f"proofs arg Array has an element that is not a proof Object or String "
            f"(index {index}, type {type(item).__name__})"
        ),
    )


def normalize_proofs_detailed(
    proofs: Sequence[Any],
    proof_type: str | None = None,
) -> NormalizationResult:
    """
    Classify every item without reporting anything.

    Raises:
        InvalidArgumentException: If proofs is not an array
    """
    require_array(proofs, "proofs")
    if proof_type is None:
        proof_type = get_default_config().normalizer.proof_type

    result = NormalizationResult()
    for idx, item in enumerate(proofs):
        classified = classify_proof(item, idx, proof_type)
        result.items.append(classified)
        if classified.classification.is_kept:
            result.proofs.append(classified.value)
        else:
            result.diagnostics.append(classified.diagnostic)

    return result


def normalize_proofs(proofs: Sequence[Any], proof_type: str | None = None) -> list[Any]:
    """
    Normalize proofs for parsing.

    Args:
        proofs: Proof strings, proof objects, or retrieval results
            ({hashIdNode, proof}) in any mix
        proof_type: Type marker of canonical proof objects
            (defaults to config, "Chainpoint")

    Returns:
        Kept items in input order: proof strings or proof objects.
        Dropped items are reported as warnings.

    Raises:
        InvalidArgumentException: If proofs is not an array
    """
    result = normalize_proofs_detailed(proofs, proof_type)
    for diagnostic in result.diagnostics:
        logger.warning(diagnostic)
    return result.proofs


__all__ = [
    "ProofClassification",
    "ClassifiedProof",
    "NormalizationResult",
    "classify_proof",
    "normalize_proofs_detailed",
    "normalize_proofs",
]
