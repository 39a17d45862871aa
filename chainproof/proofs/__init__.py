"""
Modules 03/04 - Proof Intake and Flattening

This package provides:
- Shape validators for handles, proof strings and array arguments
- Submit-response to proof-handle mapping
- Normalization of mixed proof collections
- Parsing of JSON and binary proofs into ParsedProof trees
- Flattening of proof trees into per-anchor records
- Extraction of ledger (e.g. Bitcoin) anchoring data

Usage:
    from chainproof.proofs import normalize_proofs, parse_proofs, flatten_proofs

    parsed = parse_proofs(normalize_proofs(raw_proofs))
    records = flatten_proofs(parsed)
"""
from .validators import (
    is_base64,
    is_hex,
    is_json,
    is_valid_proof_handle,
    require_array,
    require_proof_handles,
)
from .handles import (
    IdFactory,
    map_submit_hashes_resp_to_proof_handles,
    new_group_id,
)
from .normalize import (
    ClassifiedProof,
    NormalizationResult,
    ProofClassification,
    classify_proof,
    normalize_proofs,
    normalize_proofs_detailed,
)
from .parser import (
    decode_proof,
    parse_proof,
    parse_proofs,
)
from .flatten import (
    flatten_branches,
    flatten_proofs,
)
from .ledger import (
    find_ledger_branch,
    flatten_btc_branches,
    flatten_ledger_branches,
)


__all__ = [
    # Validators
    "is_base64",
    "is_hex",
    "is_json",
    "is_valid_proof_handle",
    "require_array",
    "require_proof_handles",
    # Handles
    "IdFactory",
    "map_submit_hashes_resp_to_proof_handles",
    "new_group_id",
    # Normalization
    "ClassifiedProof",
    "NormalizationResult",
    "ProofClassification",
    "classify_proof",
    "normalize_proofs",
    "normalize_proofs_detailed",
    # Parsing
    "decode_proof",
    "parse_proof",
    "parse_proofs",
    # Flattening
    "flatten_branches",
    "flatten_proofs",
    "find_ledger_branch",
    "flatten_btc_branches",
    "flatten_ledger_branches",
]
