"""
Test fixtures package for chainproof tests.

This package provides factory functions for creating test objects:
- proof_fixtures.py: parsed trees, raw Chainpoint proofs, binary
  encodings and submit responses

Usage:
    from fixtures import make_parsed_proof, make_raw_chainpoint_proof

    def test_something():
        proof = make_parsed_proof(hash_id_node="node-1")
"""

from .proof_fixtures import (
    encode_base64_proof,
    encode_binary_proof,
    expected_raw_proof_values,
    make_anchor,
    make_branch,
    make_btc_anchored_proof,
    make_parsed_proof,
    make_raw_chainpoint_proof,
    make_submit_response,
)

__all__ = [
    "encode_base64_proof",
    "encode_binary_proof",
    "expected_raw_proof_values",
    "make_anchor",
    "make_branch",
    "make_btc_anchored_proof",
    "make_parsed_proof",
    "make_raw_chainpoint_proof",
    "make_submit_response",
]
