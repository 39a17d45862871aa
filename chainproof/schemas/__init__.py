"""
Module 01 - Proof Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    ChainproofException,
    ErrorCodes,
    InvalidArgumentException,
    MalformedLedgerBranchException,
    ProofError,
    SchemaValidationException,
    UnknownProofFormatException,
)

# Proof tree and record schemas
from .proof import (
    Anchor,
    Branch,
    BranchAnchorRecord,
    FlatAnchorRecord,
    LedgerExtractionRecord,
    ParsedProof,
    ProofHandle,
)

__all__ = [
    # Errors
    "ChainproofException",
    "ErrorCodes",
    "InvalidArgumentException",
    "MalformedLedgerBranchException",
    "ProofError",
    "SchemaValidationException",
    "UnknownProofFormatException",
    # Proof tree
    "Anchor",
    "Branch",
    "ParsedProof",
    "ProofHandle",
    # Records
    "BranchAnchorRecord",
    "FlatAnchorRecord",
    "LedgerExtractionRecord",
]
