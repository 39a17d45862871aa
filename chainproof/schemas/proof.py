"""
Module 01 - Proof Schemas
File: proof.py

Purpose: Proof tree schemas and the flat record shapes produced from them.

A parsed proof is a tree: the proof holds top-level branches, each branch
holds anchors and optionally further branches. Flattening turns the tree
into one record per anchor.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProofHandle(BaseModel):
    """
    Lightweight reference to a submitted hash, used to retrieve its proof later.

    All handles created for the same input hash across different
    submission targets share a group_id.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str = Field(..., description="Node the hash was submitted to", min_length=1)
    hash_id_node: str = Field(..., alias="hashIdNode", min_length=1)
    hash: str | None = Field(default=None)
    group_id: str | None = Field(default=None, alias="groupId")

    def to_wire(self) -> dict[str, Any]:
        """Dump using the camelCase keys clients exchange."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Anchor(BaseModel):
    """Leaf evidence pointing at a single ledger commitment."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(..., description="Ledger or service identifier, e.g. 'cal' or 'btc'")
    anchor_id: str = Field(..., description="Ledger-specific locator, e.g. block height")
    expected_value: str | None = Field(
        default=None,
        description="Value the ledger must be checked against",
    )
    uris: list[str] = Field(default_factory=list)

    @property
    def canonical_uri(self) -> str | None:
        return self.uris[0] if self.uris else None


class Branch(BaseModel):
    """
    A node of the proof tree.

    ``anchors`` is None only when the branch carries no anchor array at all;
    the parser always populates it, possibly with an empty list.
    ``raw_tx`` is set on the ledger anchor branch.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    label: str | None = Field(default=None)
    anchors: list[Anchor] | None = Field(default=None)
    branches: list[Branch] | None = Field(default=None)
    raw_tx: str | None = Field(default=None, alias="rawTx")


class ParsedProof(BaseModel):
    """Canonical parsed proof tree for one submitted hash."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    hash: str = Field(..., min_length=1)
    hash_id_node: str = Field(..., min_length=1)
    hash_id_core: str | None = Field(default=None)
    hash_submitted_node_at: str | None = Field(default=None)
    hash_submitted_core_at: str | None = Field(default=None)
    branches: list[Branch] = Field(default_factory=list)

    @property
    def proof_fields(self) -> dict[str, Any]:
        """Proof-level fields copied onto every flat anchor record."""
        return {
            "hash": self.hash,
            "hash_id_node": self.hash_id_node,
            "hash_id_core": self.hash_id_core,
            "hash_submitted_node_at": self.hash_submitted_node_at,
            "hash_submitted_core_at": self.hash_submitted_core_at,
        }


class BranchAnchorRecord(BaseModel):
    """One anchor of one branch, without proof-level fields."""

    model_config = ConfigDict(frozen=True)

    branch: str | None = None
    uri: str | None = None
    type: str
    anchor_id: str
    expected_value: str | None = None


class FlatAnchorRecord(BranchAnchorRecord):
    """Fully denormalized anchor record: one per (proof, anchor) pair."""

    hash: str
    hash_id_node: str
    hash_id_core: str | None = None
    hash_submitted_node_at: str | None = None
    hash_submitted_core_at: str | None = None


class LedgerExtractionRecord(BaseModel):
    """Ledger anchoring data extracted for one proof."""

    model_config = ConfigDict(frozen=True)

    hash_id_node: str | None = None
    raw_ledger_tx: str | None = None
    expected_value: str | None = None
    anchor_id: str | None = None

    @property
    def has_ledger_data(self) -> bool:
        return self.raw_ledger_tx is not None or self.anchor_id is not None
