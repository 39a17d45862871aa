"""
Module 03 - Proof Intake
File: handles.py

Purpose: Map hash submission responses to proof handles.

A batch of hashes is submitted to several nodes. Every node answers with
its own hash_id_node per hash, so the handles for the same input hash are
correlated by a shared group id, keyed by the hash's index in the batch.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Sequence

from pydantic import ValidationError

from chainproof.proofs.validators import require_array
from chainproof.schemas.errors import SchemaValidationException
from chainproof.schemas.proof import ProofHandle


logger = logging.getLogger(__name__)


IdFactory = Callable[[], str]


def new_group_id() -> str:
    """Fresh time-based identifier for a group of handles."""
    return str(uuid.uuid1())


def build_group_ids(resp_array: Sequence[Any], id_factory: IdFactory) -> dict[int, str]:
    """
    Build the index -> group id mapping for a batch.

    The first response defines the batch size; one id is generated per
    hash index.
    """
    if not resp_array or not isinstance(resp_array[0], Mapping):
        return {}
    hashes = resp_array[0].get("hashes") or []
    return {idx: id_factory() for idx in range(len(hashes))}


def _submitted_to(resp: Any, resp_idx: int) -> str:
    meta = resp.get("meta") if isinstance(resp, Mapping) else None
    uri = meta.get("submitted_to") if isinstance(meta, Mapping) else None
    if not uri:
        raise SchemaValidationException(
            "submit response is missing meta.submitted_to",
            field_path=f"[{resp_idx}].meta.submitted_to",
        )
    return uri


def map_submit_hashes_resp_to_proof_handles(
    resp_array: Sequence[Any],
    id_factory: IdFactory | None = None,
) -> list[ProofHandle]:
    """
    Map submit-hashes responses to proof handles.

    Args:
        resp_array: One response per node submitted to, each shaped
            {"meta": {"submitted_to": uri}, "hashes": [{"hash", "hash_id_node"}]}
        id_factory: Group id generator (defaults to uuid1)

    Returns:
        Handles in response order, then hash order. Handles at the same
        hash index share a group id.

    Raises:
        InvalidArgumentException: If resp_array is not an array
        SchemaValidationException: If a response lacks meta.submitted_to
    """
    require_array(resp_array, "respArray")
    group_ids = build_group_ids(resp_array, id_factory or new_group_id)

    proof_handles: list[ProofHandle] = []
    for resp_idx, resp in enumerate(resp_array):
        uri = _submitted_to(resp, resp_idx)
        hashes = resp.get("hashes") or []
        if len(hashes) != len(group_ids):
            logger.warning(
                f"Response from {uri} has {len(hashes)} hashes, batch has {len(group_ids)}"
            )
        for idx, item in enumerate(hashes):
            try:
                handle = ProofHandle(
                    uri=uri,
                    hash=item.get("hash"),
                    hash_id_node=item.get("hash_id_node"),
                    group_id=group_ids.get(idx),
                )
            except (AttributeError, ValidationError) as e:
                raise SchemaValidationException(
                    f"invalid hash entry in submit response: {e}",
                    field_path=f"[{resp_idx}].hashes[{idx}]",
                ) from e
            proof_handles.append(handle)

    return proof_handles


__all__ = [
    "IdFactory",
    "new_group_id",
    "build_group_ids",
    "map_submit_hashes_resp_to_proof_handles",
]
