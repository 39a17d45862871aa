"""
Module 05 - CLI Proof Commands

Normalize, flatten and extract ledger data from proof files.

Input is a JSON file (or "-" for stdin) holding a single proof item or an
array of them: proof objects, proof strings, or retrieval results
({"hashIdNode": ..., "proof": ...}). A file that is not JSON is read as a
single encoded proof string.

Usage:
    chainproof normalize proofs.json [--json]
    chainproof flatten proofs.json [--json]
    chainproof ledger proofs.json [--label L] [--anchor-type T] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from chainproof.proofs import (
    flatten_ledger_branches,
    flatten_proofs,
    normalize_proofs,
    normalize_proofs_detailed,
    parse_proofs,
)
from chainproof.schemas.errors import ChainproofException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def load_proof_input(path: str) -> list[Any]:
    """Read proof items from a file path or stdin."""
    if path == "-":
        text = sys.stdin.read()
    else:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Proof file not found: {file_path}")
        text = file_path.read_text()

    try:
        data = json.loads(text)
    except ValueError:
        logger.debug("Input is not JSON, reading it as one encoded proof")
        return [text.strip()]

    if isinstance(data, list):
        return data
    return [data]


def _print_error(error: ChainproofException, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"error": error.to_error_model().model_dump()}, indent=2))
    else:
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)


def normalize_cmd(args: Namespace) -> int:
    """Handle normalize command."""
    items = load_proof_input(args.path)
    try:
        result = normalize_proofs_detailed(items)
    except ChainproofException as e:
        _print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    for diagnostic in result.diagnostics:
        logger.warning(diagnostic)

    if args.json:
        print(json.dumps({"proofs": result.proofs, "diagnostics": result.diagnostics}, indent=2))
    else:
        print(f"Kept {len(result.proofs)} of {len(items)} proofs")
        for item in result.items:
            print(f"  [{item.index}] {item.classification.value}")
        for diagnostic in result.diagnostics:
            print(f"  ! {diagnostic}")
    return EXIT_SUCCESS


def flatten_cmd(args: Namespace) -> int:
    """Handle flatten command."""
    items = load_proof_input(args.path)
    try:
        records = flatten_proofs(parse_proofs(normalize_proofs(items)))
    except ChainproofException as e:
        _print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps([r.model_dump() for r in records], indent=2))
    else:
        for r in records:
            print(f"{r.hash_id_node}  {r.branch or '-'}  {r.type}:{r.anchor_id}  {r.expected_value}")
        print(f"{len(records)} anchors")
    return EXIT_SUCCESS


def ledger_cmd(args: Namespace) -> int:
    """Handle ledger command."""
    items = load_proof_input(args.path)
    try:
        records = flatten_ledger_branches(
            parse_proofs(normalize_proofs(items)),
            ledger_label=args.label,
            anchor_type=args.anchor_type,
        )
    except ChainproofException as e:
        _print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps([r.model_dump() for r in records], indent=2))
    else:
        for r in records:
            if r.has_ledger_data:
                print(f"{r.hash_id_node}  block {r.anchor_id}  root {r.expected_value}")
            else:
                print(f"{r.hash_id_node}  (not anchored yet)")
    return EXIT_SUCCESS
