"""
Tests for proof flattening.
"""

import pytest

from chainproof.proofs.flatten import flatten_branches, flatten_proofs
from chainproof.proofs.parser import parse_proof
from chainproof.schemas import (
    BranchAnchorRecord,
    FlatAnchorRecord,
    InvalidArgumentException,
    SchemaValidationException,
)
from fixtures import (
    expected_raw_proof_values,
    make_anchor,
    make_branch,
    make_parsed_proof,
)


class TestFlattenBranches:
    """Tests for flatten_branches."""

    def test_empty(self):
        assert flatten_branches([]) == []

    def test_anchors_in_order(self):
        a1 = make_anchor("cal", "1", "11" * 32)
        a2 = make_anchor("tcal", "2", "22" * 32)
        branch = make_branch("cal_anchor_branch", anchors=[a1, a2])

        records = flatten_branches([branch])

        assert records == [
            BranchAnchorRecord(
                branch="cal_anchor_branch",
                uri=a1.uris[0],
                type="cal",
                anchor_id="1",
                expected_value="11" * 32,
            ),
            BranchAnchorRecord(
                branch="cal_anchor_branch",
                uri=a2.uris[0],
                type="tcal",
                anchor_id="2",
                expected_value="22" * 32,
            ),
        ]

    def test_parent_before_child(self):
        child = make_branch("btc_anchor_branch", anchors=[make_anchor("btc", "560331")])
        parent = make_branch("cal_anchor_branch", anchors=[make_anchor("cal", "100")], branches=[child])

        records = flatten_branches([parent])

        assert [(r.branch, r.anchor_id) for r in records] == [
            ("cal_anchor_branch", "100"),
            ("btc_anchor_branch", "560331"),
        ]

    def test_pre_order_with_siblings(self):
        tree = [
            make_branch(
                "a",
                anchors=[make_anchor(anchor_id="a1")],
                branches=[
                    make_branch("a.x", anchors=[make_anchor(anchor_id="ax1")]),
                    make_branch("a.y", anchors=[make_anchor(anchor_id="ay1")]),
                ],
            ),
            make_branch("b", anchors=[make_anchor(anchor_id="b1"), make_anchor(anchor_id="b2")]),
        ]

        records = flatten_branches(tree)

        assert [r.anchor_id for r in records] == ["a1", "ax1", "ay1", "b1", "b2"]

    def test_label_is_immediate_branch_not_path(self):
        deep = make_branch("deep", anchors=[make_anchor(anchor_id="d")])
        middle = make_branch("middle", branches=[deep])
        top = make_branch("top", branches=[middle])

        records = flatten_branches([top])

        assert len(records) == 1
        assert records[0].branch == "deep"

    def test_branch_without_anchors_contributes_nothing(self):
        assert flatten_branches([make_branch("empty")]) == []
        assert flatten_branches([make_branch("no-array", anchors=None)]) == []

    def test_missing_label_and_uris(self):
        branch = make_branch(label=None, anchors=[make_anchor(uris=[])])

        record = flatten_branches([branch])[0]

        assert record.branch is None
        assert record.uri is None

    def test_only_first_uri_is_used(self):
        anchor = make_anchor(uris=["https://first", "https://second"])
        assert flatten_branches([make_branch(anchors=[anchor])])[0].uri == "https://first"

    def test_accepts_mappings(self):
        branches = [
            {
                "label": "cal_anchor_branch",
                "anchors": [{"type": "cal", "anchor_id": "7", "expected_value": "ee", "uris": ["u"]}],
                "branches": [{"label": "child", "anchors": [{"type": "btc", "anchor_id": "8", "uris": []}]}],
            }
        ]

        records = flatten_branches(branches)

        assert [(r.branch, r.type, r.anchor_id) for r in records] == [
            ("cal_anchor_branch", "cal", "7"),
            ("child", "btc", "8"),
        ]

    def test_invalid_branch_element(self):
        with pytest.raises(SchemaValidationException):
            flatten_branches(["not a branch"])

    @pytest.mark.parametrize("value", [None, "abc", {"label": "x"}, 1])
    def test_non_array(self, value):
        with pytest.raises(InvalidArgumentException):
            flatten_branches(value)


class TestFlattenProofs:
    """Tests for flatten_proofs."""

    def test_two_proofs(self):
        p1 = make_parsed_proof("node-1", branches=[make_branch(anchors=[make_anchor(anchor_id="p1a")])])
        p2 = make_parsed_proof(
            "node-2",
            proof_hash="ee" * 32,
            branches=[
                make_branch(anchors=[make_anchor(anchor_id="p2a")]),
                make_branch("other", anchors=[make_anchor(anchor_id="p2b")]),
            ],
        )

        records = flatten_proofs([p1, p2])

        assert len(records) == 3
        assert all(isinstance(r, FlatAnchorRecord) for r in records)
        assert records[0].hash_id_node == "node-1"
        assert records[0].hash == p1.hash
        assert records[0].hash_id_core == "core-node-1"
        assert [r.hash_id_node for r in records[1:]] == ["node-2", "node-2"]
        assert [r.hash for r in records[1:]] == ["ee" * 32, "ee" * 32]
        assert [r.anchor_id for r in records] == ["p1a", "p2a", "p2b"]
        assert [r.branch for r in records] == ["cal_anchor_branch", "cal_anchor_branch", "other"]

    def test_record_fields(self):
        proof = make_parsed_proof(branches=[make_branch(anchors=[make_anchor("cal", "9", "99" * 32)])])

        record = flatten_proofs([proof])[0]

        assert record.model_dump() == {
            "branch": "cal_anchor_branch",
            "uri": "https://a.chainpoint.org/calendar/9/hash",
            "type": "cal",
            "anchor_id": "9",
            "expected_value": "99" * 32,
            "hash": "ff" * 32,
            "hash_id_node": "node-0001",
            "hash_id_core": "core-node-0001",
            "hash_submitted_node_at": "2019-01-22T20:09:51Z",
            "hash_submitted_core_at": "2019-01-22T20:09:52Z",
        }

    def test_proof_without_branches(self):
        assert flatten_proofs([make_parsed_proof()]) == []

    def test_parsed_raw_proof(self, raw_proof):
        expected = expected_raw_proof_values()

        records = flatten_proofs([parse_proof(raw_proof)])

        assert [(r.branch, r.type) for r in records] == [
            ("cal_anchor_branch", "cal"),
            ("btc_anchor_branch", "btc"),
        ]
        assert records[0].expected_value == expected["cal_expected_value"]
        assert records[1].expected_value == expected["btc_expected_value"]
        assert {r.hash_id_node for r in records} == {raw_proof["hash_id_node"]}

    def test_does_not_mutate_input(self):
        proof = make_parsed_proof(branches=[make_branch(anchors=[make_anchor()])])
        before = proof.model_dump()
        flatten_proofs([proof])
        assert proof.model_dump() == before

    def test_non_array(self):
        with pytest.raises(InvalidArgumentException):
            flatten_proofs(make_parsed_proof())
