"""
Tests for runtime configuration and the error taxonomy.
"""

import pytest

from chainproof.config import (
    LedgerConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from chainproof.schemas import (
    ChainproofException,
    ErrorCodes,
    InvalidArgumentException,
    MalformedLedgerBranchException,
    ProofError,
    SchemaValidationException,
    UnknownProofFormatException,
)


class TestRuntimeConfig:
    """Tests for RuntimeConfig loading."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.ledger.anchor_branch_label == "btc_anchor_branch"
        assert config.ledger.anchor_type == "btc"
        assert config.ledger.reverse_expected_value is True
        assert config.normalizer.proof_type == "Chainpoint"
        assert config.logging.level == "INFO"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({
            "ledger": {"anchor_type": "tbtc"},
            "logging": {"level": "DEBUG"},
        })

        assert config.ledger.anchor_type == "tbtc"
        assert config.ledger.anchor_branch_label == "btc_anchor_branch"
        assert config.logging.level == "DEBUG"
        assert config.normalizer.proof_type == "Chainpoint"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "chainproof.yaml"
        path.write_text(
            "ledger:\n"
            "  anchor_branch_label: tbtc_anchor_branch\n"
            "  anchor_type: tbtc\n"
            "normalizer:\n"
            "  proof_type: Chainpoint\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.ledger.anchor_branch_label == "tbtc_anchor_branch"
        assert config.ledger.anchor_type == "tbtc"

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RuntimeConfig.from_yaml(path).ledger == LedgerConfig()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CHAINPROOF_LEDGER_LABEL", "eth_anchor_branch")
        monkeypatch.setenv("CHAINPROOF_LEDGER_ANCHOR_TYPE", "eth")
        monkeypatch.setenv("CHAINPROOF_LOG_LEVEL", "WARNING")

        config = RuntimeConfig.from_env()

        assert config.ledger.anchor_branch_label == "eth_anchor_branch"
        assert config.ledger.anchor_type == "eth"
        assert config.logging.level == "WARNING"

    def test_with_env_overrides(self, monkeypatch):
        base = RuntimeConfig.from_dict({"ledger": {"anchor_type": "tbtc"}})
        monkeypatch.setenv("CHAINPROOF_PROOF_TYPE", "OtherProof")

        config = base.with_env_overrides()

        assert config.normalizer.proof_type == "OtherProof"
        assert config.ledger.anchor_type == "tbtc"
        # original untouched
        assert base.normalizer.proof_type == "Chainpoint"

    def test_with_env_overrides_without_env(self):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({"ledger": {"anchor_type": "tbtc"}, "logging": {"level": "DEBUG"}})
        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_default_config_singleton(self):
        first = get_default_config()
        assert get_default_config() is first

        custom = RuntimeConfig.from_dict({"ledger": {"anchor_type": "eth"}})
        set_default_config(custom)
        assert get_default_config() is custom


class TestErrors:
    """Tests for exceptions and the error model."""

    @pytest.mark.parametrize("exc, code", [
        (InvalidArgumentException("bad arg", argument="proofs"), ErrorCodes.INVALID_ARGUMENT),
        (UnknownProofFormatException(), ErrorCodes.UNKNOWN_PROOF_FORMAT),
        (SchemaValidationException("bad", field_path="hash"), ErrorCodes.SCHEMA_VALIDATION_ERROR),
        (MalformedLedgerBranchException("bad", hash_id_node="n", label="l"), ErrorCodes.MALFORMED_LEDGER_BRANCH),
    ])
    def test_codes(self, exc, code):
        assert isinstance(exc, ChainproofException)
        assert exc.code == code
        assert not exc.retryable

    def test_default_unknown_format_message(self):
        assert str(UnknownProofFormatException()) == "unknown proof format"

    def test_to_error_model_and_back(self):
        exc = MalformedLedgerBranchException("no anchors", hash_id_node="n1", label="btc_anchor_branch")

        model = exc.to_error_model()

        assert isinstance(model, ProofError)
        assert model.code == ErrorCodes.MALFORMED_LEDGER_BRANCH
        assert model.details == {"hash_id_node": "n1", "label": "btc_anchor_branch"}

        again = model.to_exception()
        assert again.code == exc.code
        assert again.message == "no anchors"

    def test_repr(self):
        exc = InvalidArgumentException("proofs arg must be an Array")
        assert repr(exc) == "InvalidArgumentException(code='INVALID_ARGUMENT', message='proofs arg must be an Array')"
