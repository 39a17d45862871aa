"""
Module 01 - Proof Schemas
File: errors.py

Purpose: Error taxonomy for proof intake and restructuring.
Defines both a Pydantic model for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Argument & Shape Errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"

    # Proof Format Errors
    UNKNOWN_PROOF_FORMAT = "UNKNOWN_PROOF_FORMAT"

    # Tree Structure Errors
    MALFORMED_LEDGER_BRANCH = "MALFORMED_LEDGER_BRANCH"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class ProofError(BaseModel):
    """
    Error model for structured error communication.

    Used where an error has to be reported as data (e.g. CLI JSON output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.UNKNOWN_PROOF_FORMAT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ChainproofException":
        """Convert this error model to a raisable exception."""
        return ChainproofException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ChainproofException(Exception):
    """
    Base exception for all chainproof errors.

    Carries structured error information and can be converted
    to a ProofError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "CHAINPROOF_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ProofError:
        """Convert this exception to a ProofError model."""
        return ProofError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidArgumentException(ChainproofException):
    """Raised when an operation receives an argument of the wrong shape."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if argument:
            full_details["argument"] = argument
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ARGUMENT,
            details=full_details,
            retryable=False,
        )


class UnknownProofFormatException(ChainproofException):
    """Raised when a proof matches none of the supported encodings."""

    def __init__(
        self,
        message: str = "unknown proof format",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.UNKNOWN_PROOF_FORMAT,
            details=details,
            retryable=False,
        )


class SchemaValidationException(ChainproofException):
    """Raised when decoded proof data does not fit the proof schema."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class MalformedLedgerBranchException(ChainproofException):
    """Raised when a ledger anchor branch carries no anchor array at all."""

    def __init__(
        self,
        message: str,
        hash_id_node: str | None = None,
        label: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if hash_id_node:
            full_details["hash_id_node"] = hash_id_node
        if label:
            full_details["label"] = label
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_LEDGER_BRANCH,
            details=full_details,
            retryable=False,
        )
