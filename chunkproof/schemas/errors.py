"""
Schemas - Errors
File: errors.py

Purpose: Error taxonomy for the chunk hashing and Merkle reduction pipeline.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the pipeline."""

    # Argument Errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    DIGEST_FORMAT_ERROR = "DIGEST_FORMAT_ERROR"

    # Source Errors
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ChunkproofError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI to emit machine-readable failures, and by callers that
    prefer passing errors around as values instead of exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_ARGUMENT],
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

    def to_exception(self) -> "ChunkproofException":
        """Convert this error model to the matching exception."""
        exc_class = _EXCEPTIONS_BY_CODE.get(self.code)
        if exc_class is None:
            return ChunkproofException(
                code=self.code,
                message=self.message,
                details=self.details,
                retryable=self.retryable,
            )
        return exc_class(message=self.message, details=dict(self.details))


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ChunkproofException(Exception):
    """
    Base exception for all chunkproof errors.

    This exception carries structured error information and can be
    converted to/from ChunkproofError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "CHUNKPROOF_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ChunkproofError:
        """Convert this exception to a ChunkproofError model."""
        return ChunkproofError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidArgumentException(ChunkproofException):
    """
    Exception raised when a caller-supplied argument is unusable.

    Covers bad chunk sizes, non-sequence or empty reduction input,
    and leaf elements of the wrong type.
    """

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.INVALID_ARGUMENT,
    ) -> None:
        full_details = details or {}
        if argument:
            full_details["argument"] = argument
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class DigestFormatException(InvalidArgumentException):
    """Exception raised when a value does not decode to a 32-byte digest."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        super().__init__(
            message=message,
            details=full_details,
            code=ErrorCodes.DIGEST_FORMAT_ERROR,
        )


class SourceUnavailableException(ChunkproofException):
    """
    Exception raised when the byte source cannot be opened or read.

    The underlying OSError is kept as ``__cause__``. Marked retryable since
    transient I/O failures are the only case where a retry can succeed.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if source:
            full_details["source"] = source
        super().__init__(
            message=message,
            code=ErrorCodes.SOURCE_UNAVAILABLE,
            details=full_details,
            retryable=True,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[ChunkproofException]] = {
    ErrorCodes.INVALID_ARGUMENT: InvalidArgumentException,
    ErrorCodes.DIGEST_FORMAT_ERROR: DigestFormatException,
    ErrorCodes.SOURCE_UNAVAILABLE: SourceUnavailableException,
}
