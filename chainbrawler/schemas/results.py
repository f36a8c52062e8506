"""
Structured result types returned by validation and by every tracked action.

Actions never raise for expected failures; they return an OperationResult
carrying the reason and a stable error code.
"""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar('T')


@dataclass
class OperationResult(Generic[T]):
    """
    Uniform outcome of a tracked action.

    ``code`` is one of OperationErrorCodes; ``ledger_code`` is the numeric
    contract error code when the ledger reported one.
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[str] = None
    ledger_code: Optional[int] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> 'OperationResult[T]':
        """Create successful result."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        code: Optional[str] = None,
        ledger_code: Optional[int] = None,
    ) -> 'OperationResult[T]':
        """Create failure result with error information."""
        return cls(success=False, error=error, code=code, ledger_code=ledger_code)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation predicate; ``reason`` is set only when invalid."""
    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: str) -> 'ValidationResult':
        return cls(valid=False, reason=reason)

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class FightSummaryValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


class OperationErrorCodes:
    """Standardized error codes carried by failed OperationResults."""

    # Rejected before any ledger call
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    NO_PLAYER = "NO_PLAYER"

    # Domain precondition checked against store or ledger
    PRECONDITION_FAILED = "PRECONDITION_FAILED"

    # Ledger reported a failure
    LEDGER_ERROR = "LEDGER_ERROR"
