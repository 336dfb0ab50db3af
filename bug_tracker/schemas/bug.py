"""
Bug report enums and validation result models.

These define the allowed values for status and priority, the stable error
codes produced by field validation, and the result objects returned by the
validation contract.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BugStatus(str, Enum):
    """Workflow stage of a bug report."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class BugPriority(str, Enum):
    """Urgency classification of a bug report."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode(str, Enum):
    """Stable codes for validation failures."""

    REQUIRED = "REQUIRED"
    TOO_SHORT = "TOO_SHORT"
    TOO_LONG = "TOO_LONG"
    INVALID_ENUM = "INVALID_ENUM"
    IMMUTABLE_FIELD = "IMMUTABLE_FIELD"


class FieldResult(BaseModel):
    """Verdict of a single field validator."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    code: Optional[ErrorCode] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "FieldResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, code: ErrorCode, message: str) -> "FieldResult":
        return cls(valid=False, code=code, message=message)


class FieldViolation(BaseModel):
    """A failed rule attributed to a field of the submitted record."""

    model_config = ConfigDict(frozen=True)

    field: str
    code: ErrorCode
    message: str


class ContractResult(BaseModel):
    """
    Outcome of validating a submission.

    Either ``accepted`` holds the normalized record and ``errors`` is empty,
    or ``accepted`` is None and ``errors`` lists every failing message in
    field order.
    """

    accepted: Optional[Dict[str, Any]] = None
    errors: List[str] = Field(default_factory=list)
    violations: List[FieldViolation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def rejected(self) -> bool:
        return bool(self.errors)

    @classmethod
    def accept(cls, record: Dict[str, Any]) -> "ContractResult":
        return cls(accepted=record)

    @classmethod
    def reject(cls, violations: List[FieldViolation]) -> "ContractResult":
        return cls(
            accepted=None,
            errors=[v.message for v in violations],
            violations=violations,
        )

    def codes(self) -> List[ErrorCode]:
        """Return the error codes in the same order as ``errors``."""
        return [v.code for v in self.violations]
