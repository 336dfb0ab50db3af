"""
Schemas for Bug Tracker.
"""

from .bug import (
    BugPriority,
    BugStatus,
    ContractResult,
    ErrorCode,
    FieldResult,
    FieldViolation,
)

__all__ = [
    "BugPriority",
    "BugStatus",
    "ContractResult",
    "ErrorCode",
    "FieldResult",
    "FieldViolation",
]
