"""
Field validators for bug reports.

Each validator checks one field against static rules and returns a
FieldResult. Validators are pure: no I/O, no shared state, and they never
raise on malformed input (a number where text is expected is classified as
a REQUIRED failure).

Rules:
- title: required text, 3-100 characters after trimming
- description: required text, at least 10 characters after trimming
- status: optional; when present one of open, in-progress, resolved
- priority: optional; when present one of low, medium, high, critical
- reportedBy: required text, non-blank after trimming

Rule order per field is REQUIRED -> TOO_SHORT/TOO_LONG -> INVALID_ENUM and
only the first failing rule is reported.
"""

from __future__ import annotations

import re
from typing import Any

from bug_tracker.schemas.bug import BugPriority, BugStatus, ErrorCode, FieldResult

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10

DEFAULT_STATUS = BugStatus.OPEN.value
DEFAULT_PRIORITY = BugPriority.MEDIUM.value

# Ordered for error messages
ALLOWED_STATUSES = tuple(s.value for s in BugStatus)
ALLOWED_PRIORITIES = tuple(p.value for p in BugPriority)

# Whitespace plus the byte-order mark, which str.strip() keeps.
_EDGE_WHITESPACE = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")


def trim(value: str) -> str:
    """Strip surrounding whitespace, including U+FEFF."""
    return _EDGE_WHITESPACE.sub("", value)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _validate_choice(value: Any, allowed: tuple, label: str) -> FieldResult:
    """Absent values pass; anything else must be a member of ``allowed``."""
    if _is_blank(value):
        return FieldResult.ok()

    if not isinstance(value, str) or value not in allowed:
        return FieldResult.fail(
            ErrorCode.INVALID_ENUM,
            f"{label} must be one of: {', '.join(allowed)}",
        )

    return FieldResult.ok()


def validate_title(value: Any) -> FieldResult:
    """Validate bug title."""
    if not _is_text(value):
        return FieldResult.fail(
            ErrorCode.REQUIRED, "Title is required and must be a string"
        )

    trimmed = trim(value)
    if len(trimmed) < TITLE_MIN_LENGTH:
        return FieldResult.fail(
            ErrorCode.TOO_SHORT,
            f"Title must be at least {TITLE_MIN_LENGTH} characters",
        )
    if len(trimmed) > TITLE_MAX_LENGTH:
        return FieldResult.fail(
            ErrorCode.TOO_LONG,
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters",
        )

    return FieldResult.ok()


def validate_description(value: Any) -> FieldResult:
    """Validate bug description. There is no upper bound."""
    if not _is_text(value):
        return FieldResult.fail(
            ErrorCode.REQUIRED, "Description is required and must be a string"
        )

    if len(trim(value)) < DESCRIPTION_MIN_LENGTH:
        return FieldResult.fail(
            ErrorCode.TOO_SHORT,
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters",
        )

    return FieldResult.ok()


def validate_status(value: Any) -> FieldResult:
    """Validate bug status. Absent status defaults to 'open' downstream."""
    return _validate_choice(value, ALLOWED_STATUSES, "Status")


def validate_priority(value: Any) -> FieldResult:
    """Validate bug priority. Absent priority defaults to 'medium' downstream."""
    return _validate_choice(value, ALLOWED_PRIORITIES, "Priority")


def validate_reporter(value: Any) -> FieldResult:
    """Validate reporter name. Never optional, never defaulted."""
    if not isinstance(value, str) or not trim(value):
        return FieldResult.fail(ErrorCode.REQUIRED, "Reporter name is required")

    return FieldResult.ok()

