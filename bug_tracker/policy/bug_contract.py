"""
Validation contract for bug reports.

Decides whether a submitted record may be created, and what an update may
change. This is a pure decision layer: no DB access, no FastAPI request
objects, no logging. Every failure is returned as data in a ContractResult;
nothing here raises for malformed input.

Create:
- all five field validators run, in the order title, description, status,
  priority, reportedBy, and every failing message is collected
- accepted records are normalized: text fields trimmed, status defaults to
  'open', priority defaults to 'medium'
- id and createdAt are never taken from the caller

Update:
- id, createdAt and reportedBy are rejected with IMMUTABLE_FIELD
- only the mutable fields present in the patch are validated and applied
- all or nothing: a single failure leaves the existing record untouched

Status transitions are unrestricted: any status may follow any other.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from bug_tracker.schemas.bug import (
    ContractResult,
    ErrorCode,
    FieldResult,
    FieldViolation,
)

from .field_validators import (
    ALLOWED_STATUSES,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    trim,
    validate_description,
    validate_priority,
    validate_reporter,
    validate_status,
    validate_title,
)

Validator = Callable[[Any], FieldResult]

# Evaluation order of the create path; also the order of reported errors.
CREATE_VALIDATORS: Tuple[Tuple[str, Validator], ...] = (
    ("title", validate_title),
    ("description", validate_description),
    ("status", validate_status),
    ("priority", validate_priority),
    ("reportedBy", validate_reporter),
)

UPDATE_VALIDATORS: Tuple[Tuple[str, Validator], ...] = (
    ("title", validate_title),
    ("description", validate_description),
    ("status", validate_status),
    ("priority", validate_priority),
)

IMMUTABLE_FIELDS: Tuple[str, ...] = ("id", "createdAt", "reportedBy")

TEXT_FIELDS = frozenset({"title", "description", "reportedBy"})
DEFAULTED_FIELDS = {"status": DEFAULT_STATUS, "priority": DEFAULT_PRIORITY}

# Every status is reachable from every status.
STATUS_TRANSITIONS: Dict[str, frozenset] = {
    status: frozenset(ALLOWED_STATUSES) for status in ALLOWED_STATUSES
}


def _as_mapping(record: Any) -> Mapping[str, Any]:
    """Treat anything that is not a mapping as an empty record."""
    return record if isinstance(record, Mapping) else {}


def _run(
    record: Mapping[str, Any], validators: Tuple[Tuple[str, Validator], ...]
) -> List[FieldViolation]:
    violations = []
    for field, validator in validators:
        result = validator(record.get(field))
        if not result.valid:
            violations.append(
                FieldViolation(field=field, code=result.code, message=result.message)
            )
    return violations


def _normalize(field: str, value: Any) -> Any:
    if field in TEXT_FIELDS:
        return trim(value)
    return value


def can_transition(current: Optional[str], target: str) -> bool:
    """Return True if a bug in ``current`` status may move to ``target``."""
    if current is None:
        return target in ALLOWED_STATUSES
    return target in STATUS_TRANSITIONS.get(current, frozenset())


def validate_for_create(submission: Any) -> ContractResult:
    """
    Validate a complete submission for creation.

    Args:
        submission: Mapping of submitted fields (wire names, e.g. reportedBy)

    Returns:
        ContractResult with the normalized record, or with every error
        message in field order and no record.
    """
    record = _as_mapping(submission)

    violations = _run(record, CREATE_VALIDATORS)
    if violations:
        return ContractResult.reject(violations)

    accepted: Dict[str, Any] = {}
    for field, _ in CREATE_VALIDATORS:
        value = record.get(field)
        if field in DEFAULTED_FIELDS and not value:
            value = DEFAULTED_FIELDS[field]
        accepted[field] = _normalize(field, value)

    return ContractResult.accept(accepted)


def validate_for_update(existing: Any, patch: Any) -> ContractResult:
    """
    Validate a partial update against an existing record.

    Args:
        existing: The current record (wire names). A non-mapping is
            treated as an empty record.
        patch: Mapping of fields to change

    Returns:
        ContractResult whose accepted record is a copy of ``existing`` with
        the patch overlaid, or the full error list with no record.
    """
    current = _as_mapping(existing)
    changes = _as_mapping(patch)

    violations = [
        FieldViolation(
            field=field,
            code=ErrorCode.IMMUTABLE_FIELD,
            message=f"Field '{field}' cannot be modified after creation",
        )
        for field in IMMUTABLE_FIELDS
        if field in changes
    ]

    present = tuple((f, v) for f, v in UPDATE_VALIDATORS if f in changes)
    violations.extend(_run(changes, present))

    if violations:
        return ContractResult.reject(violations)

    accepted = dict(current)
    for field, _ in present:
        value = changes[field]
        # An absent status or priority keeps the stored value.
        if field in DEFAULTED_FIELDS and not value:
            continue
        accepted[field] = _normalize(field, value)

    return ContractResult.accept(accepted)
