"""
Validation policy for bug reports.
"""

from .bug_contract import can_transition, validate_for_create, validate_for_update
from .field_validators import (
    validate_description,
    validate_priority,
    validate_reporter,
    validate_status,
    validate_title,
)

__all__ = [
    "can_transition",
    "validate_description",
    "validate_for_create",
    "validate_for_update",
    "validate_priority",
    "validate_reporter",
    "validate_status",
    "validate_title",
]
