"""
Bug Tracker

Bug report tracking service with a validated create/update contract.
"""

import importlib.metadata

__version__ = importlib.metadata.version("bug-tracker")

from .policy import validate_for_create, validate_for_update
from .schemas.bug import BugPriority, BugStatus, ContractResult, ErrorCode

__all__ = [
    "BugPriority",
    "BugStatus",
    "ContractResult",
    "ErrorCode",
    "validate_for_create",
    "validate_for_update",
]
