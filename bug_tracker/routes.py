"""
Bug report API routes.

REST endpoints for bug CRUD and status transitions.
All endpoints are prefixed with /api/bugs.

Responses use one envelope: {"success": true, "data": ...} on success and
{"success": false, "error": ..., "details": [...]} on failure.
"""

from typing import Any, Dict, List, Optional

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from .db.base import get_db
from .db.models import BugModel
from .db.services import BugService, InvalidBugIdError
from .policy import validate_for_create, validate_for_update
from .schemas.bug import BugPriority, BugStatus, ContractResult

logger = structlog.get_logger()

router = APIRouter(prefix="/api/bugs", tags=["bugs"])


class ValidationFailed(HTTPException):
    """400 carrying the contract's error messages."""

    def __init__(self, errors: List[str]):
        super().__init__(status_code=400, detail="Validation failed")
        self.errors = errors


def _get_or_404(service: BugService, bug_id: str) -> BugModel:
    try:
        bug = service.get(bug_id)
    except InvalidBugIdError:
        raise HTTPException(status_code=400, detail="Invalid ID format")

    if not bug:
        raise HTTPException(status_code=404, detail="Bug not found")

    return bug


def _apply_update(
    service: BugService, bug: BugModel, patch: Dict[str, Any]
) -> Dict[str, Any]:
    result: ContractResult = validate_for_update(bug.to_dict(), patch)
    if result.rejected:
        logger.info(
            "Bug update rejected",
            bug_id=str(bug.id),
            codes=[c.value for c in result.codes()],
        )
        raise ValidationFailed(result.errors)

    previous_status = bug.status
    bug = service.update(bug, result.accepted)
    if bug.status != previous_status:
        logger.info(
            "Bug status changed",
            bug_id=str(bug.id),
            from_status=previous_status,
            to_status=bug.status,
        )

    return {"success": True, "data": bug.to_dict()}


@router.get("")
async def list_bugs(
    status: Optional[BugStatus] = None,
    priority: Optional[BugPriority] = None,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """List bugs, newest first, with optional filtering."""
    service = BugService(db)
    bugs = service.list(
        status=status.value if status else None,
        priority=priority.value if priority else None,
        limit=limit,
        offset=offset,
    )
    return {
        "success": True,
        "count": len(bugs),
        "data": [b.to_dict() for b in bugs],
    }


@router.get("/{bug_id}")
async def get_bug(bug_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Get a bug by ID."""
    bug = _get_or_404(BugService(db), bug_id)
    return {"success": True, "data": bug.to_dict()}


@router.post("", status_code=201)
async def create_bug(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Create a new bug report."""
    result = validate_for_create(payload)
    if result.rejected:
        logger.info(
            "Bug submission rejected", codes=[c.value for c in result.codes()]
        )
        raise ValidationFailed(result.errors)

    service = BugService(db)
    bug = service.create(result.accepted)
    logger.info(
        "Bug created",
        bug_id=str(bug.id),
        status=bug.status,
        priority=bug.priority,
    )
    return {"success": True, "data": bug.to_dict()}


@router.put("/{bug_id}")
async def update_bug(
    bug_id: str,
    patch: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Update title, description, status or priority of a bug."""
    service = BugService(db)
    bug = _get_or_404(service, bug_id)
    return _apply_update(service, bug, patch)


@router.patch("/{bug_id}/status")
async def update_bug_status(
    bug_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Move a bug to another status."""
    service = BugService(db)
    bug = _get_or_404(service, bug_id)

    if not payload.get("status"):
        raise ValidationFailed(["Status is required"])

    return _apply_update(service, bug, {"status": payload["status"]})


@router.delete("/{bug_id}")
async def delete_bug(bug_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Delete a bug."""
    service = BugService(db)
    bug = _get_or_404(service, bug_id)
    service.delete(bug)
    logger.info("Bug deleted", bug_id=bug_id)
    return {"success": True, "message": "Bug deleted successfully"}
