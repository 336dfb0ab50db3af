"""
Database services for Bug Tracker.

Services only persist records that have already passed the validation
contract; they do not validate field content themselves.
"""

import uuid
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from .models import BugModel

# Wire name -> column for fields an update may write.
MUTABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
}


class InvalidBugIdError(ValueError):
    """Raised when a bug id is not a well-formed UUID."""

    def __init__(self, bug_id: Any):
        self.bug_id = bug_id
        self.message = f"Invalid ID format: {bug_id!r}"
        super().__init__(self.message)


def parse_bug_id(bug_id: Any) -> uuid.UUID:
    """Parse a bug id, raising InvalidBugIdError if it is not a UUID."""
    if isinstance(bug_id, uuid.UUID):
        return bug_id
    try:
        return uuid.UUID(str(bug_id))
    except ValueError as e:
        raise InvalidBugIdError(bug_id) from e


class BugService:
    """Service for managing bug reports in the database."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, accepted: Mapping[str, Any]) -> BugModel:
        """Persist an accepted record. id and timestamps are assigned here."""
        db_bug = BugModel(
            title=accepted["title"],
            description=accepted["description"],
            status=accepted["status"],
            priority=accepted["priority"],
            reported_by=accepted["reportedBy"],
        )

        self.db.add(db_bug)
        self.db.commit()
        self.db.refresh(db_bug)
        return db_bug

    def get(self, bug_id: Any) -> Optional[BugModel]:
        """Get a bug by ID."""
        bug_uuid = parse_bug_id(bug_id)
        return self.db.query(BugModel).filter(BugModel.id == bug_uuid).first()

    def list(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[BugModel]:
        """List bugs, newest first, with optional filtering."""
        query = self.db.query(BugModel)

        if status:
            query = query.filter(BugModel.status == status)
        if priority:
            query = query.filter(BugModel.priority == priority)

        return (
            query.order_by(desc(BugModel.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(BugModel).count()

    def update(self, bug: BugModel, accepted: Mapping[str, Any]) -> BugModel:
        """
        Apply an accepted update record to ``bug``.

        Only title, description, status and priority are written; id,
        created_at and reported_by are never touched.
        """
        changed: Dict[str, Any] = {}
        for field, column in MUTABLE_COLUMNS.items():
            if field in accepted and getattr(bug, column) != accepted[field]:
                changed[column] = accepted[field]

        for column, value in changed.items():
            setattr(bug, column, value)

        self.db.commit()
        self.db.refresh(bug)
        return bug

    def delete(self, bug: BugModel) -> None:
        """Delete a bug."""
        self.db.delete(bug)
        self.db.commit()
