"""
SQLAlchemy models for Bug Tracker.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, DateTime, Enum, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BugModel(Base):
    """SQLAlchemy model for bug reports."""

    __tablename__ = "bugs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        Enum("open", "in-progress", "resolved", name="bug_status"),
        nullable=False,
        default="open",
        index=True,
    )
    priority = Column(
        Enum("low", "medium", "high", "critical", name="bug_priority"),
        nullable=False,
        default="medium",
        index=True,
    )
    reported_by = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now
    )

    __table_args__ = (
        Index("ix_bugs_created_at", "created_at"),
        Index("ix_bugs_status_priority", "status", "priority"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to its wire representation."""
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "reportedBy": self.reported_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
