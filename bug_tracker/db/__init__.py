"""
Database package for Bug Tracker.
"""

from .base import Base, get_db, get_engine, get_session_local
from .models import BugModel

__all__ = [
    "Base",
    "BugModel",
    "get_db",
    "get_engine",
    "get_session_local",
]
