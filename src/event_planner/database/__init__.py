"""Database module for the event planner.

This module provides:
- SQLAlchemy async engine and session factory construction
- The stored event model
- A generic document collection used as the storage boundary
"""

from event_planner.database.connection import (
    create_engine,
    create_session_factory,
    create_tables,
    drop_tables,
    open_session,
)
from event_planner.database.models import Base, EventRecord
from event_planner.database.collection import DocumentCollection

__all__ = [
    # Connection
    "create_engine",
    "create_session_factory",
    "create_tables",
    "drop_tables",
    "open_session",
    # Models
    "Base",
    "EventRecord",
    # Storage
    "DocumentCollection",
]
