"""Concepts: self-contained modules that each own one entity type."""

from event_planner.concepts.event import EventStore

__all__ = [
    "EventStore",
]
