"""Event planner data layer: events, RSVPs, and address geocoding."""

__version__ = "0.1.0"
