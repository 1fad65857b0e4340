"""Domain events for the tracking service."""

from dataclasses import dataclass


@dataclass
class Event:
    """Base class for all domain events."""
    pass


@dataclass
class TrackingCreated(Event):
    """Event raised when a tracking record and its seed event have been stored."""
    tracking_id: str
    tracking_code: str
    status: str
    location: str


@dataclass
class TrackingStatusChanged(Event):
    """Event raised when a new history entry moved a record's current status."""
    tracking_id: str
    event_id: str
    status: str
    location: str
