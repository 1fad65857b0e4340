"""Commands for the tracking service."""

from dataclasses import dataclass, field
from typing import Optional

from tracking.domain import model


@dataclass
class Command:
    """Base class for all commands."""
    pass


@dataclass
class CreateTracking(Command):
    """Command to create a tracking record (code and timestamps are assigned by the store)."""
    customer_name: str
    delivery_address: str
    current_location: str
    package_weight: Optional[str] = None
    service_type: str = model.DEFAULT_SERVICE_TYPE
    reference_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    current_status: str = model.DEFAULT_STATUS


@dataclass
class UpdateTracking(Command):
    tracking_id: str
    patch: model.TrackingPatch = field(default_factory=model.TrackingPatch)


@dataclass
class DeleteTracking(Command):
    tracking_id: str


@dataclass
class AddTrackingEvent(Command):
    """Command to append a history entry and move the owning record's status."""
    tracking_number_id: str
    status: str
    location: str
    description: Optional[str] = None
    timestamp: Optional[str] = None  # display string; formatted from "now" when omitted


@dataclass
class UpdateTrackingEvent(Command):
    event_id: str
    patch: model.EventPatch = field(default_factory=model.EventPatch)


@dataclass
class DeleteTrackingEvent(Command):
    event_id: str
