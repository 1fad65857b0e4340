from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import List, Optional

from tracking.domain.events import TrackingCreated, TrackingStatusChanged


DEFAULT_SERVICE_TYPE = "Standard Ground"
DEFAULT_STATUS = "Package Received"

REQUIRED_TRACKING_FIELDS = ("customer_name", "delivery_address", "current_location")
REQUIRED_EVENT_FIELDS = ("tracking_number_id", "status", "location")


class InvalidTrackingInput(ValueError):
    """Raised when a tracking record or event is missing required fields."""

    def __init__(self, missing: List[str]):
        self.fields = list(missing)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


def missing_fields(data, required) -> List[str]:
    """Names of required attributes that are absent or blank on data."""
    missing = []
    for name in required:
        value = getattr(data, name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def format_display_timestamp(moment: datetime) -> str:
    """Human display form, e.g. 'March 22, 2024 - 2:30 PM'."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%B} {moment.day}, {moment.year} - {hour}:{moment.minute:02d} {suffix}"


@dataclass
class TrackingEvent:
    event_id: str
    tracking_number_id: str   # weak reference to TrackingRecord.tracking_id
    status: str
    location: str
    timestamp: str            # display string, not a sort key
    created_at: datetime
    description: Optional[str] = None

    def __hash__(self):
        return hash(self.event_id)


@dataclass
class TrackingRecord:
    tracking_id: str
    tracking_code: str
    customer_name: str
    delivery_address: str
    current_location: str
    created_at: datetime
    updated_at: datetime
    package_weight: Optional[str] = None
    service_type: str = DEFAULT_SERVICE_TYPE
    reference_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    current_status: str = DEFAULT_STATUS
    domain_events: List = field(default_factory=list, init=False, compare=False, repr=False)

    def __hash__(self):
        return hash(self.tracking_id)

    def open(self, event_id: str) -> TrackingEvent:
        """
        Build the seed history entry for a freshly created record.

        The seed mirrors the record's current status and location, so a
        record always has at least one event.
        """
        self.domain_events.append(
            TrackingCreated(
                tracking_id=self.tracking_id,
                tracking_code=self.tracking_code,
                status=self.current_status,
                location=self.current_location,
            )
        )
        return TrackingEvent(
            event_id=event_id,
            tracking_number_id=self.tracking_id,
            status=self.current_status,
            location=self.current_location,
            description=f"Package has been {self.current_status.lower()}",
            timestamp=format_display_timestamp(self.created_at),
            created_at=self.created_at,
        )

    def record_event(self, event: TrackingEvent, now: datetime) -> None:
        """Propagate a newly appended history entry onto the record."""
        self.current_status = event.status
        self.current_location = event.location
        self.updated_at = now
        self.domain_events.append(
            TrackingStatusChanged(
                tracking_id=self.tracking_id,
                event_id=event.event_id,
                status=event.status,
                location=event.location,
            )
        )

    def apply(self, patch: "TrackingPatch", now: datetime) -> None:
        """Merge the provided patch fields; history is left untouched."""
        for name, value in patch.changes().items():
            setattr(self, name, value)
        self.updated_at = now


@dataclass(frozen=True)
class TrackingWithEvents:
    """A record plus its history, newest first."""
    record: TrackingRecord
    events: List[TrackingEvent]


@dataclass
class TrackingPatch:
    customer_name: Optional[str] = None
    delivery_address: Optional[str] = None
    package_weight: Optional[str] = None
    service_type: Optional[str] = None
    reference_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    current_status: Optional[str] = None
    current_location: Optional[str] = None

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def blanked_required(self) -> List[str]:
        """Required fields the patch would set to an empty value."""
        changes = self.changes()
        return [name for name in REQUIRED_TRACKING_FIELDS if name in changes and not changes[name].strip()]


@dataclass
class EventPatch:
    status: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    timestamp: Optional[str] = None

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def apply_to(self, event: TrackingEvent) -> None:
        for name, value in self.changes().items():
            setattr(event, name, value)
