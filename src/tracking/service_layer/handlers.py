import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from tracking.domain import commands, events, model
from tracking.domain.codes import generate_tracking_code
from tracking.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 10


class TrackingCodeUnavailable(Exception):
    """Raised when no unused tracking code could be generated."""


def create_tracking(
    command: commands.CreateTracking,
    uow: AbstractUnitOfWork
) -> model.TrackingRecord:
    """
    Create a tracking record together with its seed history event.

    Flow:
    1. Reject input missing customer name, delivery address or location
    2. Pick a tracking code not used by any stored record
    3. Store the record and the seed event in one transaction

    Returns:
        The stored TrackingRecord

    Raises:
        InvalidTrackingInput: If required fields are absent
        TrackingCodeUnavailable: If every generated code collided
    """
    missing = model.missing_fields(command, model.REQUIRED_TRACKING_FIELDS)
    if missing:
        raise model.InvalidTrackingInput(missing)

    logger.info(f"Processing CreateTracking command for customer {command.customer_name}")

    with uow:
        now = datetime.now()
        record = model.TrackingRecord(
            tracking_id=str(uuid4()),
            tracking_code=unused_tracking_code(uow),
            customer_name=command.customer_name,
            delivery_address=command.delivery_address,
            current_location=command.current_location,
            package_weight=command.package_weight,
            service_type=command.service_type or model.DEFAULT_SERVICE_TYPE,
            reference_number=command.reference_number,
            estimated_delivery=command.estimated_delivery,
            current_status=command.current_status or model.DEFAULT_STATUS,
            created_at=now,
            updated_at=now,
        )
        seed_event = record.open(event_id=str(uuid4()))

        uow.trackings.add(record)
        uow.events.add(seed_event)
        uow.commit()

    logger.info(f"Created tracking record {record.tracking_id} with code {record.tracking_code}")
    return record


def unused_tracking_code(uow: AbstractUnitOfWork) -> str:
    for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
        code = generate_tracking_code()
        if uow.trackings.get_by_code(code) is None:
            return code
        logger.warning(f"Tracking code {code} already taken (attempt {attempt})")
    raise TrackingCodeUnavailable(f"No free tracking code after {MAX_CODE_ATTEMPTS} attempts")


def update_tracking(
    command: commands.UpdateTracking,
    uow: AbstractUnitOfWork
) -> Optional[model.TrackingRecord]:
    """
    Merge the provided fields into a record and refresh updated_at.

    No history event is added, even when the patch changes the current
    status or location.
    """
    blanked = command.patch.blanked_required()
    if blanked:
        raise model.InvalidTrackingInput(blanked)

    with uow:
        record = uow.trackings.get(command.tracking_id)
        if record is None:
            logger.info(f"Tracking record {command.tracking_id} not found for update")
            return None

        record.apply(command.patch, datetime.now())
        uow.commit()

    logger.info(f"Updated tracking record {command.tracking_id}: {sorted(command.patch.changes())}")
    return record


def delete_tracking(
    command: commands.DeleteTracking,
    uow: AbstractUnitOfWork
) -> bool:
    """Delete a record and every event that references it."""
    with uow:
        record = uow.trackings.get(command.tracking_id)
        if record is None:
            return False

        removed = uow.events.remove_for(command.tracking_id)
        uow.trackings.remove(record)
        uow.commit()

    logger.info(f"Deleted tracking record {command.tracking_id} and {removed} events")
    return True


def add_tracking_event(
    command: commands.AddTrackingEvent,
    uow: AbstractUnitOfWork
) -> model.TrackingEvent:
    """
    Append a history event and move the owning record's current status and
    location to it.

    An event whose record does not exist is still stored; only the
    propagation step is skipped.
    """
    missing = model.missing_fields(command, model.REQUIRED_EVENT_FIELDS)
    if missing:
        raise model.InvalidTrackingInput(missing)

    with uow:
        now = datetime.now()
        event = model.TrackingEvent(
            event_id=str(uuid4()),
            tracking_number_id=command.tracking_number_id,
            status=command.status,
            location=command.location,
            description=command.description,
            timestamp=command.timestamp or model.format_display_timestamp(now),
            created_at=now,
        )
        uow.events.add(event)

        record = uow.trackings.get(command.tracking_number_id)
        if record is not None:
            record.record_event(event, now)
        else:
            logger.warning(f"Event {event.event_id} references unknown tracking record {command.tracking_number_id}")

        uow.commit()

    logger.info(f"Added event {event.event_id} ({event.status}) to tracking record {command.tracking_number_id}")
    return event


def update_tracking_event(
    command: commands.UpdateTrackingEvent,
    uow: AbstractUnitOfWork
) -> Optional[model.TrackingEvent]:
    """Merge fields into a history event; the owning record is not touched."""
    with uow:
        event = uow.events.get(command.event_id)
        if event is None:
            return None

        command.patch.apply_to(event)
        uow.commit()

    return event


def delete_tracking_event(
    command: commands.DeleteTrackingEvent,
    uow: AbstractUnitOfWork
) -> bool:
    """
    Remove one history event.

    The owning record keeps its current status and location even when the
    newest event is removed.
    """
    with uow:
        event = uow.events.get(command.event_id)
        if event is None:
            return False

        uow.events.remove(event)
        uow.commit()

    logger.info(f"Deleted event {command.event_id} of tracking record {event.tracking_number_id}")
    return True


def log_tracking_created(event: events.TrackingCreated, uow: AbstractUnitOfWork):
    logger.info(
        f"AUDIT tracking created: id={event.tracking_id} code={event.tracking_code} "
        f"status={event.status!r} location={event.location!r}"
    )


def log_status_changed(event: events.TrackingStatusChanged, uow: AbstractUnitOfWork):
    logger.info(
        f"AUDIT status changed: id={event.tracking_id} event={event.event_id} "
        f"status={event.status!r} location={event.location!r}"
    )
