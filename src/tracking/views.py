"""
Views for read operations - separate from command/write path.
Following Cosmic Python pattern: views query the repositories directly and
never go through the message bus.

Statistics are computed by scanning every record on each call; there are
no cached counters.
"""
import logging
from typing import Dict, List, Optional
from datetime import datetime

from tracking.domain import model
from tracking.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

IN_TRANSIT_MARKERS = ("Transit", "Processing", "Received")
DELIVERED_STATUS = "Delivered"


def get_tracking_by_code(tracking_code: str, uow: AbstractUnitOfWork) -> Optional[model.TrackingWithEvents]:
    """
    Look up a record by its human-facing tracking code (exact, case-sensitive).

    Returns:
        The record with its history newest first, or None when no record
        carries that code
    """
    with uow:
        record = uow.trackings.get_by_code(tracking_code)
        if record is None:
            logger.info(f"Tracking code {tracking_code} not found")
            return None
        history = uow.events.list_for(record.tracking_id)

    return model.TrackingWithEvents(record=record, events=history)


def list_trackings(uow: AbstractUnitOfWork) -> List[model.TrackingRecord]:
    with uow:
        return uow.trackings.list()


def list_events(tracking_number_id: str, uow: AbstractUnitOfWork) -> List[model.TrackingEvent]:
    with uow:
        return uow.events.list_for(tracking_number_id)


def is_in_transit(status: str) -> bool:
    return any(marker in status for marker in IN_TRANSIT_MARKERS)


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def get_stats(uow: AbstractUnitOfWork, now: datetime = None) -> Dict[str, int]:
    """
    Summary counts over all records.

    - total_packages: every record
    - in_transit: status contains "Transit", "Processing" or "Received"
    - delivered: status is exactly "Delivered"
    - this_month: created on or after the first day of the current month
    """
    month_start = start_of_month(now or datetime.now())

    with uow:
        records = uow.trackings.list()

    return {
        "total_packages": len(records),
        "in_transit": sum(1 for r in records if is_in_transit(r.current_status)),
        "delivered": sum(1 for r in records if r.current_status == DELIVERED_STATUS),
        "this_month": sum(1 for r in records if r.created_at >= month_start),
    }
