import logging
from sqlalchemy import (
    Table,
    Column,
    String,
    Text,
    DateTime,
    event,
)
from sqlalchemy.orm import registry
from tracking.domain import model

logger = logging.getLogger(__name__)

# SQLAlchemy 2.0 pattern: use registry
mapper_registry = registry()
metadata = mapper_registry.metadata

tracking_numbers = Table(
    "tracking_numbers",
    metadata,
    Column("tracking_id", String(36), primary_key=True),
    Column("tracking_code", String(32), unique=True, nullable=False, index=True),
    Column("customer_name", Text, nullable=False),
    Column("delivery_address", Text, nullable=False),
    Column("package_weight", Text),
    Column("service_type", Text, nullable=False, server_default=model.DEFAULT_SERVICE_TYPE),
    Column("reference_number", Text),
    Column("estimated_delivery", Text),
    Column("current_status", Text, nullable=False, server_default=model.DEFAULT_STATUS),
    Column("current_location", Text, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

# No foreign key: an event may reference a record that no longer exists
tracking_events = Table(
    "tracking_events",
    metadata,
    Column("event_id", String(36), primary_key=True),
    Column("tracking_number_id", String(36), nullable=False, index=True),
    Column("status", Text, nullable=False),
    Column("location", Text, nullable=False),
    Column("description", Text),
    Column("timestamp", Text, nullable=False),
    Column("created_at", DateTime, nullable=False),
)


def start_mappers():
    if mapper_registry.mappers:
        logger.debug("Mappers already started")
        return
    logger.info("Starting mappers")
    mapper_registry.map_imperatively(model.TrackingRecord, tracking_numbers)
    mapper_registry.map_imperatively(model.TrackingEvent, tracking_events)


@event.listens_for(model.TrackingRecord, "load")
def receive_load(record, _):
    record.domain_events = []
