"""Demo tracking records loaded into an empty store at start-up."""

import logging
from datetime import datetime
from uuid import uuid4

from tracking.domain import model
from tracking.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

DEMO_RECORDS = [
    {
        "tracking_code": "MTK123456789",
        "customer_name": "John Smith",
        "delivery_address": "123 Oak Street\nTampa, FL 33601",
        "package_weight": "15.2 lbs",
        "service_type": "Standard Ground",
        "reference_number": "Order #12345",
        "estimated_delivery": "March 25, 2024",
        "current_status": "In Transit",
        "current_location": "Tampa, FL Local Depot",
        "created_at": datetime(2024, 3, 22),
        "updated_at": datetime(2024, 3, 24),
        "events": [
            {
                "status": "Package received at facility",
                "location": "Miami, FL Distribution Center",
                "description": "Your package has been received and is being processed",
                "created_at": datetime(2024, 3, 22, 14, 30),
            },
            {
                "status": "In transit to destination",
                "location": "Orlando, FL Sorting Facility",
                "description": "Package is on its way to the destination city",
                "created_at": datetime(2024, 3, 23, 8, 15),
            },
            {
                "status": "Arrived at local facility",
                "location": "Tampa, FL Local Depot",
                "description": "Package has arrived at the local delivery facility",
                "created_at": datetime(2024, 3, 24, 6, 45),
            },
        ],
    },
    {
        "tracking_code": "MTK987654321",
        "customer_name": "Sarah Johnson",
        "delivery_address": "456 Palm Ave\nMiami, FL 33101",
        "package_weight": "22.8 lbs",
        "service_type": "Express",
        "reference_number": "Order #12346",
        "estimated_delivery": "March 24, 2024",
        "current_status": "Out for Delivery",
        "current_location": "Miami, FL",
        "created_at": datetime(2024, 3, 21),
        "updated_at": datetime(2024, 3, 24),
        "events": [],
    },
    {
        "tracking_code": "MTK456789123",
        "customer_name": "Mike Davis",
        "delivery_address": "789 Sunset Blvd\nOrlando, FL 32801",
        "package_weight": "18.5 lbs",
        "service_type": "Standard Ground",
        "reference_number": "Order #12347",
        "estimated_delivery": "March 22, 2024",
        "current_status": "Delivered",
        "current_location": "Orlando, FL",
        "created_at": datetime(2024, 3, 20),
        "updated_at": datetime(2024, 3, 22),
        "events": [],
    },
]


def load_demo_data(uow: AbstractUnitOfWork) -> int:
    """
    Insert the demo records unless the store already holds records.

    Records without listed history get a seed event built the same way a
    newly created record does, so every record has at least one event.

    Returns:
        Number of records inserted
    """
    with uow:
        if uow.trackings.list():
            logger.info("Store already populated, skipping demo data")
            return 0

        for entry in DEMO_RECORDS:
            data = {k: v for k, v in entry.items() if k != "events"}
            record = model.TrackingRecord(tracking_id=str(uuid4()), **data)
            uow.trackings.add(record)

            if not entry["events"]:
                uow.events.add(record.open(event_id=str(uuid4())))
                record.domain_events.clear()
            for item in entry["events"]:
                uow.events.add(
                    model.TrackingEvent(
                        event_id=str(uuid4()),
                        tracking_number_id=record.tracking_id,
                        timestamp=model.format_display_timestamp(item["created_at"]),
                        **item,
                    )
                )

        uow.commit()

    logger.info(f"Loaded {len(DEMO_RECORDS)} demo tracking records")
    return len(DEMO_RECORDS)
