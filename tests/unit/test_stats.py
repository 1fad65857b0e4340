"""Unit tests for the statistics view"""
from datetime import datetime

from tracking import views
from tracking.domain import commands, model


def create_with_status(store, status):
    return store.create(commands.CreateTracking(
        customer_name="Customer",
        delivery_address="1 Main St",
        current_location="Miami, FL",
        current_status=status,
    ))


def add_record(uow, tracking_id, status, created_at):
    with uow:
        uow.trackings.add(model.TrackingRecord(
            tracking_id=tracking_id,
            tracking_code=f"MTK00000000{tracking_id}",
            customer_name="Customer",
            delivery_address="1 Main St",
            current_location="Miami, FL",
            current_status=status,
            created_at=created_at,
            updated_at=created_at,
        ))
        uow.commit()


def test_out_for_delivery_falls_in_neither_bucket(store):
    for status in ("In Transit", "Out for Delivery", "Delivered"):
        create_with_status(store, status)

    stats = store.get_stats()

    assert stats == {
        "total_packages": 3,
        "in_transit": 1,
        "delivered": 1,
        "this_month": 3,
    }


def test_in_transit_uses_case_sensitive_substrings(store):
    for status in ("Processing", "Package Received", "In transit", "Transit hub", "received"):
        create_with_status(store, status)

    assert store.get_stats()["in_transit"] == 3


def test_delivered_requires_exact_match(store):
    for status in ("Delivered", "Delivered to neighbor", "delivered", "Package Delivered"):
        create_with_status(store, status)

    assert store.get_stats()["delivered"] == 1


def test_stats_follow_added_events(store):
    record = create_with_status(store, "Package Received")
    assert store.get_stats()["in_transit"] == 1

    store.add_event(commands.AddTrackingEvent(
        tracking_number_id=record.tracking_id, status="Delivered", location="Miami, FL"
    ))

    stats = store.get_stats()
    assert stats["in_transit"] == 0
    assert stats["delivered"] == 1


def test_this_month_counts_from_first_day_inclusive(memory_uow):
    add_record(memory_uow, "1", "In Transit", datetime(2024, 3, 1, 0, 0))
    add_record(memory_uow, "2", "In Transit", datetime(2024, 3, 14, 9, 30))
    add_record(memory_uow, "3", "In Transit", datetime(2024, 2, 29, 23, 59))

    stats = views.get_stats(memory_uow, now=datetime(2024, 3, 15, 10, 0))

    assert stats["total_packages"] == 3
    assert stats["this_month"] == 2


def test_demo_data_is_not_from_this_month(seeded_store):
    stats = seeded_store.get_stats()

    assert stats == {
        "total_packages": 3,
        "in_transit": 1,
        "delivered": 1,
        "this_month": 0,
    }


def test_empty_store_has_zero_stats(store):
    assert store.get_stats() == {
        "total_packages": 0,
        "in_transit": 0,
        "delivered": 0,
        "this_month": 0,
    }
