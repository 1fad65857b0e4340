"""Unit tests for the tracking domain model"""
from datetime import datetime

import pytest

from tracking.domain import model
from tracking.domain.events import TrackingCreated, TrackingStatusChanged


CREATED = datetime(2024, 3, 22, 14, 30)


def make_record(**overrides):
    data = dict(
        tracking_id="trk-1",
        tracking_code="MTK123456789",
        customer_name="John Smith",
        delivery_address="123 Oak Street\nTampa, FL 33601",
        current_location="Miami, FL",
        created_at=CREATED,
        updated_at=CREATED,
    )
    data.update(overrides)
    return model.TrackingRecord(**data)


@pytest.mark.parametrize("moment, expected", [
    (datetime(2024, 3, 22, 14, 30), "March 22, 2024 - 2:30 PM"),
    (datetime(2024, 3, 23, 8, 5), "March 23, 2024 - 8:05 AM"),
    (datetime(2024, 1, 1, 0, 0), "January 1, 2024 - 12:00 AM"),
    (datetime(2024, 12, 31, 12, 59), "December 31, 2024 - 12:59 PM"),
])
def test_format_display_timestamp(moment, expected):
    assert model.format_display_timestamp(moment) == expected


def test_tracking_record_defaults():
    record = make_record()

    assert record.service_type == "Standard Ground"
    assert record.current_status == "Package Received"
    assert record.package_weight is None
    assert len(record.domain_events) == 0


def test_open_builds_seed_event_mirroring_record():
    record = make_record()

    seed = record.open(event_id="evt-1")

    assert seed.tracking_number_id == "trk-1"
    assert seed.status == "Package Received"
    assert seed.location == "Miami, FL"
    assert seed.description == "Package has been package received"
    assert seed.timestamp == "March 22, 2024 - 2:30 PM"
    assert seed.created_at == CREATED

    assert len(record.domain_events) == 1
    created = record.domain_events[0]
    assert isinstance(created, TrackingCreated)
    assert created.tracking_code == "MTK123456789"


def test_record_event_moves_current_status_and_location():
    record = make_record()
    later = datetime(2024, 3, 23, 8, 15)
    event = model.TrackingEvent(
        event_id="evt-2",
        tracking_number_id="trk-1",
        status="In Transit",
        location="Orlando, FL Sorting Facility",
        timestamp="March 23, 2024 - 8:15 AM",
        created_at=later,
    )

    record.record_event(event, later)

    assert record.current_status == "In Transit"
    assert record.current_location == "Orlando, FL Sorting Facility"
    assert record.updated_at == later
    assert isinstance(record.domain_events[-1], TrackingStatusChanged)
    assert record.domain_events[-1].event_id == "evt-2"


def test_apply_patch_only_changes_provided_fields():
    record = make_record(reference_number="Order #1")
    later = datetime(2024, 3, 24)

    record.apply(model.TrackingPatch(customer_name="Jane"), later)

    assert record.customer_name == "Jane"
    assert record.reference_number == "Order #1"
    assert record.current_status == "Package Received"
    assert record.created_at == CREATED
    assert record.updated_at == later
    assert record.domain_events == []


def test_apply_patch_twice_gives_same_state():
    patch = model.TrackingPatch(customer_name="Jane", current_location="Tampa, FL")
    once = make_record()
    twice = make_record()

    once.apply(patch, datetime(2024, 3, 24))
    twice.apply(patch, datetime(2024, 3, 24))
    twice.apply(patch, datetime(2024, 3, 24))

    assert once == twice


def test_patch_reports_blanked_required_fields():
    patch = model.TrackingPatch(customer_name="  ", current_status="")

    assert patch.blanked_required() == ["customer_name"]
    assert model.TrackingPatch(service_type="Express").blanked_required() == []


def test_event_patch_merges_into_event():
    event = model.TrackingEvent(
        event_id="evt-1",
        tracking_number_id="trk-1",
        status="In Transit",
        location="Orlando, FL",
        timestamp="March 23, 2024 - 8:15 AM",
        created_at=CREATED,
        description="On its way",
    )

    model.EventPatch(location="Tampa, FL").apply_to(event)

    assert event.location == "Tampa, FL"
    assert event.status == "In Transit"
    assert event.description == "On its way"


def test_missing_fields_treats_blank_as_absent():
    record = make_record(customer_name="", delivery_address=None)

    assert model.missing_fields(record, model.REQUIRED_TRACKING_FIELDS) == ["customer_name", "delivery_address"]


def test_invalid_tracking_input_carries_field_names():
    error = model.InvalidTrackingInput(["customer_name"])

    assert isinstance(error, ValueError)
    assert error.fields == ["customer_name"]
    assert "customer_name" in str(error)
