"""
Tracking API Entrypoint - Thin API delegating to the tracking store.

Public lookup by tracking code plus the admin operations on records,
their history events and the summary statistics.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

import config
from tracking.bootstrap import bootstrap
from tracking.domain import commands, model
from tracking.service_layer.store import TrackingStore

logging.basicConfig(
    level=getattr(logging, config.get_log_level()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ---------- Request/Response models ----------

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateTrackingRequest(CamelModel):
    customer_name: str
    delivery_address: str
    current_location: str
    package_weight: Optional[str] = None
    service_type: str = model.DEFAULT_SERVICE_TYPE
    reference_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    current_status: str = model.DEFAULT_STATUS

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "customerName": "John Smith",
                "deliveryAddress": "123 Oak Street\nTampa, FL 33601",
                "packageWeight": "15.2 lbs",
                "serviceType": "Standard Ground",
                "referenceNumber": "Order #12345",
                "estimatedDelivery": "March 25, 2024",
                "currentStatus": "Package Received",
                "currentLocation": "Miami, FL Distribution Center",
            }
        },
    )


class UpdateTrackingRequest(CamelModel):
    customer_name: Optional[str] = None
    delivery_address: Optional[str] = None
    package_weight: Optional[str] = None
    service_type: Optional[str] = None
    reference_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    current_status: Optional[str] = None
    current_location: Optional[str] = None


class CreateEventRequest(CamelModel):
    status: str
    location: str
    description: Optional[str] = None
    timestamp: Optional[str] = None


class TrackingResponse(CamelModel):
    id: str
    tracking_code: str
    tracking_number: str  # same value as tracking_code, the name older clients read
    customer_name: str
    delivery_address: str
    package_weight: Optional[str] = None
    service_type: str
    reference_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    current_status: str
    current_location: str
    created_at: datetime
    updated_at: datetime


class EventResponse(CamelModel):
    id: str
    tracking_number_id: str
    status: str
    location: str
    description: Optional[str] = None
    timestamp: str
    created_at: datetime


class TrackingWithEventsResponse(TrackingResponse):
    events: List[EventResponse]


class StatsResponse(CamelModel):
    total_packages: int
    in_transit: int
    delivered: int
    this_month: int


class MessageResponse(BaseModel):
    message: str


def tracking_response(record: model.TrackingRecord) -> dict:
    return dict(
        id=record.tracking_id,
        tracking_code=record.tracking_code,
        tracking_number=record.tracking_code,
        customer_name=record.customer_name,
        delivery_address=record.delivery_address,
        package_weight=record.package_weight,
        service_type=record.service_type,
        reference_number=record.reference_number,
        estimated_delivery=record.estimated_delivery,
        current_status=record.current_status,
        current_location=record.current_location,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def event_response(event: model.TrackingEvent) -> EventResponse:
    return EventResponse(
        id=event.event_id,
        tracking_number_id=event.tracking_number_id,
        status=event.status,
        location=event.location,
        description=event.description,
        timestamp=event.timestamp,
        created_at=event.created_at,
    )


def get_store(request: Request) -> TrackingStore:
    return request.app.state.store


# ---------- App ----------

def create_app(store: TrackingStore = None) -> FastAPI:
    """Build the API around a store; without one, the store is bootstrapped at startup."""
    app = FastAPI(
        title="Package Tracking API",
        description="Public package tracking and admin management of tracking records",
        version="1.0.0"
    )
    app.state.store = store

    @app.on_event("startup")
    async def startup_event():
        if app.state.store is None:
            app.state.store = bootstrap()
        logger.info("✓ Tracking API ready")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid data", "errors": jsonable_encoder(exc.errors())},
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "package-tracking-api",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.get("/api/tracking/{tracking_code}", response_model=TrackingWithEventsResponse,
             summary="Get tracking information by tracking code")
    def get_tracking(tracking_code: str, store: TrackingStore = Depends(get_store)):
        """
        Public lookup of a shipment by its tracking code.

        Returns:
            The tracking record with its history, newest event first
        """
        try:
            tracking = store.get_by_tracking_code(tracking_code)
            if tracking is None:
                raise HTTPException(status_code=404, detail="Tracking number not found")

            return TrackingWithEventsResponse(
                **tracking_response(tracking.record),
                events=[event_response(e) for e in tracking.events],
            )

        except HTTPException:
            raise  # Re-raise HTTP exceptions
        except Exception as e:
            logger.error(f"Error retrieving tracking code {tracking_code}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch tracking information")

    @app.get("/api/admin/tracking", response_model=List[TrackingResponse], summary="List all tracking records")
    def list_tracking(store: TrackingStore = Depends(get_store)):
        try:
            return [TrackingResponse(**tracking_response(r)) for r in store.list_all()]
        except Exception as e:
            logger.error(f"Error listing tracking records: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch tracking numbers")

    @app.get("/api/admin/stats", response_model=StatsResponse, summary="Tracking statistics")
    def get_stats(store: TrackingStore = Depends(get_store)):
        try:
            return StatsResponse(**store.get_stats())
        except Exception as e:
            logger.error(f"Error computing statistics: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch statistics")

    @app.post("/api/admin/tracking", response_model=TrackingResponse, status_code=201,
              summary="Create a new tracking record")
    def create_tracking(request: CreateTrackingRequest, store: TrackingStore = Depends(get_store)):
        """
        Create a tracking record; the tracking code and the first history
        event are generated by the store.
        """
        try:
            record = store.create(commands.CreateTracking(**request.model_dump()))
            return TrackingResponse(**tracking_response(record))

        except model.InvalidTrackingInput as e:
            logger.error(f"Validation error creating tracking record: {e}")
            raise HTTPException(status_code=400, detail={"message": "Invalid data", "errors": e.fields})
        except Exception as e:
            logger.error(f"Error creating tracking record: {e}")
            raise HTTPException(status_code=500, detail="Failed to create tracking number")

    @app.patch("/api/admin/tracking/{tracking_id}", response_model=TrackingResponse,
               summary="Update a tracking record")
    def update_tracking(tracking_id: str, request: UpdateTrackingRequest,
                        store: TrackingStore = Depends(get_store)):
        """Merge the provided fields; status changes here do not add history."""
        try:
            record = store.update(tracking_id, model.TrackingPatch(**request.model_dump()))
            if record is None:
                raise HTTPException(status_code=404, detail="Tracking number not found")

            return TrackingResponse(**tracking_response(record))

        except HTTPException:
            raise  # Re-raise HTTP exceptions
        except model.InvalidTrackingInput as e:
            logger.error(f"Validation error updating tracking record {tracking_id}: {e}")
            raise HTTPException(status_code=400, detail={"message": "Invalid data", "errors": e.fields})
        except Exception as e:
            logger.error(f"Error updating tracking record {tracking_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update tracking number")

    @app.delete("/api/admin/tracking/{tracking_id}", response_model=MessageResponse,
                summary="Delete a tracking record and its events")
    def delete_tracking(tracking_id: str, store: TrackingStore = Depends(get_store)):
        try:
            if not store.delete(tracking_id):
                raise HTTPException(status_code=404, detail="Tracking number not found")

            return MessageResponse(message="Tracking number deleted successfully")

        except HTTPException:
            raise  # Re-raise HTTP exceptions
        except Exception as e:
            logger.error(f"Error deleting tracking record {tracking_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete tracking number")

    @app.post("/api/admin/tracking/{tracking_id}/events", response_model=EventResponse, status_code=201,
              summary="Add a tracking event")
    def add_event(tracking_id: str, request: CreateEventRequest, store: TrackingStore = Depends(get_store)):
        """Append a history event; the record's current status and location follow it."""
        try:
            event = store.add_event(
                commands.AddTrackingEvent(tracking_number_id=tracking_id, **request.model_dump())
            )
            return event_response(event)

        except model.InvalidTrackingInput as e:
            logger.error(f"Validation error adding event to {tracking_id}: {e}")
            raise HTTPException(status_code=400, detail={"message": "Invalid data", "errors": e.fields})
        except Exception as e:
            logger.error(f"Error adding event to {tracking_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to add tracking event")

    @app.get("/api/admin/tracking/{tracking_id}/events", response_model=List[EventResponse],
             summary="List tracking events")
    def list_events(tracking_id: str, store: TrackingStore = Depends(get_store)):
        try:
            return [event_response(e) for e in store.list_events(tracking_id)]
        except Exception as e:
            logger.error(f"Error listing events of {tracking_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch tracking events")

    return app


app = create_app()


def main():
    """Run the tracking API with uvicorn."""
    logger.info(f"Starting tracking API on {config.get_api_url()}")
    uvicorn.run(app, **config.get_api_host_and_port())


if __name__ == "__main__":
    main()
