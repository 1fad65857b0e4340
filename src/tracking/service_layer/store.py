"""Tracking store: the single entry point request handlers talk to."""

from typing import Callable, Dict, List, Optional

from tracking import views
from tracking.domain import commands, model
from tracking.service_layer import messagebus
from tracking.service_layer.unit_of_work import AbstractUnitOfWork


class TrackingStore:
    """
    Owns the tracking records and their events.

    Every call runs in a fresh unit of work, so each operation is a single
    transaction. Writes are dispatched through the message bus, reads go
    straight to the views.
    """

    def __init__(self, uow_factory: Callable[[], AbstractUnitOfWork]):
        self.uow_factory = uow_factory

    def _dispatch(self, command: commands.Command):
        return messagebus.handle(command, self.uow_factory())[0]

    # ---------- tracking records ----------

    def get_by_tracking_code(self, tracking_code: str) -> Optional[model.TrackingWithEvents]:
        return views.get_tracking_by_code(tracking_code, self.uow_factory())

    def list_all(self) -> List[model.TrackingRecord]:
        return views.list_trackings(self.uow_factory())

    def create(self, command: commands.CreateTracking) -> model.TrackingRecord:
        return self._dispatch(command)

    def update(self, tracking_id: str, patch: model.TrackingPatch) -> Optional[model.TrackingRecord]:
        return self._dispatch(commands.UpdateTracking(tracking_id=tracking_id, patch=patch))

    def delete(self, tracking_id: str) -> bool:
        return self._dispatch(commands.DeleteTracking(tracking_id=tracking_id))

    # ---------- tracking events ----------

    def list_events(self, tracking_number_id: str) -> List[model.TrackingEvent]:
        return views.list_events(tracking_number_id, self.uow_factory())

    def add_event(self, command: commands.AddTrackingEvent) -> model.TrackingEvent:
        return self._dispatch(command)

    def update_event(self, event_id: str, patch: model.EventPatch) -> Optional[model.TrackingEvent]:
        return self._dispatch(commands.UpdateTrackingEvent(event_id=event_id, patch=patch))

    def delete_event(self, event_id: str) -> bool:
        return self._dispatch(commands.DeleteTrackingEvent(event_id=event_id))

    # ---------- statistics ----------

    def get_stats(self) -> Dict[str, int]:
        return views.get_stats(self.uow_factory())
