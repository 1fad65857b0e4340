import abc
from typing import Dict, List, Optional, Set
from tracking.adapters import orm
from tracking.domain import model


def newest_first(items, key=lambda item: item.created_at) -> List:
    # reversed() puts later inserts first so equal timestamps keep newest on top
    return sorted(reversed(list(items)), key=key, reverse=True)


class AbstractTrackingRepository(abc.ABC):
    def __init__(self):
        self.seen = set()  # type: Set[model.TrackingRecord]

    def add(self, record: model.TrackingRecord) -> str:
        self._add(record)
        self.seen.add(record)
        return record.tracking_id

    def get(self, tracking_id) -> Optional[model.TrackingRecord]:
        record = self._get(tracking_id)
        if record:
            self.seen.add(record)
        return record

    def get_by_code(self, tracking_code) -> Optional[model.TrackingRecord]:
        record = self._get_by_code(tracking_code)
        if record:
            self.seen.add(record)
        return record

    def list(self) -> List[model.TrackingRecord]:
        """All records, newest created first."""
        records = self._list()
        for record in records:
            self.seen.add(record)
        return records

    def remove(self, record: model.TrackingRecord) -> None:
        self._remove(record)

    @abc.abstractmethod
    def _add(self, record: model.TrackingRecord):
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, tracking_id) -> Optional[model.TrackingRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    def _get_by_code(self, tracking_code) -> Optional[model.TrackingRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> List[model.TrackingRecord]:
        raise NotImplementedError

    @abc.abstractmethod
    def _remove(self, record: model.TrackingRecord):
        raise NotImplementedError


class AbstractEventRepository(abc.ABC):

    def add(self, event: model.TrackingEvent) -> str:
        self._add(event)
        return event.event_id

    def get(self, event_id) -> Optional[model.TrackingEvent]:
        return self._get(event_id)

    def list_for(self, tracking_number_id) -> List[model.TrackingEvent]:
        """History of one record, newest created first."""
        return self._list_for(tracking_number_id)

    def remove(self, event: model.TrackingEvent) -> None:
        self._remove(event)

    def remove_for(self, tracking_number_id) -> int:
        """Remove every event of a record; returns how many were removed."""
        return self._remove_for(tracking_number_id)

    @abc.abstractmethod
    def _add(self, event: model.TrackingEvent):
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, event_id) -> Optional[model.TrackingEvent]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list_for(self, tracking_number_id) -> List[model.TrackingEvent]:
        raise NotImplementedError

    @abc.abstractmethod
    def _remove(self, event: model.TrackingEvent):
        raise NotImplementedError

    @abc.abstractmethod
    def _remove_for(self, tracking_number_id) -> int:
        raise NotImplementedError


class InMemoryTrackingRepository(AbstractTrackingRepository):
    def __init__(self, records: Dict[str, model.TrackingRecord]):
        super().__init__()
        self.records = records

    def _add(self, record):
        self.records[record.tracking_id] = record

    def _get(self, tracking_id):
        return self.records.get(tracking_id)

    def _get_by_code(self, tracking_code):
        return next((r for r in self.records.values() if r.tracking_code == tracking_code), None)

    def _list(self):
        return newest_first(self.records.values())

    def _remove(self, record):
        del self.records[record.tracking_id]


class InMemoryEventRepository(AbstractEventRepository):
    def __init__(self, events: Dict[str, model.TrackingEvent]):
        self.events = events

    def _add(self, event):
        self.events[event.event_id] = event

    def _get(self, event_id):
        return self.events.get(event_id)

    def _list_for(self, tracking_number_id):
        return newest_first(e for e in self.events.values() if e.tracking_number_id == tracking_number_id)

    def _remove(self, event):
        del self.events[event.event_id]

    def _remove_for(self, tracking_number_id):
        doomed = [e.event_id for e in self.events.values() if e.tracking_number_id == tracking_number_id]
        for event_id in doomed:
            del self.events[event_id]
        return len(doomed)


class SqlAlchemyTrackingRepository(AbstractTrackingRepository):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def _add(self, record):
        self.session.add(record)

    def _get(self, tracking_id):
        return self.session.query(model.TrackingRecord).filter_by(tracking_id=tracking_id).first()

    def _get_by_code(self, tracking_code):
        return self.session.query(model.TrackingRecord).filter_by(tracking_code=tracking_code).first()

    def _list(self):
        # equal created_at values fall back to tracking_id, descending
        return (
            self.session.query(model.TrackingRecord)
            .order_by(orm.tracking_numbers.c.created_at.desc(), orm.tracking_numbers.c.tracking_id.desc())
            .all()
        )

    def _remove(self, record):
        self.session.delete(record)


class SqlAlchemyEventRepository(AbstractEventRepository):
    def __init__(self, session):
        self.session = session

    def _add(self, event):
        self.session.add(event)

    def _get(self, event_id):
        return self.session.query(model.TrackingEvent).filter_by(event_id=event_id).first()

    def _list_for(self, tracking_number_id):
        return (
            self.session.query(model.TrackingEvent)
            .filter_by(tracking_number_id=tracking_number_id)
            .order_by(orm.tracking_events.c.created_at.desc(), orm.tracking_events.c.event_id.desc())
            .all()
        )

    def _remove(self, event):
        self.session.delete(event)

    def _remove_for(self, tracking_number_id):
        doomed = self.session.query(model.TrackingEvent).filter_by(tracking_number_id=tracking_number_id).all()
        for event in doomed:
            self.session.delete(event)
        return len(doomed)
