# pylint: disable=attribute-defined-outside-init
from __future__ import annotations
import abc
import threading
from dataclasses import replace
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session

import config
from tracking.adapters import repository
from tracking.domain import model


class AbstractUnitOfWork(abc.ABC):
    """One store operation; nothing is visible to others until commit()."""
    trackings: repository.AbstractTrackingRepository
    events: repository.AbstractEventRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        self.rollback()

    def commit(self):
        self._commit()

    def collect_new_events(self):
        for record in self.trackings.seen:
            while record.domain_events:
                yield record.domain_events.pop(0)

    @abc.abstractmethod
    def _commit(self):
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self):
        raise NotImplementedError


class InMemoryStorage:
    """Committed tracking records and events, guarded by one store-wide lock."""

    def __init__(self):
        self.records = {}  # type: Dict[str, model.TrackingRecord]
        self.events = {}  # type: Dict[str, model.TrackingEvent]
        self.lock = threading.Lock()


def _copy_all(items: Dict) -> Dict:
    return {key: replace(item) for key, item in items.items()}


class InMemoryUnitOfWork(AbstractUnitOfWork):
    def __init__(self, storage: InMemoryStorage):
        self.storage = storage

    def __enter__(self):
        self.storage.lock.acquire()
        try:
            self.trackings = repository.InMemoryTrackingRepository(_copy_all(self.storage.records))
            self.events = repository.InMemoryEventRepository(_copy_all(self.storage.events))
        except BaseException:
            self.storage.lock.release()
            raise
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.storage.lock.release()

    def _commit(self):
        self.storage.records = _copy_all(self.trackings.records)
        self.storage.events = _copy_all(self.events.events)

    def rollback(self):
        # working copies are dropped; committed state was never touched
        pass


def create_session_factory(uri: str = None) -> sessionmaker:
    uri = uri or config.get_database_uri()
    if uri.startswith("sqlite"):
        engine = create_engine(uri, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(uri, isolation_level="REPEATABLE READ")
    return sessionmaker(bind=engine, expire_on_commit=False)


DEFAULT_SESSION_FACTORY = create_session_factory()


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory=DEFAULT_SESSION_FACTORY):
        self.session_factory = session_factory

    def __enter__(self):
        self.session = self.session_factory()  # type: Session
        self.trackings = repository.SqlAlchemyTrackingRepository(self.session)
        self.events = repository.SqlAlchemyEventRepository(self.session)
        return super().__enter__()

    def __exit__(self, *args):
        # detach loaded objects so they stay readable after the session closes
        self.session.expunge_all()
        super().__exit__(*args)
        self.session.close()

    def _commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()
