"""Builds the tracking store once at process start."""

import logging
from functools import partial

import config
from tracking.adapters import orm
from tracking.service_layer import seed, unit_of_work
from tracking.service_layer.store import TrackingStore

logger = logging.getLogger(__name__)


def bootstrap(
    backend: str = None,
    seed_demo_data: bool = None,
    session_factory=None,
) -> TrackingStore:
    """
    Wire a TrackingStore for the configured backend.

    Args:
        backend: "memory" or "sqlalchemy" (default from TRACKING_STORE_BACKEND)
        seed_demo_data: load demo records into an empty store
        session_factory: SQLAlchemy sessionmaker, for the sqlalchemy backend

    Returns:
        The store handed to request handlers
    """
    backend = backend or config.get_store_backend()
    if seed_demo_data is None:
        seed_demo_data = config.get_seed_demo_data()

    if backend == "memory":
        uow_factory = partial(unit_of_work.InMemoryUnitOfWork, unit_of_work.InMemoryStorage())
    elif backend == "sqlalchemy":
        session_factory = session_factory or unit_of_work.DEFAULT_SESSION_FACTORY
        orm.metadata.create_all(session_factory.kw["bind"])
        orm.start_mappers()
        uow_factory = partial(unit_of_work.SqlAlchemyUnitOfWork, session_factory)
    else:
        raise ValueError(f"Unknown tracking store backend: {backend}")

    logger.info(f"✓ Tracking store initialized ({backend} backend)")

    if seed_demo_data:
        seed.load_demo_data(uow_factory())

    return TrackingStore(uow_factory)
