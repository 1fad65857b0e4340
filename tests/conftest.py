# pylint: disable=redefined-outer-name
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, clear_mappers
from sqlalchemy.pool import StaticPool

from tracking.bootstrap import bootstrap
from tracking.domain import commands
from tracking.entrypoints.tracking_api import create_app
from tracking.service_layer import unit_of_work


@pytest.fixture
def memory_storage():
    return unit_of_work.InMemoryStorage()


@pytest.fixture
def memory_uow(memory_storage):
    """Provide an in-memory unit of work over an empty store."""
    return unit_of_work.InMemoryUnitOfWork(memory_storage)


@pytest.fixture
def store():
    """Empty in-memory tracking store."""
    return bootstrap(backend="memory", seed_demo_data=False)


@pytest.fixture
def seeded_store():
    """In-memory tracking store holding the demo records."""
    return bootstrap(backend="memory", seed_demo_data=True)


@pytest.fixture
def sqlite_session_factory():
    """Create SQLite in-memory database for fast testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    yield sessionmaker(bind=engine, expire_on_commit=False)

    clear_mappers()
    engine.dispose()


@pytest.fixture
def sqlite_store(sqlite_session_factory):
    """Tracking store backed by SQLAlchemy on an in-memory SQLite database."""
    return bootstrap(backend="sqlalchemy", seed_demo_data=False, session_factory=sqlite_session_factory)


@pytest.fixture
def client(seeded_store):
    """HTTP client for the API wired to a seeded in-memory store."""
    with TestClient(create_app(seeded_store)) as test_client:
        yield test_client


@pytest.fixture
def miami_package():
    return commands.CreateTracking(
        customer_name="Maria Lopez",
        delivery_address="12 Ocean Drive\nMiami, FL 33139",
        current_location="Miami, FL",
        package_weight="4.1 lbs",
        reference_number="Order #555",
    )
