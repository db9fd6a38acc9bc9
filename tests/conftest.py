import pytest

from orderweave.enrich import Enricher
from orderweave.service import OrderService
from orderweave.store import InMemoryStore

from support import seeded_store


@pytest.fixture
def store() -> InMemoryStore:
    return seeded_store()


@pytest.fixture
def enricher(store: InMemoryStore) -> Enricher:
    return Enricher(store)


@pytest.fixture
def service(store: InMemoryStore) -> OrderService:
    return OrderService(store)
