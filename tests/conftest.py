import pytest
from fastapi.testclient import TestClient

from expense_tracker.config import Settings
from expense_tracker.db.store import EntryStore
from expense_tracker.main import create_app


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "data" / "entries.json"


@pytest.fixture
def settings(data_path):
    return Settings(data_path=data_path)


@pytest.fixture
def store(data_path):
    return EntryStore(data_path)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
