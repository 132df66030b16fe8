from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from pantrii.catalog import SAMPLE_RECIPES
from pantrii.main import create_app
from pantrii.storage import InMemoryStore


TODAY = date(2026, 10, 18)
NOW = datetime(2026, 10, 18, 9, 30)


def days_from(base: date, days: int) -> str:
    return (base + timedelta(days=days)).isoformat()


@pytest.fixture()
def store():
    return InMemoryStore(recipes=SAMPLE_RECIPES)


@pytest.fixture()
def client(store):
    return TestClient(create_app(store))
