"""
Shared fixtures for the sales report tests.
"""

import pytest
from fastapi.testclient import TestClient

from sales_api.app import app
from sales_api.database import get_sales_queries
from sales_api.queries import SalesQueries
from tests.fakes import FakeSalesStore


@pytest.fixture
def store():
    return FakeSalesStore()


@pytest.fixture
def client(store):
    """API client wired to the fake store."""
    app.dependency_overrides[get_sales_queries] = lambda: SalesQueries(store)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
