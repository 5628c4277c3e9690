"""
Tests for store wiring and the health endpoint
"""

import pytest
from pymongo.errors import InvalidURI, ServerSelectionTimeoutError

from sales_api import app as app_module
from sales_api import database
from sales_api.errors import DataAccessError
from sales_api.queries import SalesQueries
from tests.fakes import FakeSalesStore


def test_sales_store_yields_collection_and_releases(monkeypatch):
    store = FakeSalesStore()
    monkeypatch.setattr(database, "get_sales_collection", lambda: store)

    scope = database.sales_store()
    assert next(scope) is store
    with pytest.raises(StopIteration):
        next(scope)


def test_sales_store_connect_failure(monkeypatch):
    def broken():
        raise InvalidURI("bad uri")

    monkeypatch.setattr(database, "get_sales_collection", broken)

    with pytest.raises(DataAccessError) as exc_info:
        next(database.sales_store())
    assert exc_info.value.operation == "connect"


def test_get_sales_queries_wraps_store():
    store = FakeSalesStore(distinct=["North"])

    queries = database.get_sales_queries(store)

    assert isinstance(queries, SalesQueries)
    assert queries.list_distinct_regions() == ["North"]


class FakeAdmin:
    def __init__(self, error=None):
        self.error = error

    def command(self, name):
        if self.error is not None:
            raise self.error
        return {"ok": 1}


class FakeMongoClient:
    def __init__(self, error=None):
        self.admin = FakeAdmin(error)


def test_health_connected(client, monkeypatch):
    monkeypatch.setattr(app_module, "get_mongo_client", lambda: FakeMongoClient())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["mongodb"] == "connected"


def test_health_unreachable(client, monkeypatch):
    monkeypatch.setattr(
        app_module, "get_mongo_client",
        lambda: FakeMongoClient(ServerSelectionTimeoutError("no servers"))
    )

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "unhealthy"
    assert response.json()["mongodb"].startswith("error:")
