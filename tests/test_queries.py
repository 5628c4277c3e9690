"""Tests for the sales query builder."""

import pytest
from pymongo.errors import AutoReconnect

from sales_api.errors import DataAccessError
from sales_api.models import RegionAggregate
from sales_api.queries import SalesQueries, build_region_pipeline
from tests.fakes import FakeSalesStore


def test_build_region_pipeline():
    pipeline = build_region_pipeline("North")

    assert pipeline[0] == {"$match": {"region": "North"}}
    assert pipeline[1]["$group"] == {"_id": "$salesperson", "totalSales": {"$sum": "$amount"}}
    assert pipeline[2]["$project"] == {"_id": 0, "salesperson": "$_id", "totalSales": 1}
    assert pipeline[-1] == {"$sort": {"salesperson": 1}}


def test_aggregate_by_region_matches_region_exactly():
    store = FakeSalesStore(aggregate=[{"salesperson": "Jane Smith", "totalSales": 1500}])

    result = SalesQueries(store).aggregate_by_region("north")

    assert result == [RegionAggregate(salesperson="Jane Smith", totalSales=1500)]
    assert store.calls == [("aggregate", build_region_pipeline("north"))]


def test_aggregate_by_region_empty():
    assert SalesQueries(FakeSalesStore()).aggregate_by_region("unknown") == []


def test_list_distinct_regions_keeps_store_order():
    store = FakeSalesStore(distinct=["West", "East"])

    assert SalesQueries(store).list_distinct_regions() == ["West", "East"]


def test_find_by_customer_normalizes_records():
    store = FakeSalesStore(find=[{"_id": 42, "customer": "Lambda LLC", "amount": 150, "extra": True}])

    records = SalesQueries(store).find_by_customer("Lambda LLC")

    assert len(records) == 1
    assert records[0].id == "42"
    assert records[0].amount == 150
    assert store.calls == [("find", {"customer": "Lambda LLC"})]


def test_find_by_customer_empty():
    assert SalesQueries(FakeSalesStore()).find_by_customer("Nobody") == []


@pytest.mark.parametrize("operation, call", [
    ("list_distinct_regions", lambda q: q.list_distinct_regions()),
    ("aggregate_by_region", lambda q: q.aggregate_by_region("north")),
    ("find_by_customer", lambda q: q.find_by_customer("Lambda LLC")),
])
def test_store_failure_raises_data_access_error(operation, call):
    cause = AutoReconnect("connection reset")
    queries = SalesQueries(FakeSalesStore(error=cause))

    with pytest.raises(DataAccessError) as exc_info:
        call(queries)

    assert exc_info.value.operation == operation
    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause
    assert exc_info.value.describe_cause() == {"type": "AutoReconnect", "detail": "connection reset"}


def test_aggregate_by_region_keeps_missing_salesperson():
    store = FakeSalesStore(aggregate=[{"salesperson": None, "totalSales": 50}])

    result = SalesQueries(store).aggregate_by_region("north")

    assert result == [RegionAggregate(salesperson=None, totalSales=50)]


def test_malformed_aggregate_raises_data_access_error():
    store = FakeSalesStore(aggregate=[{"salesperson": "Jane"}])

    with pytest.raises(DataAccessError) as exc_info:
        SalesQueries(store).aggregate_by_region("north")

    assert exc_info.value.operation == "aggregate_by_region"
    assert exc_info.value.message == "Error fetching sales data for region"
