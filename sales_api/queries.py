"""
Query builder for the sales collection.

Translates a filter key (region or customer name) into a distinct
lookup, a grouping aggregation or an exact-match find, and normalizes
the documents returned by the store.
"""

import logging
from typing import Any, Iterable, Protocol

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from sales_api.errors import DataAccessError
from sales_api.models import RegionAggregate, SalesRecord

logger = logging.getLogger(__name__)


class SalesStore(Protocol):
    """The subset of a pymongo Collection the queries rely on."""

    def find(self, filter: dict) -> Iterable[dict]: ...

    def distinct(self, key: str) -> list: ...

    def aggregate(self, pipeline: list[dict]) -> Iterable[dict]: ...


def build_region_pipeline(region: str) -> list[dict]:
    """
    Build the aggregation pipeline for sales by region.

    Groups the region's sales by salesperson and sums the amounts.
    Results are sorted by salesperson so the order does not depend
    on the store.
    """
    return [
        {"$match": {"region": region}},
        {
            "$group": {
                "_id": "$salesperson",
                "totalSales": {"$sum": "$amount"}
            }
        },
        {
            "$project": {
                "_id": 0,
                "salesperson": "$_id",
                "totalSales": 1
            }
        },
        {"$sort": {"salesperson": 1}},
    ]


class SalesQueries:
    """
    Read-only queries over the sales collection.

    Args:
        store: Collection-like handle exposing find, distinct and aggregate.
    """

    def __init__(self, store: SalesStore):
        self.store = store

    def list_distinct_regions(self) -> list[str]:
        """Distinct region names, in store order."""
        return self._run(
            "list_distinct_regions",
            "Error fetching regions",
            lambda: list(self.store.distinct("region")),
        )

    def aggregate_by_region(self, region: str) -> list[RegionAggregate]:
        """Total sales per salesperson within one region."""
        return self._run(
            "aggregate_by_region",
            "Error fetching sales data for region",
            lambda: list(self.store.aggregate(build_region_pipeline(region))),
            RegionAggregate.model_validate,
        )

    def find_by_customer(self, customer: str) -> list[SalesRecord]:
        """Sales records whose customer exactly equals `customer`."""
        return self._run(
            "find_by_customer",
            "Error fetching sales data",
            lambda: list(self.store.find({"customer": customer})),
            SalesRecord.model_validate,
        )

    def _run(self, operation: str, message: str, query, normalize=None) -> Any:
        # cursors are drained and documents validated inside, so iteration
        # and malformed-document errors are reported the same way
        try:
            result = query()
            if normalize is not None:
                result = [normalize(doc) for doc in result]
        except (PyMongoError, ValidationError) as e:
            raise DataAccessError(operation, e, message) from e

        logger.debug("Sales query %s returned %d documents", operation, len(result))
        return result
