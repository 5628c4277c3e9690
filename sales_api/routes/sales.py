"""
Sales report routes for the API.
"""

from fastapi import APIRouter, Depends

from sales_api.database import get_sales_queries
from sales_api.models import DataAccessErrorResponse, RegionAggregate, SalesRecord
from sales_api.queries import SalesQueries

router = APIRouter(prefix="/api/reports/sales", tags=["Sales reports"])

ERROR_RESPONSES = {500: {"model": DataAccessErrorResponse}}


@router.get("/regions", response_model=list[str], responses=ERROR_RESPONSES)
def get_regions(queries: SalesQueries = Depends(get_sales_queries)):
    """
    Get the distinct sales regions.
    """
    return queries.list_distinct_regions()


@router.get("/regions/{region}", response_model=list[RegionAggregate], responses=ERROR_RESPONSES)
def get_sales_by_region(region: str, queries: SalesQueries = Depends(get_sales_queries)):
    """
    Get sales for a region, grouped by salesperson.

    A region without sales returns an empty list.
    """
    return queries.aggregate_by_region(region)


@router.get(
    "/customer/{customer}",
    response_model=list[SalesRecord],
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
def get_sales_by_customer(customer: str, queries: SalesQueries = Depends(get_sales_queries)):
    """
    Get all sales records for a customer.

    The customer name must match exactly. A customer without sales
    returns an empty list.
    """
    return queries.find_by_customer(customer)
