"""
View helpers for the sales report pages.
"""

from typing import NamedTuple, Optional

import pandas as pd

from sales_dashboard.controller import SalesByCustomerController

NO_DATA_MESSAGE = "No sales data available for this customer."
NO_REGION_DATA_MESSAGE = "No sales data available for this region."

SALES_COLUMNS = {
    "_id": "Customer Id",
    "date": "Date",
    "region": "Region",
    "product": "Product",
    "category": "Category",
    "customer": "Customer Name",
    "salesperson": "Sales Person",
    "channel": "Channel",
    "amount": "Total Sales",
}


class CustomerView(NamedTuple):
    table: Optional[pd.DataFrame]
    placeholder: Optional[str]
    error_message: str


def sales_table(sales_data: list[dict]) -> pd.DataFrame:
    """Sales records as a display table, missing fields left blank."""
    df = pd.DataFrame(sales_data).reindex(columns=list(SALES_COLUMNS))
    df["date"] = pd.to_datetime(df["date"], format="ISO8601", errors="coerce", utc=True).dt.strftime("%m/%d/%Y")
    df["amount"] = df["amount"].map(lambda v: f"${v:,.2f}" if pd.notna(v) else "")
    return df.fillna("").rename(columns=SALES_COLUMNS)


def region_table(aggregates: list[dict]) -> pd.DataFrame:
    df = pd.DataFrame(aggregates, columns=["salesperson", "totalSales"])
    return df.rename(columns={"salesperson": "Sales Person", "totalSales": "Total Sales"})


def customer_view(controller: SalesByCustomerController) -> CustomerView:
    """
    What the sales-by-customer page shows.

    The placeholder is shown whenever there is no sales data, before
    the first submission as well as after an empty result.
    """
    if controller.sales_data:
        return CustomerView(sales_table(controller.sales_data), None, controller.error_message)
    return CustomerView(None, NO_DATA_MESSAGE, controller.error_message)
