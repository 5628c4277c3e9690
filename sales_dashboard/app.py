"""
Sales Reports Dashboard - Streamlit Application

Dashboard connected to the Sales Reports API.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import plotly.express as px
import requests
import streamlit as st

from sales_dashboard.client import API_BASE_URL, ReportsClient
from sales_dashboard.controller import SalesByCustomerController
from sales_dashboard.views import NO_REGION_DATA_MESSAGE, customer_view, region_table

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Sales Reports",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_client() -> ReportsClient:
    return ReportsClient(API_BASE_URL)


@st.cache_resource
def get_executor() -> ThreadPoolExecutor:
    """Worker pool shared by every session's report requests."""
    return ThreadPoolExecutor(max_workers=4, thread_name_prefix="sales-report")


def get_controller() -> SalesByCustomerController:
    if "customer_controller" not in st.session_state:
        st.session_state.customer_controller = SalesByCustomerController(get_client(), get_executor())
    return st.session_state.customer_controller


def submit_customer():
    controller = get_controller()
    controller.form.customer = st.session_state.customer_input
    future = controller.on_submit()
    if future is not None:
        with st.spinner("Loading sales data..."):
            future.result()


def cancel_customer():
    get_controller().on_cancel()
    st.session_state.customer_input = ""


def sales_by_customer_page():
    st.header("Sales by Customer")

    st.text_input("Customer Name", key="customer_input")
    col_cancel, col_submit, _ = st.columns([1, 1, 6])
    with col_cancel:
        st.button("Cancel", on_click=cancel_customer, use_container_width=True)
    with col_submit:
        st.button("Submit", type="primary", on_click=submit_customer, use_container_width=True)

    view = customer_view(get_controller())
    if view.table is not None:
        st.dataframe(view.table, use_container_width=True, hide_index=True)
    else:
        st.write(view.placeholder)

    if view.error_message:
        st.error(view.error_message)


def sales_by_region_page():
    st.header("Sales by Region")
    client = get_client()

    try:
        regions = client.list_regions()
    except requests.RequestException as e:
        logger.error("Error fetching regions: %s", e)
        st.error("Error fetching regions. Please try again later.")
        return

    region = st.selectbox("Region", regions, index=None, placeholder="Select a region")
    if region is None:
        return

    try:
        aggregates = client.sales_by_region(region)
    except requests.RequestException as e:
        logger.error("Error fetching sales for region %r: %s", region, e)
        st.error("Error fetching sales data. Please try again later.")
        return

    if not aggregates:
        st.write(NO_REGION_DATA_MESSAGE)
        return

    df_region = region_table(aggregates)
    fig_region = px.bar(
        df_region,
        x="Sales Person",
        y="Total Sales",
        title=f"Total sales by salesperson - {region}",
        color="Total Sales",
        color_continuous_scale="Blues"
    )
    st.plotly_chart(fig_region, use_container_width=True)
    st.dataframe(df_region, use_container_width=True, hide_index=True)


with st.sidebar:
    st.title("⚙️ Configuration")

    if get_client().health():
        st.success("✅ API connected")
    else:
        st.error("❌ API unavailable")
        st.info("Start the API with:\n`uvicorn sales_api.app:app --port 8000`")

    page = st.radio("Report", ["Sales by Customer", "Sales by Region"])


st.title("📊 Sales Reports")

if page == "Sales by Customer":
    sales_by_customer_page()
else:
    sales_by_region_page()

st.divider()
st.caption("📊 Sales Reports Dashboard | MongoDB data via FastAPI")
