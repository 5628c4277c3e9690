"""
Request controller for the sales-by-customer report.

Owns the customer form, issues the report request on submit and
reduces the outcome (records, no records, failure) into view state.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from typing import Optional

import requests

from sales_dashboard.client import ReportsClient

FETCH_ERROR_MESSAGE = "Error fetching sales data. Please try again later."

logger = logging.getLogger(__name__)


class ViewState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    POPULATED = "populated"
    EMPTY = "empty"
    ERRORED = "errored"


class CustomerForm:
    """Form with a single required `customer` text field."""

    def __init__(self, customer: Optional[str] = ""):
        self.customer = customer

    @property
    def valid(self) -> bool:
        return bool(self.customer and self.customer.strip())

    def reset(self) -> None:
        self.customer = None


class SalesByCustomerController:
    """
    Sales-by-customer report state machine.

    Each submission is tagged with a sequence number; a response is
    only applied while its number is still the latest one issued, so a
    slow response cannot overwrite a newer submission or a cancel.

    Args:
        client: Reports API client. Defaults to a client for API_BASE_URL.
        executor: Runs the HTTP request off the caller's thread.
    """

    def __init__(self, client: ReportsClient | None = None, executor: Executor | None = None):
        self.client = client or ReportsClient()
        self.executor = executor or ThreadPoolExecutor(max_workers=1)
        self.form = CustomerForm()
        self.sales_data: list[dict] = []
        self.error_message = ""
        self.state = ViewState.IDLE
        self._sequence = 0
        self._lock = threading.Lock()

    @property
    def loading(self) -> bool:
        return self.state is ViewState.SUBMITTING

    def on_submit(self) -> Optional[Future]:
        """
        Submit the form.

        Does nothing while the customer field is empty. Otherwise
        requests the customer's sales and returns the pending future.
        """
        if not self.form.valid:
            return None

        customer = self.form.customer
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            self.state = ViewState.SUBMITTING

        return self.executor.submit(self._fetch, sequence, customer)

    def on_cancel(self) -> None:
        """Reset the form and clear results from any state."""
        with self._lock:
            self._sequence += 1
            self.form.reset()
            self.sales_data = []
            self.error_message = ""
            self.state = ViewState.IDLE

    def _fetch(self, sequence: int, customer: str) -> bool:
        try:
            data = self.client.sales_by_customer(customer)
        except requests.RequestException as e:
            logger.error("Error fetching sales data for %r: %s", customer, e)
            return self._apply(sequence, ViewState.ERRORED, [], FETCH_ERROR_MESSAGE)

        if not isinstance(data, list):
            logger.error("Unexpected sales payload for %r: %s", customer, type(data).__name__)
            return self._apply(sequence, ViewState.ERRORED, [], FETCH_ERROR_MESSAGE)

        logger.info("Fetched %d sales records for %r", len(data), customer)
        state = ViewState.POPULATED if data else ViewState.EMPTY
        return self._apply(sequence, state, data, "")

    def _apply(self, sequence: int, state: ViewState, data: list[dict], error_message: str) -> bool:
        with self._lock:
            if sequence != self._sequence:
                logger.info("Discarding stale response #%d", sequence)
                return False
            self.sales_data = data
            self.error_message = error_message
            self.state = state
        return True
