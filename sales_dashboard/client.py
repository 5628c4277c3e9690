"""
HTTP client for the Sales Reports API.
"""

import os
from urllib.parse import quote

import requests

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

REPORTS_PATH = "/api/reports/sales"


class ReportsClient:
    """
    Thin wrapper over the sales report routes.

    Every method raises a requests.RequestException subclass when the
    API cannot be reached or answers with a non-2xx status.
    """

    def __init__(self, base_url: str = API_BASE_URL, session: requests.Session | None = None,
                 timeout: float = API_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str):
        response = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def list_regions(self) -> list[str]:
        return self._get(f"{REPORTS_PATH}/regions")

    def sales_by_region(self, region: str) -> list[dict]:
        return self._get(f"{REPORTS_PATH}/regions/{quote(region, safe='')}")

    def sales_by_customer(self, customer: str) -> list[dict]:
        return self._get(f"{REPORTS_PATH}/customer/{quote(customer, safe='')}")

    def health(self) -> bool:
        """Check if API is available."""
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=5)
            return response.status_code == 200
        except requests.RequestException:
            return False
