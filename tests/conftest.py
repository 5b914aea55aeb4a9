import json

import httpx
import pytest

from billing_portal.api.client import PortalApiClient
from billing_portal.api.config import ApiConfig
from billing_portal.config import PortalSettings
from billing_portal.models import Administrator

API_PREFIX = "/api/2.0/admin"
API_BASE = f"https://portal.test{API_PREFIX}"


class FakePortal:
    """Canned portal API responses keyed by method and endpoint; records every request"""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, endpoint, status=200, json_body=None, text=None, error=None):
        self.routes[(method, API_PREFIX + endpoint)] = (status, json_body, text, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no such route")
        status, json_body, text, error = route
        if error is not None:
            raise error
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json_body)

    def posted(self, endpoint):
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path == API_PREFIX + endpoint
        ]


@pytest.fixture
def settings(tmp_path):
    return PortalSettings(
        PORTAL_API_BASE=API_BASE,
        PORTAL_API_AUTH="Basic dGVzdDp0ZXN0",
        SUPABASE_URL="https://identity.test",
        SUPABASE_SERVICE_KEY="service-key",
        SESSION_FILE=tmp_path / "session.json",
        SESSION_SECRET="test-secret",
        TIMEZONE="Africa/Johannesburg",
        LOG_JSON=False,
    )


@pytest.fixture
def fake_portal():
    return FakePortal()


@pytest.fixture
def api_client(settings, fake_portal):
    return PortalApiClient(ApiConfig.from_settings(settings), transport=httpx.MockTransport(fake_portal.handler))


@pytest.fixture
def admin():
    return Administrator(id=6, name="Thandi Mokoena", username="thandi")


@pytest.fixture
def customers_payload():
    return [
        {"id": 1, "name": "Alice Ndlovu", "status": "blocked", "billing_type": "prepaid",
         "phone": "0820000001", "street_1": "12 Church St", "city": "Polokwane", "gps": "-23.9,29.4"},
        {"id": 2, "name": "Bob Smith", "status": "DISABLED", "billing_type": "recurring",
         "phone": "0820000002", "city": "Johannesburg"},
        {"id": 3, "name": "Carol Dube", "status": "active", "billing_type": "prepaid",
         "phone": "0820000003", "city": "Polokwane"},
        {"id": 4, "name": "Dan Botha", "status": "blocked", "billing_type": "prepaid",
         "phone": "0820000004", "city": "Polokwane"},
        {"id": 5, "name": "Eve Khumalo", "status": "disabled", "billing_type": "prepaid",
         "phone": "0820000005", "city": "Johannesburg"},
        {"id": 6, "name": "Frank Mahlangu", "status": "Blocked", "billing_type": "prepaid",
         "phone": "0820000006", "city": None},
        {"id": 7, "name": "Gina Venter", "status": "disabled", "billing_type": "recurring",
         "phone": "0820000007", "city": "Polokwane Central"},
    ]


@pytest.fixture
def inventory_payload():
    return [
        {"id": 101, "product_id": 1, "customer_id": 1, "status": "assigned"},
        {"id": 102, "product_id": 2, "customer_id": 2, "status": "Assigned"},
        {"id": 103, "product_id": 1, "customer_id": 3, "status": "assigned"},
        {"id": 104, "product_id": 3, "customer_id": 4, "status": "assigned"},
        {"id": 105, "product_id": 1, "customer_id": 5, "status": "returned"},
        {"id": 106, "product_id": 2, "customer_id": 6, "status": "ASSIGNED"},
        {"id": 107, "product_id": 1, "customer_id": 7, "status": "assigned"},
        {"id": 108, "product_id": 2, "customer_id": 7, "status": "assigned"},
    ]


@pytest.fixture
def billing_payload():
    return [
        {"customer_id": 1, "deposit": "R250.00"},
        {"customer_id": 1, "deposit": "R999.00"},
        {"customer_id": 2, "deposit": 400},
    ]
