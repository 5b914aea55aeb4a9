import pytest

from billing_portal.api.config import change_logs_path
from billing_portal.api.services.customers import CustomersService
from billing_portal.api.services.inventory import InventoryService
from billing_portal.api.services.notes import NotesService
from billing_portal.core.dashboard import DashboardService
from billing_portal.exceptions import NotFoundError, TransportError
from billing_portal.models import CityFilter, ProductFilter


@pytest.fixture
def dashboard(api_client, settings):
    return DashboardService(
        CustomersService(api_client),
        InventoryService(api_client),
        NotesService(api_client),
        settings,
    )


@pytest.fixture
def loaded_portal(fake_portal, customers_payload, billing_payload, inventory_payload):
    fake_portal.add("GET", "/customers/customer", json_body=customers_payload)
    fake_portal.add("GET", "/customers/customer-billing/", json_body=billing_payload)
    fake_portal.add("GET", "/inventory/items", json_body=inventory_payload)
    return fake_portal


class TestDashboardLoad:
    @pytest.mark.asyncio
    async def test_load_fetches_all_three_resources(self, dashboard, loaded_portal):
        snapshot = await dashboard.load()

        assert len(snapshot.customers) == 7
        assert len(snapshot.billing) == 3
        assert len(snapshot.inventory) == 8
        paths = sorted(r.url.path for r in loaded_portal.requests)
        assert len(paths) == 3
        assert dashboard.snapshot is snapshot

    @pytest.mark.asyncio
    async def test_customer_without_name_does_not_fail_the_load(self, dashboard, fake_portal, customers_payload,
                                                              billing_payload, inventory_payload):
        customers = customers_payload + [{"id": 8, "name": None, "status": "disabled", "city": "Polokwane"}]
        inventory = inventory_payload + [{"id": 90, "product_id": 1, "customer_id": 8, "status": "assigned"}]
        fake_portal.add("GET", "/customers/customer", json_body=customers)
        fake_portal.add("GET", "/customers/customer-billing/", json_body=billing_payload)
        fake_portal.add("GET", "/inventory/items", json_body=inventory)

        snapshot = await dashboard.load()

        assert snapshot.customer(8).name == ""
        rows = dashboard.rows(snapshot, ProductFilter.ALL, CityFilter.ALL, "")
        assert 8 in [row.customer.id for row in rows]

    @pytest.mark.asyncio
    async def test_any_failure_fails_the_whole_load(self, dashboard, loaded_portal):
        loaded_portal.add("GET", "/customers/customer-billing/", status=503, text="maintenance")

        with pytest.raises(TransportError, match="Failed to fetch API data"):
            await dashboard.load()
        assert dashboard.snapshot is None

    @pytest.mark.asyncio
    async def test_rows_join_first_billing_match(self, dashboard, loaded_portal):
        snapshot = await dashboard.load()

        rows = dashboard.rows(snapshot, ProductFilter.ALL, CityFilter.ALL, "")

        deposits = {row.customer.id: row.deposit for row in rows}
        assert deposits == {1: "R250.00", 2: "400", 6: "N/A", 7: "N/A"}

    @pytest.mark.asyncio
    async def test_product_counts(self, dashboard, loaded_portal):
        snapshot = await dashboard.load()

        assert dashboard.product_counts(snapshot) == {"all": 4, "2": 3, "1": 2}
        assert dashboard.product_counts(snapshot, CityFilter.POLOKWANE) == {"all": 2, "2": 1, "1": 2}


class TestCustomerDetail:
    @pytest.mark.asyncio
    async def test_detail_combines_inactivity_and_notes(self, dashboard, loaded_portal):
        loaded_portal.add("GET", change_logs_path(1), json_body=[
            {"new_status": "disabled", "date": "2024-01-05", "time": "10:00:00"},
            {"new_status": "disabled", "date": "2024-03-01", "time": "09:00:00"},
            {"new_status": "active", "date": "2024-04-01", "time": "00:00:00"},
        ])
        loaded_portal.add("GET", "/customers/customer-notes", json_body=[
            {"id": 1, "customer_id": 1, "comment": "called"},
            {"id": 2, "customer_id": 2, "comment": "someone else"},
        ])

        detail = await dashboard.customer_detail(1)

        assert detail.customer.name == "Alice Ndlovu"
        assert detail.deposit == "R250.00"
        assert detail.inactive_since == "Mar 2024"
        assert [n.id for n in detail.notes] == [1]
        assert detail.portal_url.endswith("id=1")

    @pytest.mark.asyncio
    async def test_secondary_failures_degrade_independently(self, dashboard, loaded_portal):
        loaded_portal.add("GET", change_logs_path(2), status=500, text="boom")
        loaded_portal.add("GET", "/customers/customer-notes", json_body=[])

        detail = await dashboard.customer_detail(2)

        assert detail.inactive_since is None
        assert detail.notes == []

    @pytest.mark.asyncio
    async def test_notes_failure_marks_history_unavailable(self, dashboard, loaded_portal):
        loaded_portal.add("GET", change_logs_path(2), json_body=[])
        loaded_portal.add("GET", "/customers/customer-notes", status=500, text="boom")

        detail = await dashboard.customer_detail(2)

        assert detail.inactive_since == "N/A"
        assert detail.notes is None

    @pytest.mark.asyncio
    async def test_unknown_customer(self, dashboard, loaded_portal):
        with pytest.raises(NotFoundError):
            await dashboard.customer_detail(404)
