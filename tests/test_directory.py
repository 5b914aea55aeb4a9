import pytest
from unittest.mock import MagicMock, Mock

from billing_portal.config import PortalSettings
from billing_portal.exceptions import UnexpectedError
from billing_portal.identity.directory import ADMIN_COLUMNS, AdminDirectory
from billing_portal.models import AdministratorUpdate


class TestAdminDirectory:
    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def directory(self, client):
        return AdminDirectory(client, table="Admin")

    def lookup_chain(self, client):
        return client.table.return_value.select.return_value.eq.return_value.maybe_single.return_value

    def test_find_by_username(self, directory, client):
        self.lookup_chain(client).execute.return_value = Mock(
            data={"admin_id": 6, "name": "Thandi", "username": "thandi", "Password": "pw"}
        )

        record = directory.find_by_username("thandi")

        client.table.assert_called_once_with("Admin")
        client.table.return_value.select.assert_called_once_with(ADMIN_COLUMNS)
        client.table.return_value.select.return_value.eq.assert_called_once_with("username", "thandi")
        assert record.admin_id == 6
        assert record.password == "pw"
        assert record.to_administrator().id == 6

    @pytest.mark.parametrize("result", [None, Mock(data=None)])
    def test_find_missing_username(self, directory, client, result):
        self.lookup_chain(client).execute.return_value = result
        assert directory.find_by_username("ghost") is None

    def test_find_wraps_store_errors(self, directory, client):
        self.lookup_chain(client).execute.side_effect = RuntimeError("503 Service Unavailable")
        with pytest.raises(UnexpectedError):
            directory.find_by_username("thandi")

    def test_update_sends_only_given_fields(self, directory, client):
        directory.update(6, AdministratorUpdate(password="new-pw"))

        client.table.return_value.update.assert_called_once_with({"Password": "new-pw"})
        client.table.return_value.update.return_value.eq.assert_called_once_with("admin_id", 6)

    def test_empty_update_is_skipped(self, directory, client):
        directory.update(6, AdministratorUpdate())
        client.table.assert_not_called()

    def test_update_wraps_store_errors(self, directory, client):
        client.table.return_value.update.return_value.eq.return_value.execute.side_effect = RuntimeError("boom")
        with pytest.raises(UnexpectedError):
            directory.update(6, AdministratorUpdate(username="x"))

    def test_from_settings_requires_credentials(self):
        with pytest.raises(ValueError):
            AdminDirectory.from_settings(PortalSettings(SUPABASE_URL="", SUPABASE_SERVICE_KEY=""))
