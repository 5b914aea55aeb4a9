import pytest
from unittest.mock import Mock

from billing_portal.core.account import AccountService
from billing_portal.core.auth import Authenticator, normalize_username
from billing_portal.core.session import FileSlot, SessionContext, SessionStore
from billing_portal.exceptions import (
    InvalidCredentialsError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from billing_portal.models import AdministratorRecord, AdministratorUpdate


@pytest.fixture
def directory():
    directory = Mock()
    directory.find_by_username.return_value = AdministratorRecord(
        admin_id=21, name="Sipho Zulu", username="sipho", Password="s3cret"
    )
    return directory


class TestAuthenticator:
    @pytest.fixture
    def authenticator(self, directory):
        return Authenticator(directory)

    def test_normalize_username(self):
        assert normalize_username("  si pho\t") == "sipho"

    @pytest.mark.asyncio
    async def test_successful_login(self, authenticator, directory):
        admin = await authenticator.authenticate(" si pho ", "s3cret")

        directory.find_by_username.assert_called_once_with("sipho")
        assert admin.id == 21
        assert admin.name == "Sipho Zulu"
        assert admin.username == "sipho"
        assert "password" not in admin.model_dump()

    @pytest.mark.asyncio
    async def test_unknown_username(self, authenticator, directory):
        directory.find_by_username.return_value = None
        with pytest.raises(NotFoundError):
            await authenticator.authenticate("nobody", "x")

    @pytest.mark.asyncio
    async def test_wrong_password(self, authenticator):
        with pytest.raises(InvalidCredentialsError):
            await authenticator.authenticate("sipho", "S3CRET")

    @pytest.mark.asyncio
    async def test_password_is_not_trimmed(self, authenticator):
        with pytest.raises(InvalidCredentialsError):
            await authenticator.authenticate("sipho", " s3cret")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,password", [("", "s3cret"), ("sipho", ""), ("  ", "  ")])
    async def test_blank_fields_are_rejected_before_lookup(self, authenticator, directory, username, password):
        with pytest.raises(ValidationError):
            await authenticator.authenticate(username, password)
        directory.find_by_username.assert_not_called()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_unexpected(self, authenticator, directory):
        directory.find_by_username.side_effect = RuntimeError("connection reset")
        with pytest.raises(UnexpectedError):
            await authenticator.authenticate("sipho", "s3cret")

    @pytest.mark.asyncio
    async def test_directory_errors_pass_through(self, authenticator, directory):
        directory.find_by_username.side_effect = UnexpectedError("Administrator lookup failed")
        with pytest.raises(UnexpectedError, match="lookup failed"):
            await authenticator.authenticate("sipho", "s3cret")


class TestAccountService:
    @pytest.fixture
    def session(self, tmp_path):
        return SessionContext(SessionStore(FileSlot(tmp_path / "session.json")))

    def test_update_requires_a_field(self, directory, admin):
        with pytest.raises(ValidationError):
            AccountService(directory).update_details(admin, AdministratorUpdate(username=" ", password=""))
        directory.update.assert_not_called()

    def test_update_username_refreshes_session(self, directory, session, admin):
        session.set(admin, remember=False)
        changes = AdministratorUpdate(username=" thandi.m ")

        updated = AccountService(directory, session).update_details(admin, changes)

        directory.update.assert_called_once_with(admin.id, changes)
        assert updated.username == "thandi.m"
        assert session.current() == updated
        assert session.remember is False

    def test_password_change_keeps_username(self, directory, session, admin):
        session.set(admin, remember=True)

        updated = AccountService(directory, session).update_details(admin, AdministratorUpdate(password="new"))

        assert updated == admin
        assert session.remember is True


def test_update_record_maps_columns():
    changes = AdministratorUpdate(username=" new.name ", password=" pw ")
    assert changes.to_record() == {"username": "new.name", "Password": "pw"}
    assert AdministratorUpdate().to_record() == {}
