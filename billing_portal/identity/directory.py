"""
Administrator directory backed by the Supabase identity store
"""

import logging
from typing import Any, Optional

from supabase import Client, create_client

from ..config import PortalSettings, get_settings
from ..exceptions import UnexpectedError
from ..models import AdministratorRecord, AdministratorUpdate

logger = logging.getLogger(__name__)

ADMIN_COLUMNS = "admin_id, name, username, Password"


class AdminDirectory:
    """Looks up and updates administrator rows by username or id"""

    def __init__(self, client: Client, table: str = "Admin"):
        self.supabase = client
        self.table = table

    @classmethod
    def from_settings(cls, settings: Optional[PortalSettings] = None) -> "AdminDirectory":
        settings = settings or get_settings()
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY environment variables are required")

        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        logger.info(f"Supabase identity store initialized: {settings.SUPABASE_URL}")
        return cls(client, table=settings.ADMIN_TABLE)

    def find_by_username(self, username: str) -> Optional[AdministratorRecord]:
        """Return the single row for ``username``, or None when there is no match"""
        try:
            result = (
                self.supabase.table(self.table)
                .select(ADMIN_COLUMNS)
                .eq("username", username)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            logger.error(f"Administrator lookup failed: {e}")
            raise UnexpectedError(f"Administrator lookup failed: {e}")

        data: Any = getattr(result, "data", None) if result is not None else None
        if not data:
            return None
        return AdministratorRecord.model_validate(data)

    def update(self, admin_id: int, changes: AdministratorUpdate) -> None:
        """Apply a partial update to the row with ``admin_id``"""
        record = changes.to_record()
        if not record:
            return
        try:
            self.supabase.table(self.table).update(record).eq("admin_id", admin_id).execute()
        except Exception as e:
            logger.error(f"Administrator update failed for {admin_id}: {e}")
            raise UnexpectedError(f"Failed to update administrator: {e}")
        logger.info(f"Updated administrator {admin_id} fields: {sorted(record)}")
