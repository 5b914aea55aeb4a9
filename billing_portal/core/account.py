"""
Self-service changes to the logged-in administrator's username and password.
"""

import logging
from typing import Optional

from .session import SessionContext
from ..exceptions import ValidationError
from ..identity.directory import AdminDirectory
from ..models import Administrator, AdministratorUpdate

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, directory: AdminDirectory, session: Optional[SessionContext] = None):
        self.directory = directory
        self.session = session

    def update_details(self, admin: Administrator, changes: AdministratorUpdate) -> Administrator:
        """
        Raises:
            ValidationError: If neither a username nor a password was given
            UnexpectedError: If the identity store rejects the update
        """
        record = changes.to_record()
        if not record:
            raise ValidationError("Enter a new username or password.")

        self.directory.update(admin.id, changes)

        updated = admin.model_copy(update={"username": record.get("username", admin.username)})
        current = self.session.current() if self.session is not None else None
        if current is not None and current.id == admin.id:
            self.session.refresh(updated)
        return updated
