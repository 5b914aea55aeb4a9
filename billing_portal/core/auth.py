"""
Administrator login against the identity store.
"""

import logging
import re

from ..exceptions import InvalidCredentialsError, NotFoundError, PortalError, UnexpectedError, ValidationError
from ..identity.directory import AdminDirectory
from ..models import Administrator

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_username(raw: str) -> str:
    return _WHITESPACE.sub("", (raw or "").strip())


class Authenticator:
    def __init__(self, directory: AdminDirectory):
        self.directory = directory

    async def authenticate(self, username: str, password: str) -> Administrator:
        """
        Check a username and password and return the matching administrator.

        The stored password is compared as plain text; the identity store
        holds it that way.

        Raises:
            ValidationError: If either field is blank
            NotFoundError: If no administrator has that username
            InvalidCredentialsError: If the password does not match
            UnexpectedError: If the lookup itself fails
        """
        if not (username or "").strip() or not (password or "").strip():
            raise ValidationError("Please enter both username and password.")

        clean_username = normalize_username(username)
        try:
            record = self.directory.find_by_username(clean_username)
        except PortalError:
            raise
        except Exception as e:
            logger.exception("Unexpected error during login")
            raise UnexpectedError("An unexpected error occurred.") from e

        if record is None:
            logger.info(f"Login rejected: unknown username {clean_username!r}")
            raise NotFoundError("Username not found.")

        if record.password != password:
            logger.info(f"Login rejected: wrong password for administrator {record.admin_id}")
            raise InvalidCredentialsError("Incorrect password.")

        logger.info(f"Administrator {record.admin_id} logged in")
        return record.to_administrator()
