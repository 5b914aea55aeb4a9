from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from jose import JWTError, jwt

from .config import PortalSettings
from .models import Administrator

logger = logging.getLogger(__name__)

SESSION_COOKIE = "portal_session"
JWT_ALG = "HS256"
SESSION_SCOPE = "portal:session"


def _exp_ts(ttl_minutes: int) -> int:
    return int((datetime.now(timezone.utc) + timedelta(minutes=ttl_minutes)).timestamp())


class SessionTokens:
    """Signs and checks the per-login token a caller presents on every request"""

    def __init__(self, secret: Optional[str] = None, ttl_minutes: int = 720):
        if not secret:
            # tokens then stop verifying after a restart
            logger.warning("SESSION_SECRET is not set, using a per-process secret")
            secret = secrets.token_urlsafe(32)
        self.secret = secret
        self.ttl_minutes = ttl_minutes

    @classmethod
    def from_settings(cls, settings: PortalSettings) -> "SessionTokens":
        return cls(settings.SESSION_SECRET, settings.SESSION_TTL_MINUTES)

    def mint(self, admin: Administrator) -> Tuple[str, int]:
        exp = _exp_ts(self.ttl_minutes)
        claims = {"sub": str(admin.id), "exp": exp, "scope": SESSION_SCOPE}
        return jwt.encode(claims, self.secret, algorithm=JWT_ALG), exp

    def verify(self, token: str) -> Dict:
        """
        Raises:
            JWTError: If the token is malformed, expired or signed with another secret
        """
        payload = jwt.decode(token, self.secret, algorithms=[JWT_ALG])
        if payload.get("scope") != SESSION_SCOPE or not payload.get("sub"):
            raise JWTError("invalid session token")
        return payload
