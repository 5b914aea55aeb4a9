"""
Portal Configuration

Every value the dashboard needs to reach its collaborators: the identity
store, the portal REST API and the local session file. Values come from the
environment so deployments never ship credentials in code.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class PortalSettings(BaseSettings):
    """Settings for the billing portal"""

    # Identity store (Supabase)
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_KEY: str = ""
    ADMIN_TABLE: str = "Admin"

    # Portal REST API
    PORTAL_API_BASE: str = "https://portal.umoja.network/api/2.0/admin"
    PORTAL_API_AUTH: str = ""
    PORTAL_CUSTOMER_URL: str = "https://portal.umoja.network/admin/customers/view?id={id}"
    REQUEST_TIMEOUT: float = 30.0

    # Local time and session persistence
    TIMEZONE: str = "Africa/Johannesburg"
    SESSION_FILE: Path = Path("~/.billing_portal/session.json")
    SESSION_SECRET: str = ""
    SESSION_TTL_MINUTES: int = 720

    # HTTP surface
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Dashboard scope
    TRACKED_PRODUCT_IDS: List[int] = [1, 2]

    # Collection task routing
    TEAM_ADMIN_IDS: List[int] = [6, 21, 23]
    TEAM_ASSIGNEE: int = 1
    DEFAULT_ASSIGNEE: int = 2
    TASK_WATCHERS: List[int] = [10, 11]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @property
    def session_path(self) -> Path:
        return self.SESSION_FILE.expanduser()


@lru_cache()
def get_settings() -> PortalSettings:
    return PortalSettings()
