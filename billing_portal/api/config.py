"""
Portal API Configuration

Base URL, shared Authorization header and endpoint paths for the portal
REST API.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import PortalSettings, get_settings


# Endpoint paths relative to the API base
CUSTOMERS = "/customers/customer"
BILLING = "/customers/customer-billing/"
INVENTORY = "/inventory/items"
NOTES = "/customers/customer-notes"
TASKS = "/scheduling/tasks"


def change_logs_path(customer_id: int) -> str:
    return f"/customers/customer/{customer_id}/logs-changes"


@dataclass
class ApiConfig:
    """Configuration settings for the portal API"""

    base_url: str
    auth_header: str
    timeout: float = 30.0

    @property
    def headers(self) -> dict:
        """Headers sent with every request. The credential is shared, not per administrator."""
        return {
            "Authorization": self.auth_header,
            "Accept": "application/json",
        }

    def url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    @classmethod
    def from_settings(cls, settings: Optional[PortalSettings] = None) -> 'ApiConfig':
        """Create configuration from portal settings"""
        settings = settings or get_settings()
        return cls(
            base_url=settings.PORTAL_API_BASE,
            auth_header=settings.PORTAL_API_AUTH,
            timeout=settings.REQUEST_TIMEOUT,
        )

    def validate(self) -> bool:
        """Validate that required configuration is present"""
        if not self.base_url:
            raise ValueError("PORTAL_API_BASE is required")
        if not self.auth_header:
            raise ValueError("PORTAL_API_AUTH is required")
        return True
