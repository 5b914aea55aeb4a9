"""
"Inactive since" label derived from a customer's status change log.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from .timeutils import format_month_year
from ..api.services.customers import CustomersService
from ..exceptions import PortalError
from ..models import ChangeLogEntry

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
DISABLED = "disabled"


def _entry_moment(entry: ChangeLogEntry) -> datetime:
    try:
        moment = datetime.fromisoformat(f"{entry.date}T{entry.time}")
    except ValueError:
        # unparseable entries rank last
        return datetime.min
    # offsets are dropped so every moment compares as a wall-clock reading
    return moment.replace(tzinfo=None)


def inactivity_label(entries: Iterable[ChangeLogEntry]) -> str:
    """Month and year of the latest move to disabled, or ``N/A`` when there is none."""
    disabled = [e for e in entries if e.normalized_status == DISABLED]
    if not disabled:
        return NOT_AVAILABLE

    latest = max(disabled, key=_entry_moment)
    try:
        return format_month_year(latest.date[:10])
    except ValueError:
        logger.warning(f"Unreadable change-log date: {latest.date!r}")
        return NOT_AVAILABLE


class InactivityResolver:
    """Resolves the "inactive since" label for one customer at a time"""

    def __init__(self, customers: CustomersService):
        self.customers = customers

    async def resolve(self, customer_id: int) -> Optional[str]:
        """
        Returns the label, or None when the change log could not be fetched
        (the caller keeps showing its pending state).
        """
        try:
            entries = await self.customers.list_change_logs(customer_id)
        except PortalError as e:
            logger.error(f"Change log unavailable for customer {customer_id}: {e}")
            return None
        return inactivity_label(entries)
