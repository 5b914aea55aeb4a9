"""
Portal Customers Service

Handles customer, billing and status change-log reads.
"""

import logging
from typing import List

from ..client import PortalApiClient, parse_records
from ..config import BILLING, CUSTOMERS, change_logs_path
from ...models import Billing, ChangeLogEntry, Customer


logger = logging.getLogger(__name__)


class CustomersService:
    """Service for reading portal customers"""

    def __init__(self, client: PortalApiClient):
        """
        Initialize CustomersService

        Args:
            client: Portal API client instance
        """
        self.client = client

    async def list_customers(self) -> List[Customer]:
        """
        Fetch every customer record

        Raises:
            TransportError: If the read fails
        """
        payload = await self.client.get(CUSTOMERS)
        customers = parse_records(Customer, payload, "customers")
        logger.info(f"Fetched {len(customers)} customers")
        return customers

    async def list_billing(self) -> List[Billing]:
        """
        Fetch every billing record

        Raises:
            TransportError: If the read fails
        """
        payload = await self.client.get(BILLING)
        billing = parse_records(Billing, payload, "billing records")
        logger.info(f"Fetched {len(billing)} billing records")
        return billing

    async def list_change_logs(self, customer_id: int) -> List[ChangeLogEntry]:
        """
        Fetch the status change history of one customer

        Args:
            customer_id: Portal customer ID

        Raises:
            TransportError: If the read fails
        """
        payload = await self.client.get(change_logs_path(customer_id))
        return parse_records(ChangeLogEntry, payload, "change logs")
