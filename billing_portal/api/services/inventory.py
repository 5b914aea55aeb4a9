"""
Portal Inventory Service
"""

import logging
from typing import List

from ..client import PortalApiClient, parse_records
from ..config import INVENTORY
from ...models import InventoryItem


logger = logging.getLogger(__name__)


class InventoryService:
    """Service for reading inventory items (customer devices)"""

    def __init__(self, client: PortalApiClient):
        self.client = client

    async def list_items(self) -> List[InventoryItem]:
        """Fetch every inventory item"""
        payload = await self.client.get(INVENTORY)
        items = parse_records(InventoryItem, payload, "inventory items")
        logger.info(f"Fetched {len(items)} inventory items")
        return items
