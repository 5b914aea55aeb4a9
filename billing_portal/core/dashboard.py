"""
Dashboard data: the initial concurrent load, the follow-up list and the
per-customer drill-in.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .filters import CityChoice, ProductChoice, visible_customers
from .inactivity import InactivityResolver
from ..api.services.customers import CustomersService
from ..api.services.inventory import InventoryService
from ..api.services.notes import NotesService
from ..config import PortalSettings, get_settings
from ..exceptions import NotFoundError, PortalError, TransportError
from ..models import (
    Billing,
    Customer,
    CustomerDetail,
    CustomerNote,
    CustomerRow,
    InventoryItem,
    ProductFilter,
)

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


@dataclass
class DashboardSnapshot:
    """Customers, billing and inventory as fetched by one load"""

    customers: List[Customer] = field(default_factory=list)
    billing: List[Billing] = field(default_factory=list)
    inventory: List[InventoryItem] = field(default_factory=list)

    def billing_for(self, customer_id: int) -> Optional[Billing]:
        return next((b for b in self.billing if b.customer_id == customer_id), None)

    def deposit_for(self, customer_id: int) -> str:
        billing = self.billing_for(customer_id)
        if billing is None or billing.deposit is None:
            return NOT_AVAILABLE
        return billing.deposit

    def customer(self, customer_id: int) -> Optional[Customer]:
        return next((c for c in self.customers if c.id == customer_id), None)


class DashboardService:
    def __init__(self, customers: CustomersService, inventory: InventoryService,
                 notes: NotesService, settings: Optional[PortalSettings] = None):
        self.customers = customers
        self.inventory = inventory
        self.notes = notes
        self.settings = settings or get_settings()
        self.inactivity = InactivityResolver(customers)
        self.snapshot: Optional[DashboardSnapshot] = None

    async def load(self) -> DashboardSnapshot:
        """
        Fetch customers, billing and inventory concurrently.

        Raises:
            TransportError: If any of the three reads fails; nothing is kept
        """
        try:
            customers, billing, inventory = await asyncio.gather(
                self.customers.list_customers(),
                self.customers.list_billing(),
                self.inventory.list_items(),
            )
        except PortalError as e:
            logger.error(f"Dashboard load failed: {e}")
            raise TransportError("Failed to fetch API data", status_code=e.status_code,
                                 response=e.response) from e

        self.snapshot = DashboardSnapshot(customers=customers, billing=billing, inventory=inventory)
        return self.snapshot

    def rows(self, snapshot: DashboardSnapshot, product_filter: ProductChoice = None,
             city_filter: CityChoice = None, search_text: Optional[str] = None) -> List[CustomerRow]:
        visible = visible_customers(
            snapshot.customers,
            snapshot.inventory,
            product_filter,
            city_filter,
            search_text,
            tracked_products=self.settings.TRACKED_PRODUCT_IDS,
        )
        return [CustomerRow(customer=c, deposit=snapshot.deposit_for(c.id)) for c in visible]

    def product_counts(self, snapshot: DashboardSnapshot, city_filter: CityChoice = None,
                       search_text: Optional[str] = None) -> Dict[str, int]:
        """List size for each product filter under the current city and search filters"""
        return {
            product.value: len(visible_customers(
                snapshot.customers,
                snapshot.inventory,
                product,
                city_filter,
                search_text,
                tracked_products=self.settings.TRACKED_PRODUCT_IDS,
            ))
            for product in ProductFilter
        }

    async def customer_notes(self, customer_id: int) -> Optional[List[CustomerNote]]:
        """None when the note history could not be fetched"""
        try:
            return await self.notes.notes_for_customer(customer_id)
        except PortalError as e:
            logger.error(f"Notes unavailable for customer {customer_id}: {e}")
            return None

    async def customer_detail(self, customer_id: int) -> CustomerDetail:
        """
        Raises:
            NotFoundError: If the customer is not in the loaded snapshot
            TransportError: If no snapshot is loaded yet and loading fails
        """
        snapshot = self.snapshot or await self.load()
        customer = snapshot.customer(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")

        inactive_since, notes = await asyncio.gather(
            self.inactivity.resolve(customer_id),
            self.customer_notes(customer_id),
        )
        return CustomerDetail(
            customer=customer,
            deposit=snapshot.deposit_for(customer_id),
            portal_url=self.settings.PORTAL_CUSTOMER_URL.format(id=customer_id),
            inactive_since=inactive_since,
            notes=notes,
        )
