"""
Follow-up list filtering.

A customer is on the list when its status is blocked or disabled and it holds
at least one assigned device of a tracked product. City and name filters then
narrow the list. Input order is preserved and duplicates are kept.
"""

from typing import Iterable, List, Optional, Set, Union

from ..exceptions import ValidationError
from ..models import CityFilter, Customer, InventoryItem, ProductFilter

FOLLOW_UP_STATUSES = {"blocked", "disabled"}
ASSIGNED = "assigned"
TRACKED_PRODUCTS = (1, 2)

ProductChoice = Optional[Union[ProductFilter, str, int]]
CityChoice = Optional[Union[CityFilter, str]]


def _product_id(product_filter: ProductChoice) -> Optional[int]:
    """None means every tracked product"""
    if product_filter is None:
        return None
    value = product_filter.value if isinstance(product_filter, ProductFilter) else product_filter
    if isinstance(value, str):
        value = value.strip()
        if not value or value.lower() == ProductFilter.ALL.value:
            return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Unknown product filter: {product_filter!r}")


def _city_value(city_filter: CityChoice) -> Optional[str]:
    if city_filter is None:
        return None
    value = city_filter.value if isinstance(city_filter, CityFilter) else city_filter
    value = value.strip()
    if not value or value.lower() == CityFilter.ALL.value:
        return None
    return value.lower()


def eligible_customer_ids(inventory: Iterable[InventoryItem],
                          product_filter: ProductChoice = None,
                          tracked_products: Iterable[int] = TRACKED_PRODUCTS) -> Set[int]:
    """Ids of customers holding an assigned device of a tracked (or the selected) product"""
    tracked = set(tracked_products)
    selected = _product_id(product_filter)
    return {
        item.customer_id
        for item in inventory
        if item.product_id in tracked
        and item.normalized_status == ASSIGNED
        and (selected is None or item.product_id == selected)
        and item.customer_id is not None
    }


def visible_customers(customers: Iterable[Customer],
                      inventory: Iterable[InventoryItem],
                      product_filter: ProductChoice = None,
                      city_filter: CityChoice = None,
                      search_text: Optional[str] = None,
                      tracked_products: Iterable[int] = TRACKED_PRODUCTS) -> List[Customer]:
    valid_ids = eligible_customer_ids(inventory, product_filter, tracked_products)

    result = [
        c for c in customers
        if c.normalized_status in FOLLOW_UP_STATUSES and c.id in valid_ids
    ]

    city = _city_value(city_filter)
    if city:
        result = [c for c in result if c.city and city in c.city.lower()]

    if search_text:
        query = search_text.lower()
        result = [c for c in result if query in (c.name or "").lower()]

    return result
