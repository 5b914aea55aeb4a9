"""
Data models for the billing portal.

Records owned by the portal API are parsed leniently: unknown fields are
ignored and optional fields may be missing or null.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


class ProductFilter(str, Enum):
    ALL = "all"
    G5010 = "2"
    BAICELL = "1"


class CityFilter(str, Enum):
    ALL = "all"
    POLOKWANE = "Polokwane"
    JOHANNESBURG = "Johannesburg"


class Administrator(BaseModel):
    """Authenticated staff user. Never carries the password."""

    id: int
    name: str
    username: str


class AdministratorRecord(BaseModel):
    """Row of the identity store's administrator table"""

    model_config = ConfigDict(populate_by_name=True)

    admin_id: int
    name: str = ""
    username: str = ""
    password: Optional[str] = Field(default=None, alias="Password")

    def to_administrator(self) -> Administrator:
        return Administrator(id=self.admin_id, name=self.name, username=self.username)


class AdministratorUpdate(BaseModel):
    """Partial update of an administrator's login details"""

    username: Optional[str] = None
    password: Optional[str] = None

    def to_record(self) -> Dict[str, str]:
        """Column mapping for the identity store; blank fields are left out"""
        record: Dict[str, str] = {}
        if self.username and self.username.strip():
            record["username"] = self.username.strip()
        if self.password and self.password.strip():
            record["Password"] = self.password.strip()
        return record


class Customer(BaseModel):
    id: int
    name: str = ""
    status: Optional[str] = None
    billing_type: Optional[str] = None
    phone: Optional[str] = None
    street_1: Optional[str] = None
    city: Optional[str] = None
    gps: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def null_name_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def normalized_status(self) -> str:
        return _normalize(self.status)


class Billing(BaseModel):
    customer_id: int
    deposit: Optional[str] = None

    @field_validator("deposit", mode="before")
    @classmethod
    def deposit_as_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return value
        return str(value)


class InventoryItem(BaseModel):
    id: int
    product_id: Optional[int] = None
    customer_id: Optional[int] = None
    status: Optional[str] = None

    @property
    def normalized_status(self) -> str:
        return _normalize(self.status)


class ChangeLogEntry(BaseModel):
    new_status: Optional[str] = None
    date: str = ""
    time: str = ""

    @field_validator("date", "time", mode="before")
    @classmethod
    def null_moment_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def normalized_status(self) -> str:
        return _normalize(self.new_status)


class CustomerNote(BaseModel):
    """Comment or audit entry attached to a customer"""

    id: Optional[int] = None
    customer_id: int
    datetime: str = ""
    administrator_id: Optional[int] = None
    name: str = ""
    type: str = "comment"
    title: str = ""
    comment: str = ""
    is_done: str = "1"
    is_send: str = "1"
    is_pinned: str = "0"

    @field_validator("datetime", "name", "title", "comment", mode="before")
    @classmethod
    def null_text_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("is_done", "is_send", "is_pinned", mode="before")
    @classmethod
    def flag_as_text(cls, value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        return str(value)


class CollectionTask(BaseModel):
    """Scheduling task asking the field team to collect a device"""

    title: str
    description: str = "Collect device from the customer"
    reporter_id: int = 1
    address: str = "No address"
    gps: str = ""
    related_customer_id: int
    partner_id: int = 1
    project_id: int = 1
    location_id: int = 1
    related_to_id: int = 1
    created_at: str
    updated_at: str
    priority: str = "priority_medium"
    assigned_to: str = "assigned_to_team"
    assignee: int
    assigned_at: str
    is_scheduled: bool = True
    scheduled_from: str
    formatted_duration: str = "1h 25m"
    workflow_status_id: int = 1
    is_archived: int = 0
    travel_time_to: int = 0
    travel_time_from: int = 0
    closed: int = 0
    notification_send_interval: int = 0
    notification_enabled: str = "1"
    remaining: int = 0
    last_status_changed: str
    watchers: List[int] = Field(default_factory=list)


class CustomerRow(BaseModel):
    """Dashboard list entry: a visible customer and its deposit"""

    customer: Customer
    deposit: str = "N/A"


class CustomerDetail(BaseModel):
    customer: Customer
    deposit: str = "N/A"
    portal_url: Optional[str] = None
    inactive_since: Optional[str] = Field(default=None, description="None while unresolved")
    notes: Optional[List[CustomerNote]] = Field(default=None, description="None when unavailable")
