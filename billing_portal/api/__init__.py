"""
Portal REST API Integration

Client and per-resource services for the portal's customers, billing,
inventory, notes, scheduling tasks and change logs.
"""

from .client import PortalApiClient
from .config import ApiConfig
from .services.customers import CustomersService
from .services.inventory import InventoryService
from .services.notes import NotesService
from .services.tasks import TasksService

__all__ = [
    'PortalApiClient',
    'ApiConfig',
    'CustomersService',
    'InventoryService',
    'NotesService',
    'TasksService'
]
