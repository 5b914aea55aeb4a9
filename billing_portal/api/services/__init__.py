"""
Portal API Services

Service modules for the portal API resources.
"""

from .customers import CustomersService
from .inventory import InventoryService
from .notes import NotesService
from .tasks import TasksService

__all__ = [
    'CustomersService',
    'InventoryService',
    'NotesService',
    'TasksService'
]
