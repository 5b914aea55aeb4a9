"""
Dashboard logic: login, session, list filtering, inactivity labels and
follow-up actions.
"""

from .account import AccountService
from .actions import ActionRecorder
from .auth import Authenticator
from .dashboard import DashboardService, DashboardSnapshot
from .filters import visible_customers
from .inactivity import InactivityResolver
from .session import FileSlot, MemorySlot, SessionContext, SessionStore

__all__ = [
    "AccountService",
    "ActionRecorder",
    "Authenticator",
    "DashboardService",
    "DashboardSnapshot",
    "visible_customers",
    "InactivityResolver",
    "FileSlot",
    "MemorySlot",
    "SessionContext",
    "SessionStore",
]
