"""Identity store access for administrator login and profile updates."""

from .directory import AdminDirectory

__all__ = ["AdminDirectory"]
