"""
Configuration and environment setup.

Settings are read from environment variables (and a local ``.env`` file).
"""

from .settings import PortalSettings, get_settings

__all__ = ["PortalSettings", "get_settings"]
