"""Core app configuration, database and security."""

from inkwell.core.config import get_settings, settings
from inkwell.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
