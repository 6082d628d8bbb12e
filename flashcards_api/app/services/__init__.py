"""
Service layer.

Each service wraps the SQL for one entity and is constructed with the
application's ``Database`` at startup.  Services raise the exceptions
from ``core.errors`` and never return raw ``sqlite3`` rows.
"""

from .card_service import CardService
from .deck_service import DeckService
from .user_service import UserService

__all__ = ["CardService", "DeckService", "UserService"]
