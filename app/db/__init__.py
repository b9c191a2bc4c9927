"""Database package: engine, session, base, store guard."""

from app.db.guard import store_operation
from app.db.session import async_session_maker, get_db

__all__ = ["async_session_maker", "get_db", "store_operation"]
