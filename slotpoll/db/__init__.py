"""Database package."""
from slotpoll.db.session import engine, SessionLocal, get_db, init_db
from slotpoll.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "Base"]
