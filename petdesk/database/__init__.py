from petdesk.database.base import Base, writable_values
from petdesk.database.engine import engine
from petdesk.database.session import SessionLocal, session_scope

__all__ = ["Base", "engine", "SessionLocal", "session_scope", "writable_values"]
