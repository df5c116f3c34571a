"""Database package: engine, session, base."""

from repledger.db.session import get_db, get_engine, get_session_maker, init_models

__all__ = ["get_db", "get_engine", "get_session_maker", "init_models"]
