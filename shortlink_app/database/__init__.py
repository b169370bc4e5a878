from .connection import Base, create_db_engine, create_session_factory, get_db, init_database

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "get_db",
    "init_database",
]
