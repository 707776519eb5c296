from .connection import Base, engine, SessionLocal, get_db, init_db, check_db_connection

__all__ = ["Base", "engine", "SessionLocal", "get_db", "init_db", "check_db_connection"]
