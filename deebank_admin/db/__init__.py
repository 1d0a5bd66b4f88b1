# deebank_admin/db/__init__.py
from deebank_admin.db.session import Base, SessionLocal, engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db"]
