# deebank_admin/__init__.py
# This makes "deebank_admin" a package

from .db import Base, engine, SessionLocal, get_db

__all__ = ["Base", "engine", "SessionLocal", "get_db"]
