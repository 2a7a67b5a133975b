"""Database module for the URL shortener application."""
from urlshortener.db.base import Database, DatabaseNotConnectedError
from urlshortener.db.session import get_db, get_database, db_transaction

__all__ = [
    "Database",
    "DatabaseNotConnectedError",
    "get_db",
    "get_database",
    "db_transaction",
]
