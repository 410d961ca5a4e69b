"""Data Access Layer -- MongoDB repository classes and connection management."""

from potsettle.dal.database import (
    connect_to_mongo,
    close_mongo_connection,
    ensure_indexes,
    get_database,
)
from potsettle.dal.sessions_dal import SessionDAL

__all__ = [
    # Connection management
    "connect_to_mongo",
    "close_mongo_connection",
    "ensure_indexes",
    "get_database",
    # DAL classes
    "SessionDAL",
]
