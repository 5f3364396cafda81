"""Database initialization and persistence layer."""

from wine_api.db.engine import (
    create_db_engine,
    get_database_url,
    get_engine,
    get_session_factory,
    init_db,
    reset_engine,
)
from wine_api.db.models import Base, WineRatingDB
from wine_api.db.store import (
    InMemoryWineStore,
    SqlWineStore,
    StoreUnavailable,
    WineStore,
)

__all__ = [
    # Engine
    "create_db_engine",
    "get_database_url",
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_engine",
    # Models
    "Base",
    "WineRatingDB",
    # Stores
    "WineStore",
    "SqlWineStore",
    "InMemoryWineStore",
    "StoreUnavailable",
]
