"""FastAPI dependencies for the Wine API routes."""

from typing import Annotated

from fastapi import Depends

from wine_api.db.engine import get_session_factory
from wine_api.db.store import SqlWineStore
from wine_api.services.query_engine import WineQueryEngine


def get_query_engine() -> WineQueryEngine:
    """Dependency to get a query engine over the configured database.

    Override this in tests to give routes an independent store.

    Returns:
        WineQueryEngine reading through SqlWineStore.
    """
    return WineQueryEngine(SqlWineStore(get_session_factory()))


# Type aliases for dependency injection
QueryEngineDep = Annotated[WineQueryEngine, Depends(get_query_engine)]
