"""SQLite database engine and session management."""

import os
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Default database path (can be overridden via DATABASE_URL)
DEFAULT_DB_PATH = Path("wine_ratings.db")


def get_database_url(db_path: Path | str | None = None) -> str:
    """
    Get the database URL.

    Accepts a full SQLAlchemy URL, a bare file path, or the short
    ``sqlite:<path>`` and ``sqlite::memory:`` forms.

    Args:
        db_path: Optional path or URL. If None, uses the DATABASE_URL
                 env var or the default path.

    Returns:
        SQLAlchemy connection URL.
    """
    if db_path is not None:
        value = str(db_path)
    else:
        value = os.environ.get("DATABASE_URL") or str(DEFAULT_DB_PATH)

    if value in ("sqlite::memory:", "sqlite://", ":memory:"):
        return "sqlite://"
    if "://" in value:
        return value

    # Short sqlite:<path> form
    if value.startswith("sqlite:"):
        value = value[len("sqlite:"):]

    path = Path(value)
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def create_db_engine(db_path: Path | str | None = None, echo: bool = False):
    """
    Create a SQLAlchemy engine.

    Args:
        db_path: Optional path or URL of the database.
        echo: If True, log all SQL statements.

    Returns:
        SQLAlchemy Engine instance.
    """
    url = get_database_url(db_path)
    connect_args = {}
    if url.startswith("sqlite"):
        # Route handlers run in a threadpool
        connect_args["check_same_thread"] = False
    if url == "sqlite://":
        # One shared connection, so every thread sees the same in-memory database
        return create_engine(
            url, echo=echo, connect_args=connect_args, poolclass=StaticPool
        )
    return create_engine(url, echo=echo, connect_args=connect_args)


# Global engine and session factory (initialized lazily)
_engine = None
_SessionLocal = None


def get_engine(db_path: Path | str | None = None, echo: bool = False):
    """Get or create the global database engine."""
    global _engine
    if _engine is None:
        _engine = create_db_engine(db_path, echo)
    return _engine


def get_session_factory(db_path: Path | str | None = None):
    """Get or create the global session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine(db_path)
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return _SessionLocal


def reset_engine() -> None:
    """Reset the global engine and session factory (useful for testing)."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def init_db(db_path: Path | str | None = None) -> None:
    """
    Create the wine_ratings table if it does not exist.

    Args:
        db_path: Optional path to the database file.
    """
    from wine_api.db.models import Base

    engine = get_engine(db_path)
    Base.metadata.create_all(bind=engine)
