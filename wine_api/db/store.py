"""Read-only stores backing the wine catalog."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from wine_api.core.errors import WineApiError
from wine_api.core.schema import WineRecord
from wine_api.db.models import WineRatingDB

logger = logging.getLogger(__name__)


class StoreUnavailable(WineApiError):
    """Raised when the underlying data source cannot be read."""


class WineStore(ABC):
    """
    Read access to the wine catalog.

    Implementations must return a consistent snapshot from each
    all_records() call: no records appear or vanish mid-iteration.
    """

    @abstractmethod
    def all_records(self) -> list[WineRecord]:
        """
        Return every record in the catalog.

        Raises:
            StoreUnavailable: If the data source cannot be reached.
        """

    def scan(self, predicate: Callable[[WineRecord], bool]) -> list[WineRecord]:
        """
        Return the records matching a predicate, in store order.

        Args:
            predicate: Called once per record; True keeps the record.

        Returns:
            Matching records from a single all_records() snapshot.
        """
        return [record for record in self.all_records() if predicate(record)]


class SqlWineStore(WineStore):
    """Store reading the wine_ratings table through SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def all_records(self) -> list[WineRecord]:
        """Return every row of wine_ratings ordered by id."""
        stmt = select(WineRatingDB).order_by(WineRatingDB.id)
        session = self.session_factory()
        try:
            rows = session.execute(stmt).scalars().all()
            records = [self._to_domain(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to read wine_ratings: {e}")
            raise StoreUnavailable("Wine catalog is unavailable") from e
        finally:
            session.close()

        logger.debug(f"Read {len(records)} wine records")
        return records

    def _to_domain(self, row: WineRatingDB) -> WineRecord:
        """Convert DB model to domain model."""
        return WineRecord(
            id=row.id,
            name=row.name,
            region=row.region or "",
            variety=row.variety or "",
            rating=row.rating,
            notes=row.notes or "",
        )


class InMemoryWineStore(WineStore):
    """Store serving a fixed set of records held in memory."""

    def __init__(self, records: Iterable[WineRecord] = ()):
        self._records = tuple(records)

    def all_records(self) -> list[WineRecord]:
        """Return the held records in insertion order."""
        return list(self._records)
