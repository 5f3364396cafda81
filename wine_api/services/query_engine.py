"""Query engine for the wine catalog.

Turns filter and search parameters into ordered result sets, and computes
the per-region and per-variety summaries. Every operation reads one
snapshot from the store and keeps no state between calls.
"""

import logging
from collections import Counter
from dataclasses import dataclass

from wine_api.core.errors import WineApiError
from wine_api.core.schema import FilterCriteria, SearchQuery, WineRecord
from wine_api.db.store import WineStore

logger = logging.getLogger(__name__)


class InvalidQuery(WineApiError):
    """Raised when a search term is empty or whitespace-only."""


@dataclass
class VarietyStats:
    """Record count and mean rating for one variety."""

    count: int
    average_rating: float | None


class WineQueryEngine:
    """Service for listing, searching and summarizing wines."""

    def __init__(self, store: WineStore):
        """Initialize with the store to read records from."""
        self.store = store

    def list_wines(self, criteria: FilterCriteria | None = None) -> list[WineRecord]:
        """
        List wines matching every set criterion.

        Results keep the store's iteration order; nothing is sorted here.

        Args:
            criteria: Filters to apply. None or an empty criteria lists everything.

        Returns:
            Matching records. Empty when min_rating exceeds max_rating.
        """
        if criteria is None:
            criteria = FilterCriteria()

        if criteria.is_unsatisfiable:
            logger.debug(
                f"min_rating {criteria.min_rating} > max_rating {criteria.max_rating}, "
                "returning no wines"
            )
            return []

        if criteria.is_empty:
            return self.store.all_records()

        logger.debug(f"Listing wines with {criteria.model_dump(exclude_none=True)}")
        return self.store.scan(criteria.matches)

    def search_wines(self, query: SearchQuery | str) -> list[WineRecord]:
        """
        Search wine names and notes for a keyword.

        Args:
            query: The search term, matched case-insensitively as a substring.
                Surrounding whitespace is part of the term.

        Returns:
            Records whose name or notes contain the term, in store order.

        Raises:
            InvalidQuery: If the term is empty after trimming whitespace.
        """
        if isinstance(query, str):
            query = SearchQuery(term=query)

        if query.is_blank:
            raise InvalidQuery("Search query must not be empty")

        logger.debug(f"Searching wines for '{query.term}'")
        return self.store.scan(query.matches)

    def region_counts(self) -> dict[str, int]:
        """Get the number of wines per exact region label."""
        return dict(Counter(record.region for record in self.store.all_records()))

    def variety_stats(self) -> dict[str, VarietyStats]:
        """
        Get the count and mean rating per exact variety label.

        The mean is taken over the bucket's rated records and is not rounded.
        It is None for a bucket with no rated records.
        """
        counts: Counter[str] = Counter()
        rated_counts: Counter[str] = Counter()
        rating_sums: dict[str, float] = {}

        for record in self.store.all_records():
            counts[record.variety] += 1
            if record.rating is not None:
                rated_counts[record.variety] += 1
                rating_sums[record.variety] = rating_sums.get(record.variety, 0.0) + record.rating

        return {
            variety: VarietyStats(
                count=count,
                average_rating=(
                    rating_sums[variety] / rated_counts[variety]
                    if variety in rated_counts
                    else None
                ),
            )
            for variety, count in counts.items()
        }
