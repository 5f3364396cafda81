"""Wine listing and search routes."""

from fastapi import APIRouter, Query

from wine_api.core.schema import FilterCriteria, SearchQuery, WineRecord
from wine_api.web.dependencies import QueryEngineDep

router = APIRouter(prefix="/wines", tags=["wines"])


@router.get("", response_model=list[WineRecord])
def list_wines(
    engine: QueryEngineDep,
    region: str | None = None,
    variety: str | None = None,
    min_rating: float | None = Query(default=None, allow_inf_nan=False),
    max_rating: float | None = Query(default=None, allow_inf_nan=False),
) -> list[WineRecord]:
    """
    List wines, optionally filtered.

    Region and variety must match exactly. Results keep catalog order.
    """
    criteria = FilterCriteria(
        region=region,
        variety=variety,
        min_rating=min_rating,
        max_rating=max_rating,
    )
    return engine.list_wines(criteria)


@router.get("/search", response_model=list[WineRecord])
def search_wines(engine: QueryEngineDep, q: str) -> list[WineRecord]:
    """Search wine names and notes for a keyword (case-insensitive)."""
    return engine.search_wines(SearchQuery(term=q))


@router.get("/region/{region:path}", response_model=list[WineRecord])
def list_wines_by_region(engine: QueryEngineDep, region: str) -> list[WineRecord]:
    """List wines whose region equals the decoded path segment."""
    return engine.list_wines(FilterCriteria(region=region))
