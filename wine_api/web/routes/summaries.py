"""Aggregate summary routes for regions and varieties."""

from fastapi import APIRouter
from pydantic import BaseModel

from wine_api.web.dependencies import QueryEngineDep

router = APIRouter(tags=["summaries"])


class VarietySummary(BaseModel):
    """Serialized per-variety statistics."""

    count: int
    avg_rating: float | None


@router.get("/regions", response_model=dict[str, int])
def get_regions(engine: QueryEngineDep) -> dict[str, int]:
    """Number of wines per region."""
    return engine.region_counts()


@router.get("/varieties", response_model=dict[str, VarietySummary])
def get_varieties(engine: QueryEngineDep) -> dict[str, VarietySummary]:
    """Number of wines and average rating per variety."""
    return {
        variety: VarietySummary(count=stats.count, avg_rating=stats.average_rating)
        for variety, stats in engine.variety_stats().items()
    }
