"""Pydantic v2 models for wine records and query parameters."""

from pydantic import BaseModel, ConfigDict, Field


class WineRecord(BaseModel):
    """One entry in the wine catalog."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    region: str = ""
    variety: str = ""
    rating: float | None = None
    notes: str = ""


class FilterCriteria(BaseModel):
    """
    Optional constraints for listing wines.

    Every criterion that is set must hold for a record to be included.
    Region and variety are compared exactly, without case folding.
    """

    region: str | None = None
    variety: str | None = None
    min_rating: float | None = Field(default=None, allow_inf_nan=False)
    max_rating: float | None = Field(default=None, allow_inf_nan=False)

    @property
    def is_empty(self) -> bool:
        """True when no criterion is set."""
        return (
            self.region is None
            and self.variety is None
            and self.min_rating is None
            and self.max_rating is None
        )

    @property
    def is_unsatisfiable(self) -> bool:
        """True when the rating bounds cannot both hold."""
        return (
            self.min_rating is not None
            and self.max_rating is not None
            and self.min_rating > self.max_rating
        )

    def matches(self, record: WineRecord) -> bool:
        """Check whether a record satisfies every set criterion."""
        if self.region is not None and record.region != self.region:
            return False
        if self.variety is not None and record.variety != self.variety:
            return False
        if self.min_rating is not None:
            if record.rating is None or record.rating < self.min_rating:
                return False
        if self.max_rating is not None:
            if record.rating is None or record.rating > self.max_rating:
                return False
        return True


class SearchQuery(BaseModel):
    """A keyword matched case-insensitively against name and notes.

    The term is matched as given, surrounding whitespace included."""

    term: str

    @property
    def is_blank(self) -> bool:
        """True when the term is empty or whitespace-only."""
        return not self.term.strip()

    def matches(self, record: WineRecord) -> bool:
        """Check whether the term occurs in the record's name or notes."""
        needle = self.term.lower()
        return needle in record.name.lower() or needle in record.notes.lower()
