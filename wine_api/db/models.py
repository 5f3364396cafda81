"""SQLAlchemy ORM models for the wine catalog."""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class WineRatingDB(Base):
    """
    Database model for wine ratings.

    Rows are written by an external ingestion process; the API only reads them.
    """

    __tablename__ = "wine_ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    region: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    variety: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<WineRatingDB(id={self.id}, name='{self.name}', region='{self.region}')>"
