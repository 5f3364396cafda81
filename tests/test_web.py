"""Tests for the HTTP routes."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from wine_api.core.schema import WineRecord
from wine_api.db.engine import create_db_engine
from wine_api.db.models import Base, WineRatingDB
from wine_api.db.store import InMemoryWineStore, SqlWineStore, StoreUnavailable
from wine_api.services.query_engine import WineQueryEngine
from wine_api.web.app import create_app
from wine_api.web.dependencies import get_query_engine

SEED_ROWS = [
    (1, "Test Cabernet 2020", "California", "Red Wine", 92.5, "Rich and bold with notes of cherry"),
    (2, "Test Chardonnay 2021", "California", "White Wine", 88.0, "Crisp and clean with citrus notes"),
    (3, "Test Pinot Noir 2019", "Oregon", "Red Wine", 90.0, "Light bodied with earthy undertones"),
    (4, "Bourbon Barrel Aged Red", "Texas", "Red Wine", 95.0, "Aged in bourbon barrels with vanilla notes"),
    (5, "Test Sauvignon Blanc", "Washington", "White Wine", 86.5, "Fresh and herbaceous"),
]


@pytest.fixture
def temp_db_path():
    """Create a temporary database file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test_web.db"


@pytest.fixture
def test_engine(temp_db_path):
    """Create a test database engine seeded with five wines."""
    engine = create_db_engine(temp_db_path)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    session.add_all(
        WineRatingDB(id=i, name=n, region=r, variety=v, rating=s, notes=t)
        for i, n, r, v, s, t in SEED_ROWS
    )
    session.commit()
    session.close()

    yield engine
    engine.dispose()


@pytest.fixture
def client(test_engine):
    """Create a test client whose routes read the seeded database."""
    app = create_app()
    session_factory = sessionmaker(bind=test_engine)
    app.dependency_overrides[get_query_engine] = lambda: WineQueryEngine(
        SqlWineStore(session_factory)
    )
    return TestClient(app)


def _client_for(store) -> TestClient:
    """Create a test client backed by the given store."""
    app = create_app()
    app.dependency_overrides[get_query_engine] = lambda: WineQueryEngine(store)
    return TestClient(app)


class TestListWines:
    """Tests for GET /wines."""

    def test_get_all_wines(self, client: TestClient) -> None:
        """All wines are returned with every field."""
        response = client.get("/wines")
        assert response.status_code == 200

        wines = response.json()
        assert len(wines) == 5
        assert wines[0] == {
            "id": 1,
            "name": "Test Cabernet 2020",
            "region": "California",
            "variety": "Red Wine",
            "rating": 92.5,
            "notes": "Rich and bold with notes of cherry",
        }

    def test_catalog_order_not_sorted(self, client: TestClient) -> None:
        """Results follow catalog order rather than name or rating order."""
        wines = client.get("/wines").json()
        assert [w["id"] for w in wines] == [1, 2, 3, 4, 5]
        names = [w["name"] for w in wines]
        assert names != sorted(names)

    def test_filter_by_region(self, client: TestClient) -> None:
        """Region filter matches exactly."""
        response = client.get("/wines", params={"region": "California"})
        assert response.status_code == 200

        wines = response.json()
        assert [w["id"] for w in wines] == [1, 2]
        assert all(w["region"] == "California" for w in wines)

    def test_region_filter_is_case_sensitive(self, client: TestClient) -> None:
        """A differently cased region matches nothing."""
        response = client.get("/wines", params={"region": "california"})
        assert response.status_code == 200
        assert response.json() == []

    def test_filter_by_variety(self, client: TestClient) -> None:
        """Variety filter matches exactly."""
        wines = client.get("/wines", params={"variety": "White Wine"}).json()
        assert [w["id"] for w in wines] == [2, 5]

    def test_filter_by_rating(self, client: TestClient) -> None:
        """min_rating keeps wines rated at or above it."""
        response = client.get("/wines", params={"min_rating": "90"})
        assert response.status_code == 200

        wines = response.json()
        assert [w["id"] for w in wines] == [1, 3, 4]
        assert all(w["rating"] >= 90.0 for w in wines)

    def test_filter_by_rating_range(self, client: TestClient) -> None:
        """min_rating and max_rating combine."""
        wines = client.get("/wines", params={"min_rating": 88, "max_rating": 92.5}).json()
        assert [w["id"] for w in wines] == [1, 2, 3]

    def test_combined_filters(self, client: TestClient) -> None:
        """All filters apply together."""
        wines = client.get(
            "/wines",
            params={"region": "California", "variety": "Red Wine", "max_rating": 95},
        ).json()
        assert [w["id"] for w in wines] == [1]

    def test_inverted_range_is_empty(self, client: TestClient) -> None:
        """min_rating above max_rating is an empty success."""
        response = client.get("/wines", params={"min_rating": 95, "max_rating": 85})
        assert response.status_code == 200
        assert response.json() == []

    def test_non_numeric_rating_rejected(self, client: TestClient) -> None:
        """A non-numeric rating bound fails request validation."""
        response = client.get("/wines", params={"min_rating": "high"})
        assert response.status_code == 422

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
    def test_non_finite_rating_rejected(self, client: TestClient, value: str) -> None:
        """NaN and infinite rating bounds fail request validation."""
        for param in ("min_rating", "max_rating"):
            response = client.get("/wines", params={param: value})
            assert response.status_code == 422


class TestSearchWines:
    """Tests for GET /wines/search."""

    def test_search_wines(self, client: TestClient) -> None:
        """Search is case-insensitive over name and notes."""
        response = client.get("/wines/search", params={"q": "bourbon"})
        assert response.status_code == 200

        wines = response.json()
        assert len(wines) == 1
        assert wines[0]["name"] == "Bourbon Barrel Aged Red"

    def test_search_notes(self, client: TestClient) -> None:
        """Notes are searched too, in catalog order."""
        wines = client.get("/wines/search", params={"q": "NOTES"}).json()
        assert [w["id"] for w in wines] == [1, 2, 4]

    def test_search_no_match(self, client: TestClient) -> None:
        """An unmatched term returns an empty list."""
        response = client.get("/wines/search", params={"q": "merlot"})
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize("term", ["", "   "])
    def test_blank_query_rejected(self, client: TestClient, term: str) -> None:
        """Empty or whitespace-only terms are a client error."""
        response = client.get("/wines/search", params={"q": term})
        assert response.status_code == 400
        assert response.json() == {"detail": "Search query must not be empty"}

    def test_missing_query_rejected(self, client: TestClient) -> None:
        """q is required."""
        response = client.get("/wines/search")
        assert response.status_code == 422


class TestWinesByRegion:
    """Tests for GET /wines/region/{region}."""

    def test_get_wines_by_region(self, client: TestClient) -> None:
        """Wines in the region are returned."""
        response = client.get("/wines/region/California")
        assert response.status_code == 200

        wines = response.json()
        assert len(wines) == 2
        assert all(w["region"] == "California" for w in wines)

    def test_get_wines_by_nonexistent_region(self, client: TestClient) -> None:
        """An unknown region is an empty success."""
        response = client.get("/wines/region/NonExistent")
        assert response.status_code == 200
        assert response.json() == []

    def test_percent_encoded_region(self) -> None:
        """Reserved characters in the segment are decoded before matching."""
        store = InMemoryWineStore([
            WineRecord(id=1, name="Otago Pinot", region="Central Otago, New Zealand"),
            WineRecord(id=2, name="Marlborough Sauvignon", region="Marlborough, New Zealand"),
        ])
        client = _client_for(store)

        response = client.get("/wines/region/Central%20Otago%2C%20New%20Zealand")
        assert response.status_code == 200
        assert [w["id"] for w in response.json()] == [1]


class TestSummaries:
    """Tests for GET /regions and GET /varieties."""

    def test_get_regions(self, client: TestClient) -> None:
        """Regions map to wine counts."""
        response = client.get("/regions")
        assert response.status_code == 200
        assert response.json() == {
            "California": 2,
            "Oregon": 1,
            "Texas": 1,
            "Washington": 1,
        }

    def test_get_varieties(self, client: TestClient) -> None:
        """Varieties map to count and unrounded average rating."""
        response = client.get("/varieties")
        assert response.status_code == 200

        varieties = response.json()
        assert varieties == {
            "Red Wine": {"count": 3, "avg_rating": 92.5},
            "White Wine": {"count": 2, "avg_rating": 87.25},
        }

    def test_empty_catalog(self) -> None:
        """An empty catalog has empty summaries."""
        client = _client_for(InMemoryWineStore())
        assert client.get("/regions").json() == {}
        assert client.get("/varieties").json() == {}


class TestStoreUnavailable:
    """Store failures surface as server errors."""

    @pytest.mark.parametrize(
        "path",
        ["/wines", "/wines/search?q=red", "/wines/region/Oregon", "/regions", "/varieties"],
    )
    def test_store_unavailable_returns_503(self, path: str) -> None:
        """Every endpoint reports an unreachable store as 503."""

        class BrokenStore(InMemoryWineStore):
            def all_records(self):
                raise StoreUnavailable("Wine catalog is unavailable")

        response = _client_for(BrokenStore()).get(path)
        assert response.status_code == 503
        assert response.json() == {"detail": "Wine catalog is unavailable"}

    def test_missing_table_returns_503(self, temp_db_path) -> None:
        """A database without the table is reported, not hidden as empty."""
        engine = create_db_engine(temp_db_path.with_name("empty.db"))
        client = _client_for(SqlWineStore(sessionmaker(bind=engine)))

        response = client.get("/regions")
        assert response.status_code == 503
        engine.dispose()


class TestCors:
    """Tests for the CORS policy."""

    def test_cors_allows_any_origin(self, client: TestClient) -> None:
        """Cross-origin requests are allowed."""
        response = client.get("/regions", headers={"Origin": "https://example.com"})
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
