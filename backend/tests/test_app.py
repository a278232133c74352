import httpx
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from recipe_book.db.init import get_db
from recipe_book.main import app
from recipe_book.scripts.seed_refs import DEFAULT_CUISINES, DEFAULT_TAGS, seed


class _DownCollection:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ServerSelectionTimeoutError("mongo is down")
        return fail


class _DownDatabase:
    def __getitem__(self, name):
        return _DownCollection()

    async def command(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("mongo is down")


@pytest.mark.asyncio
async def test_root(client) -> None:
    resp = await client.get("/")
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_reference_listings_sorted(client) -> None:
    cuisines = (await client.get("/cuisines")).json()["cuisines"]
    assert [c["name"] for c in cuisines] == ["French", "Italian", "Korean"]
    assert all(isinstance(c["_id"], str) for c in cuisines)

    tags = (await client.get("/tags")).json()["tags"]
    assert [t["name"] for t in tags] == ["Quick", "Spicy", "Vegan"]


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client) -> None:
    resp = await client.get("/nope")
    assert resp.status_code == 404
    assert "error" in resp.json()


@pytest.mark.asyncio
async def test_store_failure_is_generic_500(caplog) -> None:
    app.dependency_overrides[get_db] = lambda: _DownDatabase()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.get("/recipes/0123456789abcdef01234567")
            listing = await c.get("/recipes")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert listing.status_code == 500
    assert "mongo is down" not in resp.text
    assert "Error fetching recipe" in caplog.text


@pytest.mark.asyncio
async def test_health_reports_db_error() -> None:
    # 초기화 전이면 get_db가 예외 → db 상태에 에러 문자열
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        resp = await c.get("/health")
    body = resp.json()
    assert body["status"] == "ok"
    assert body["db"].startswith("error:")


@pytest.mark.asyncio
async def test_seed_is_idempotent(db) -> None:
    counts = await seed(db)
    # French/Italian/Korean, Vegan/Quick/Spicy 는 conftest에서 이미 넣음
    assert counts == {"cuisines": len(DEFAULT_CUISINES) - 3, "tags": len(DEFAULT_TAGS) - 3}
    assert await seed(db) == {"cuisines": 0, "tags": 0}
    assert await db["cuisines"].count_documents({"name": "Thai"}) == 1
