import httpx
import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from recipe_book.db.init import get_db
from recipe_book.main import app

CUISINES = ["French", "Italian", "Korean"]
TAGS = ["Vegan", "Quick", "Spicy"]


@pytest_asyncio.fixture
async def db():
    database = AsyncMongoMockClient()["recipe_book_test"]
    await database["cuisines"].insert_many([{"name": n} for n in CUISINES])
    await database["tags"].insert_many([{"name": n} for n in TAGS])
    return database


@pytest_asyncio.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def _soup(**overrides) -> dict:
    body = {
        "name": "Soup",
        "cuisine": "French",
        "prepTime": 10,
        "cookTime": 30,
        "servings": 4,
        "ingredients": [{"name": "Onion"}, {"name": "Beef stock"}],
        "instructions": ["Slice onions", "Simmer in stock"],
        "tags": ["Vegan"],
    }
    body.update(overrides)
    return body


@pytest.fixture
def soup():
    return _soup


@pytest_asyncio.fixture
async def recipe_id(client) -> str:
    resp = await client.post("/recipes", json=_soup())
    assert resp.status_code == 201
    return resp.json()["recipeId"]
