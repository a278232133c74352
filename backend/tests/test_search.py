import pytest
import pytest_asyncio

from recipe_book.services.recipes import build_search_query
from recipe_book.services.utils import split_csv


@pytest.mark.parametrize(
    "raw,expected",
    (
        (None, []),
        ("", []),
        ("Vegan", ["Vegan"]),
        ("Vegan, Quick,,", ["Vegan", "Quick"]),
    ),
)
def test_split_csv(raw, expected) -> None:
    assert split_csv(raw) == expected


def test_build_search_query_empty() -> None:
    assert build_search_query() == {}


def test_build_search_query_all_filters() -> None:
    query = build_search_query(tags="Vegan,Quick", cuisine="fren", ingredients="onion, stock", name="so.p")
    assert query["tags.name"] == {"$in": ["Vegan", "Quick"]}
    assert query["cuisine.name"] == {"$regex": "fren", "$options": "i"}
    assert query["$and"] == [
        {"ingredients.name": {"$regex": "onion", "$options": "i"}},
        {"ingredients.name": {"$regex": "stock", "$options": "i"}},
    ]
    # 정규식 메타문자는 이스케이프
    assert query["name"] == {"$regex": r"so\.p", "$options": "i"}


@pytest_asyncio.fixture
async def seeded(client, soup) -> dict:
    ids = {}
    for body in (
        soup(),
        soup(name="Spicy Noodles", cuisine="Korean", tags=["Spicy", "Quick"],
             ingredients=[{"name": "Noodles"}, {"name": "Chili flakes"}], prepTime=5),
        soup(name="Pasta", cuisine="Italian", tags=["Quick"],
             ingredients=[{"name": "Spaghetti"}, {"name": "Onion"}]),
    ):
        resp = await client.post("/recipes", json=body)
        ids[body["name"]] = resp.json()["recipeId"]
    return ids


async def _names(client, **params) -> list:
    resp = await client.get("/recipes", params=params)
    assert resp.status_code == 200
    return sorted(r["name"] for r in resp.json()["recipes"])


@pytest.mark.asyncio
async def test_list_summary_shape(client, seeded) -> None:
    resp = await client.get("/recipes")
    recipes = resp.json()["recipes"]
    assert len(recipes) == 3

    noodles = next(r for r in recipes if r["name"] == "Spicy Noodles")
    assert noodles["_id"] == seeded["Spicy Noodles"]
    assert noodles["cuisine"] == {"name": "Korean"}
    assert noodles["tags"] == [{"name": "Spicy"}, {"name": "Quick"}]
    assert noodles["prepTime"] == 5
    for omitted in ("ingredients", "instructions", "reviews", "cookTime", "servings"):
        assert omitted not in noodles


@pytest.mark.asyncio
async def test_search_by_name_case_insensitive(client, seeded) -> None:
    assert await _names(client, name="soup") == ["Soup"]
    assert await _names(client, name="NOODLE") == ["Spicy Noodles"]


@pytest.mark.asyncio
async def test_search_by_tags_any(client, seeded) -> None:
    assert await _names(client, tags="Vegan,Spicy") == ["Soup", "Spicy Noodles"]
    assert await _names(client, tags="Quick") == ["Pasta", "Spicy Noodles"]


@pytest.mark.asyncio
async def test_search_by_cuisine_substring(client, seeded) -> None:
    assert await _names(client, cuisine="ital") == ["Pasta"]


@pytest.mark.asyncio
async def test_search_by_ingredients_all_terms(client, seeded) -> None:
    assert await _names(client, ingredients="onion") == ["Pasta", "Soup"]
    assert await _names(client, ingredients="onion,spag") == ["Pasta"]
    assert await _names(client, ingredients="onion,noodle") == []


@pytest.mark.asyncio
async def test_search_filters_combine(client, seeded) -> None:
    assert await _names(client, tags="Quick", ingredients="onion") == ["Pasta"]
    assert await _names(client, tags="Quick", cuisine="french") == []


@pytest.mark.asyncio
async def test_search_regex_chars_are_literal(client, seeded) -> None:
    assert await _names(client, name=".*") == []
