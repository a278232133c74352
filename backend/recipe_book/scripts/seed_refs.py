# scripts/seed_refs.py
# 참조 컬렉션(cuisines/tags) 기본값 채우기: 이름 기준 upsert라 여러 번 돌려도 안전
# 사용: python -m recipe_book.scripts.seed_refs

import asyncio
import logging
from typing import Iterable

from motor.motor_asyncio import AsyncIOMotorClient

from recipe_book.core.config import settings
from recipe_book.core.logging_config import setup_logging
from recipe_book.db.indexes import CUISINES, TAGS, ensure_indexes

log = logging.getLogger(__name__)

DEFAULT_CUISINES = [
    "American", "Chinese", "French", "Greek", "Indian", "Italian",
    "Japanese", "Korean", "Mexican", "Spanish", "Thai", "Vietnamese",
]

DEFAULT_TAGS = [
    "Breakfast", "Dessert", "Easy", "Gluten-Free", "Healthy", "Quick",
    "Spicy", "Vegan", "Vegetarian", "Comfort Food",
]

async def upsert_names(coll, names: Iterable[str]) -> int:
    # 새로 들어간 개수만 센다
    inserted = 0
    for n in names:
        result = await coll.update_one({"name": n}, {"$setOnInsert": {"name": n}}, upsert=True)
        if result.upserted_id is not None:
            inserted += 1
    return inserted

async def seed(db) -> dict:
    await ensure_indexes(db)
    counts = {
        CUISINES: await upsert_names(db[CUISINES], DEFAULT_CUISINES),
        TAGS: await upsert_names(db[TAGS], DEFAULT_TAGS),
    }
    log.info("seeded references: %s", counts)
    return counts

async def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    client = AsyncIOMotorClient(settings.MONGO_URI)
    try:
        await seed(client[settings.MONGO_DB])
    finally:
        client.close()

if __name__ == "__main__":
    asyncio.run(main())
