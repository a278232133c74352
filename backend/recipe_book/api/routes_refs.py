# recipe_book/api/routes_refs.py
# 참조 컬렉션(cuisines/tags) 조회: 프론트 선택지용, 읽기 전용

from __future__ import annotations
import logging

from fastapi import APIRouter, Depends

from recipe_book.core.errors import internal_errors
from recipe_book.db.indexes import CUISINES, TAGS
from recipe_book.db.init import get_db
from recipe_book.services.utils import to_jsonable

log = logging.getLogger(__name__)

router = APIRouter(tags=["references"])

async def _list_names(db, collection: str) -> list[dict]:
    docs = await db[collection].find({}, {"_id": 1, "name": 1}).sort("name", 1).to_list(length=None)
    return [to_jsonable(d) for d in docs]

@router.get("/cuisines")
async def list_cuisines(db=Depends(get_db)):
    with internal_errors("listing cuisines", log):
        return {"cuisines": await _list_names(db, CUISINES)}

@router.get("/tags")
async def list_tags(db=Depends(get_db)):
    with internal_errors("listing tags", log):
        return {"tags": await _list_names(db, TAGS)}
