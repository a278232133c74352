# recipe_book/services/recipes.py
# 레시피 검색/조회/생성/수정/삭제
# - cuisine/tags는 참조 컬렉션에서 이름으로 조회 → 스냅샷({_id, name})으로 복사 저장
# - 참조 컬렉션이 나중에 바뀌어도 기존 레시피는 갱신하지 않음 (라이브 조인 아님)

from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId

from recipe_book.core.errors import BadRequest, NotFound
from recipe_book.db.indexes import CUISINES, RECIPES, TAGS
from recipe_book.models.schemas import RecipeIn
from recipe_book.services.utils import contains_ci, parse_oid, split_csv, to_jsonable

log = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields"
INVALID_CUISINE = "Invalid cuisine"
INVALID_TAGS = "One or more invalid tags"
RECIPE_NOT_FOUND = "Recipe not found"

# 목록 응답에 실을 필드 (재료/조리법/리뷰 등은 제외)
SUMMARY_PROJECTION = {
    "_id": 1,
    "name": 1,
    "cuisine.name": 1,
    "tags.name": 1,
    "prepTime": 1,
}

# ------------------------------
# 검색
# ------------------------------

def build_search_query(
    tags: Optional[str] = None,
    cuisine: Optional[str] = None,
    ingredients: Optional[str] = None,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    쿼리스트링 → Mongo 필터. 주어진 조건끼리는 AND.
    - tags: 콤마 목록 중 하나라도 일치 ($in)
    - ingredients: 콤마 목록 "모든" 항목이 각각 어떤 재료명에 부분일치
    - cuisine / name: 대소문자 무시 부분일치
    """
    query: Dict[str, Any] = {}

    tag_names = split_csv(tags)
    if tag_names:
        query["tags.name"] = {"$in": tag_names}

    if cuisine:
        query["cuisine.name"] = contains_ci(cuisine)

    terms = split_csv(ingredients)
    if terms:
        query["$and"] = [{"ingredients.name": contains_ci(t)} for t in terms]

    if name:
        query["name"] = contains_ci(name)

    return query

async def search_recipes(db, **filters: Optional[str]) -> List[dict]:
    query = build_search_query(**filters)
    docs = await db[RECIPES].find(query, SUMMARY_PROJECTION).to_list(length=None)
    return [to_jsonable(d) for d in docs]

# ------------------------------
# 단건 조회
# ------------------------------

async def get_recipe(db, recipe_id: str) -> dict:
    oid = parse_oid(recipe_id)
    if oid is None:
        raise NotFound(RECIPE_NOT_FOUND)

    doc = await db[RECIPES].find_one({"_id": oid}, {"_id": 0})
    if not doc:
        raise NotFound(RECIPE_NOT_FOUND)
    return to_jsonable(doc)

# ------------------------------
# 생성/수정 공통: 검증 + 스냅샷
# ------------------------------

def snapshot_of(ref: Mapping[str, Any]) -> dict:
    # 참조 문서의 키 필드만 값 복사
    return {"_id": ref["_id"], "name": ref["name"]}

def _unique(names: List[str]) -> List[str]:
    seen, out = set(), []
    for n in names:
        if n not in seen:
            seen.add(n)
            out.append(n)
    return out

async def resolve_cuisine(db, name: str) -> dict:
    doc = await db[CUISINES].find_one({"name": name})
    if not doc:
        raise BadRequest(INVALID_CUISINE)
    return snapshot_of(doc)

async def resolve_tags(db, names: List[str]) -> List[dict]:
    # 같은 이름이 중복 요청돼도 한 번만 저장 (요청 순서 유지)
    wanted = _unique(names)
    docs = await db[TAGS].find({"name": {"$in": wanted}}).to_list(length=None)
    by_name = {d["name"]: d for d in docs}
    if any(n not in by_name for n in wanted):
        raise BadRequest(INVALID_TAGS)
    return [snapshot_of(by_name[n]) for n in wanted]

async def build_recipe_fields(db, payload: RecipeIn) -> dict:
    """
    검증 순서: 필수값 → cuisine → tags. 실패하면 BadRequest, DB는 건드리지 않는다.
    reviews는 포함하지 않음 (수정 시 기존 리뷰 보존).
    """
    if not payload.has_required():
        raise BadRequest(MISSING_FIELDS)

    cuisine = await resolve_cuisine(db, payload.cuisine)
    tags = await resolve_tags(db, payload.tags)

    return {
        "name": payload.name,
        "cuisine": cuisine,
        "prepTime": payload.prepTime,
        "cookTime": payload.cookTime,
        "servings": payload.servings,
        "ingredients": [i.model_dump() for i in payload.ingredients],
        "instructions": list(payload.instructions),
        "tags": tags,
    }

# ------------------------------
# 쓰기
# ------------------------------

async def create_recipe(db, payload: RecipeIn) -> ObjectId:
    doc = await build_recipe_fields(db, payload)
    doc["reviews"] = []

    result = await db[RECIPES].insert_one(doc)
    log.info("recipe created id=%s name=%r", result.inserted_id, payload.name)
    return result.inserted_id

async def update_recipe(db, recipe_id: str, payload: RecipeIn) -> None:
    fields = await build_recipe_fields(db, payload)

    oid = parse_oid(recipe_id)
    if oid is None:
        raise NotFound(RECIPE_NOT_FOUND)

    # 버전 체크 없이 전체 필드 덮어쓰기 (마지막 쓰기가 이김)
    result = await db[RECIPES].update_one({"_id": oid}, {"$set": fields})
    if result.matched_count == 0:
        raise NotFound(RECIPE_NOT_FOUND)
    log.info("recipe updated id=%s", oid)

async def delete_recipe(db, recipe_id: str) -> None:
    oid = parse_oid(recipe_id)
    if oid is None:
        raise NotFound(RECIPE_NOT_FOUND)

    # 리뷰는 문서에 포함돼 있으므로 함께 삭제됨
    result = await db[RECIPES].delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise NotFound(RECIPE_NOT_FOUND)
    log.info("recipe deleted id=%s", oid)
