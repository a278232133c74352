# recipe_book/services/reviews.py
# 레시피에 포함된 리뷰 배열 조작 ($push / 위치 연산자 $set / $pull)

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId

from recipe_book.core.errors import BadRequest, NotFound
from recipe_book.db.indexes import RECIPES
from recipe_book.models.schemas import ReviewIn
from recipe_book.services.recipes import MISSING_FIELDS, RECIPE_NOT_FOUND
from recipe_book.services.utils import parse_oid

log = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

INVALID_RATING = f"Rating must be a number between {MIN_RATING} and {MAX_RATING}"
REVIEW_NOT_FOUND = "Review not found"
RECIPE_OR_REVIEW_NOT_FOUND = "Recipe or review not found"

def coerce_rating(raw: Any) -> float:
    """숫자 또는 숫자 문자열 → float. 범위(1~5) 밖이거나 변환 불가면 BadRequest."""
    if isinstance(raw, bool):
        raise BadRequest(INVALID_RATING)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise BadRequest(INVALID_RATING)
    if not MIN_RATING <= value <= MAX_RATING:  # NaN도 여기서 걸림
        raise BadRequest(INVALID_RATING)
    return value

def _review_doc(review_id: ObjectId, payload: ReviewIn) -> dict:
    if not payload.has_required():
        raise BadRequest(MISSING_FIELDS)
    return {
        "review_id": review_id,
        "user": payload.user,
        "rating": coerce_rating(payload.rating),
        "comment": payload.comment,
        "date": datetime.now(timezone.utc),
    }

async def add_review(db, recipe_id: str, payload: ReviewIn) -> ObjectId:
    review = _review_doc(ObjectId(), payload)

    oid = parse_oid(recipe_id)
    if oid is None:
        raise NotFound(RECIPE_NOT_FOUND)

    result = await db[RECIPES].update_one({"_id": oid}, {"$push": {"reviews": review}})
    if result.matched_count == 0:
        raise NotFound(RECIPE_NOT_FOUND)

    log.info("review added recipe=%s review=%s", oid, review["review_id"])
    return review["review_id"]

async def update_review(db, recipe_id: str, review_id: str, payload: ReviewIn) -> None:
    """
    (레시피, 리뷰) 복합 매칭된 배열 원소를 통째로 교체.
    review_id는 경로 값으로 다시 넣고, date는 현재 시각으로 갱신한다.
    """
    rid = parse_oid(review_id)
    review = _review_doc(rid, payload)

    oid = parse_oid(recipe_id)
    if oid is None or rid is None:
        raise NotFound(RECIPE_OR_REVIEW_NOT_FOUND)

    result = await db[RECIPES].update_one(
        {"_id": oid, "reviews.review_id": rid},
        {"$set": {"reviews.$": review}},
    )
    if result.matched_count == 0:
        raise NotFound(RECIPE_OR_REVIEW_NOT_FOUND)
    log.info("review updated recipe=%s review=%s", oid, rid)

async def delete_review(db, recipe_id: str, review_id: str) -> None:
    oid = parse_oid(recipe_id)
    if oid is None:
        raise NotFound(RECIPE_NOT_FOUND)

    rid = parse_oid(review_id)
    if rid is None:
        # 레시피 존재 여부는 확인해야 메시지를 구분할 수 있음
        if await db[RECIPES].count_documents({"_id": oid}, limit=1) == 0:
            raise NotFound(RECIPE_NOT_FOUND)
        raise NotFound(REVIEW_NOT_FOUND)

    result = await db[RECIPES].update_one(
        {"_id": oid},
        {"$pull": {"reviews": {"review_id": rid}}},
    )
    # matched=0 → 레시피 없음, modified=0 → 레시피는 있는데 지운 리뷰 없음
    if result.matched_count == 0:
        raise NotFound(RECIPE_NOT_FOUND)
    if result.modified_count == 0:
        raise NotFound(REVIEW_NOT_FOUND)
    log.info("review deleted recipe=%s review=%s", oid, rid)
