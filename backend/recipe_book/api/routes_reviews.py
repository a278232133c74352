# recipe_book/api/routes_reviews.py
# 레시피 하위 리뷰 추가/수정/삭제 라우트

from __future__ import annotations
import logging

from fastapi import APIRouter, Depends

from recipe_book.core.errors import internal_errors
from recipe_book.db.init import get_db
from recipe_book.models.schemas import MessageOut, ReviewIn, ReviewSavedOut
from recipe_book.services import reviews as svc

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["reviews"])

@router.post("/{recipe_id}/reviews", status_code=201, response_model=ReviewSavedOut)
async def add_review(recipe_id: str, payload: ReviewIn, db=Depends(get_db)):
    with internal_errors("adding review", log):
        review_id = await svc.add_review(db, recipe_id, payload)
    return ReviewSavedOut(message="Review added successfully", reviewId=str(review_id))

@router.put("/{recipe_id}/reviews/{review_id}", response_model=ReviewSavedOut)
async def update_review(recipe_id: str, review_id: str, payload: ReviewIn, db=Depends(get_db)):
    with internal_errors("updating review", log):
        await svc.update_review(db, recipe_id, review_id, payload)
    # 응답 id는 항상 경로 값
    return ReviewSavedOut(message="Review updated successfully", reviewId=review_id)

@router.delete("/{recipe_id}/reviews/{review_id}", response_model=MessageOut)
async def delete_review(recipe_id: str, review_id: str, db=Depends(get_db)):
    with internal_errors("deleting review", log):
        await svc.delete_review(db, recipe_id, review_id)
    return MessageOut(message="Review deleted successfully")
