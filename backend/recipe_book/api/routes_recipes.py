# recipe_book/api/routes_recipes.py
# 레시피 검색/조회/생성/수정/삭제 라우트
# 검증/DB 작업은 services.recipes, 여기서는 응답 모양만 만든다

from __future__ import annotations
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from recipe_book.core.errors import internal_errors
from recipe_book.db.init import get_db
from recipe_book.models.schemas import MessageOut, RecipeCreatedOut, RecipeIn, RecipeListOut
from recipe_book.services import recipes as svc

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])

@router.get("", response_model=RecipeListOut)
async def list_recipes(
    tags: Optional[str] = Query(None, description="콤마 구분 태그명 (하나라도 일치)"),
    cuisine: Optional[str] = Query(None, description="요리 종류 부분일치"),
    ingredients: Optional[str] = Query(None, description="콤마 구분 재료명 (모두 포함)"),
    name: Optional[str] = Query(None, description="레시피명 부분일치"),
    db=Depends(get_db),
):
    with internal_errors("searching recipes", log):
        found = await svc.search_recipes(db, tags=tags, cuisine=cuisine, ingredients=ingredients, name=name)
    return {"recipes": found}

@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, db=Depends(get_db)):
    # _id는 빼고 전체 필드(리뷰 포함) 반환
    with internal_errors("fetching recipe", log):
        return await svc.get_recipe(db, recipe_id)

@router.post("", status_code=201, response_model=RecipeCreatedOut)
async def create_recipe(payload: RecipeIn, db=Depends(get_db)):
    with internal_errors("creating recipe", log):
        new_id = await svc.create_recipe(db, payload)
    return RecipeCreatedOut(message="Recipe created successfully", recipeId=str(new_id))

@router.put("/{recipe_id}", response_model=MessageOut)
async def update_recipe(recipe_id: str, payload: RecipeIn, db=Depends(get_db)):
    with internal_errors("updating recipe", log):
        await svc.update_recipe(db, recipe_id, payload)
    return MessageOut(message="Recipe updated successfully")

@router.delete("/{recipe_id}", response_model=MessageOut)
async def delete_recipe(recipe_id: str, db=Depends(get_db)):
    with internal_errors("deleting recipe", log):
        await svc.delete_recipe(db, recipe_id)
    return MessageOut(message="Recipe deleted successfully")
