# recipe_book/models/schemas.py
# Pydantic 모델 정의
# RecipeIn / ReviewIn: 요청 바디 (필수값 검사는 서비스에서 해서 400 메시지를 통일)
# *Out: 응답 스키마
from __future__ import annotations
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

# # 재료 한 줄: 프론트는 {name} 객체 배열로 보냄
class Ingredient(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str

# # 레시피 생성/수정 입력: 프론트 camelCase 그대로
class RecipeIn(BaseModel):
    name: Optional[str] = None
    cuisine: Optional[str] = None              # 요리 종류 "이름" (cuisines 컬렉션에서 조회)
    prepTime: Any = None                       # 분 단위, 타입 검증 안 함
    cookTime: Any = None
    servings: Any = None
    ingredients: Optional[List[Ingredient]] = None
    instructions: Optional[List[str]] = None
    tags: Optional[List[str]] = None           # 태그 "이름" 목록

    def has_required(self) -> bool:
        return bool(self.name and self.cuisine and self.ingredients and self.instructions and self.tags)

# # 리뷰 생성/수정 입력: rating은 숫자/숫자 문자열 모두 허용 (서비스에서 변환)
class ReviewIn(BaseModel):
    user: Optional[str] = None
    rating: Any = None
    comment: Optional[str] = None

    def has_required(self) -> bool:
        return bool(self.user) and self.rating not in (None, "") and bool(self.comment)

class MessageOut(BaseModel):
    message: str

class RecipeCreatedOut(MessageOut):
    recipeId: str

class ReviewSavedOut(MessageOut):
    reviewId: str

# # 목록 응답: 요약 문서 배열 (_id는 문자열)
class RecipeListOut(BaseModel):
    recipes: List[dict] = Field(default_factory=list)
