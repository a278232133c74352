# recipe_book/services/utils.py
# 공용 변환 유틸
# - 쿼리스트링 콤마 목록 분리
# - 부분일치 검색어 → Mongo $regex 조건
# - ObjectId 파싱 / 응답 직렬화

from __future__ import annotations
import re
from datetime import datetime
from typing import Any, List, Optional

from bson import ObjectId

def split_csv(raw: Optional[str]) -> List[str]:
    # "a, b,,c" → ["a", "b", "c"]
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]

def contains_ci(term: str) -> dict:
    # 대소문자 무시 부분일치. 정규식 메타문자는 리터럴로 취급
    return {"$regex": re.escape(term), "$options": "i"}

def parse_oid(raw: str) -> Optional[ObjectId]:
    # 형식이 잘못된 id는 None (호출부에서 NotFound 처리)
    if isinstance(raw, str) and ObjectId.is_valid(raw):
        return ObjectId(raw)
    return None

def to_jsonable(value: Any) -> Any:
    """문서 안의 ObjectId를 hex 문자열로, datetime을 ISO 문자열로 바꾼다 (중첩 포함)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value
