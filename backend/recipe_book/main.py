# recipe_book/main.py
# FastAPI 앱 초기화 및 라우터 설정
# 라우터는 각 기능별로 분리하여 관리

from __future__ import annotations

import logging
from asyncio import sleep

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_book.api.routes_recipes import router as recipes_router   # 레시피 검색/CRUD
from recipe_book.api.routes_reviews import router as reviews_router   # 레시피 하위 리뷰
from recipe_book.api.routes_refs import router as refs_router         # cuisines/tags 조회
from recipe_book.core.config import settings
from recipe_book.core.errors import register_error_handlers
from recipe_book.core.logging_config import setup_logging

# DB 초기화/인덱스
# init_db/close_db: 앱 시작/종료 시 커넥션 생성/정리
# get_db: 런타임에 DB 핸들 얻기
from recipe_book.db.init import close_db, get_db, init_db
from recipe_book.db.indexes import ensure_indexes

log = logging.getLogger(__name__)

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title="Recipe Book - API", version="0.1.0")

# CORS: 기본은 전체 허용 (쿠키 안 씀)
_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# 앱 시작/종료 이벤트 핸들러
@app.on_event("startup")
async def on_startup() -> None:
    # 1) DB 먼저 붙는다 (최대 DB_INIT_RETRIES회, 1초 간격)
    db = None
    for i in range(settings.DB_INIT_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready (%s)", settings.MONGO_DB)
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries")
        return

    # 2) 인덱스 보장
    try:
        await ensure_indexes(db)
        log.info("[startup] indexes ensured")
    except Exception:
        log.exception("[startup] ensure_indexes failed")

@app.on_event("shutdown")
async def on_shutdown() -> None:
    # 몽고db 커넥션 정리
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
        await db.command("ping")
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok

# 라우터 prefix는 각 파일 내에서 정의함 , 중복 prefix 금지
app.include_router(recipes_router)
app.include_router(reviews_router)
app.include_router(refs_router)

def run() -> None:
    # 콘솔 스크립트(recipe-book) / python -m recipe_book.main
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

if __name__ == "__main__":
    run()
