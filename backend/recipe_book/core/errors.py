# recipe_book/core/errors.py
# API 오류 계층 + FastAPI 예외 핸들러
# 모든 오류 응답 바디는 {"error": "<text>"} 형태로 통일

from __future__ import annotations
import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

log = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"

class ApiError(Exception):
    """서비스 계층에서 던지고 핸들러가 상태코드/메시지로 변환하는 오류"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class BadRequest(ApiError):
    status_code = 400

class NotFound(ApiError):
    status_code = 404

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)

async def _http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))

async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 바디 파싱/타입 오류는 422 대신 400
    log.info("invalid request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(400, "Invalid request body")

async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # 라우트에서 못 잡은 예외: 상세는 로그에만
    log.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(500, INTERNAL_ERROR)

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

@contextmanager
def internal_errors(action: str, logger: logging.Logger = log):
    """
    라우트 본문용: ApiError는 그대로 올리고, 나머지(DB 장애 등)는 로그 남기고 500.
    사용: with internal_errors("creating recipe"): ...
    """
    try:
        yield
    except ApiError:
        raise
    except Exception:
        logger.exception("Error %s", action)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
