"""
==============================================================================
에러 메시지 및 예외 처리기 (errors.py)
==============================================================================

라우터는 fastapi.HTTPException을 던지고, 여기 등록한 처리기가
응답 본문을 항상 {"message": "..."} 형태로 바꿔줍니다.

상태 코드 정리:
    400 - 요청 형식 오류, 빈 내용, 처리하지 못한 예외
    401 - 비밀번호 확인 불일치, 로그인 필요(토큰 없음/만료/위조), 권한 없음
    404 - 게시글/댓글 없음
    409 - 중복 닉네임, 비밀번호에 닉네임 포함
    412 - 로그인 실패 (닉네임 또는 비밀번호 불일치)

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


# 회원
INVALID_NICKNAME = "닉네임의 형식이 일치하지 않습니다."
PASSWORD_MISMATCH = "패스워드가 일치하지 않습니다."
INVALID_PASSWORD = "패스워드 형식이 일치하지 않습니다."
PASSWORD_CONTAINS_NICKNAME = "패스워드에 닉네임이 포함되어 있습니다."
DUPLICATE_NICKNAME = "중복된 닉네임입니다."
SIGNUP_SUCCESS = "회원가입이 완료되었습니다."
LOGIN_FAILED = "닉네임 또는 패스워드를 확인해주세요."
LOGIN_SUCCESS = "로그인 성공"

# 인증/권한
LOGIN_REQUIRED = "로그인 후 이용 가능한 기능입니다."
FORBIDDEN = "권한이 없습니다."

# 게시글
POST_NOT_FOUND = "게시글이 존재하지 않습니다."
POST_EMPTY = "게시글 제목과 내용을 입력해주세요."
POST_UPDATED = "게시글이 수정되었습니다."
POST_DELETED = "게시글이 삭제되었습니다."

# 댓글
COMMENT_NOT_FOUND = "댓글이 존재하지 않습니다."
COMMENT_EMPTY = "댓글 내용을 입력해주세요."
COMMENT_UPDATED = "댓글이 수정되었습니다."
COMMENT_DELETED = "댓글이 삭제되었습니다."

# 공통
BAD_REQUEST = "요청한 데이터 형식이 올바르지 않습니다."


@asynccontextmanager
async def store_errors(db, action: str):
    """
    DB 작업 중 처리하지 못한 예외를 롤백 후 400으로 바꿉니다.

    라우터가 의도해서 던진 HTTPException(404, 401 등)은 그대로 통과시킵니다.

    사용법:
        async with store_errors(db, "update post"):
            ...
    """
    try:
        yield
    except StarletteHTTPException:
        raise
    except Exception as e:
        await db.rollback()
        logger.exception("%s failed", action)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=BAD_REQUEST) from e


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else BAD_REQUEST
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 어떤 필드가 틀렸는지는 로그에만 남기고 응답에는 공통 메시지만 보냄
    logger.info("request validation failed: %s %s errors=%s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": BAD_REQUEST},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
