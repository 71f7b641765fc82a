"""
FastAPI 의존성: 로그인 확인 (Auth Guard)
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyCookie

from app import errors
from app.config import get_settings
from app.security import InvalidTokenError, verify_access_token


logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"

# OpenAPI 문서에 쿠키 인증으로 표시 (401 응답은 직접 만들기 위해 auto_error=False)
cookie_scheme = APIKeyCookie(name=get_settings().auth_cookie_name, auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=errors.LOGIN_REQUIRED,
    )


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Depends(cookie_scheme),
) -> int:
    """
    쿠키의 "Bearer <token>"을 검증해 로그인한 유저의 id를 반환합니다.

    검증에 성공하면 request.state.user_id에도 저장합니다.
    DB는 조회하지 않습니다.
    """
    if not authorization:
        raise _credentials_exception()

    token_type, _, token = authorization.partition(" ")
    if token_type != TOKEN_TYPE or not token:
        raise _credentials_exception()

    try:
        user_id = verify_access_token(token)
    except InvalidTokenError as exc:
        logger.info("rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise _credentials_exception() from exc

    request.state.user_id = user_id
    return user_id
