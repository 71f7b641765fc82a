"""
==============================================================================
유저 API 라우터 (users.py)
==============================================================================

이 파일은 회원가입/로그인 API 엔드포인트를 정의합니다.

테이블 구조:
    - users: 유저 데이터 (닉네임, 비밀번호 해시)

API 엔드포인트:
    POST /api/users  -> 회원가입
    POST /api/login  -> 로그인 (JWT를 authorization 쿠키로 전달)

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app import errors
from app.config import get_settings
from app.database import get_db
from app.dependencies import TOKEN_TYPE
from app.models import User
from app.schemas import SignupRequest, LoginRequest, MessageResponse
from app.security import hash_password, verify_password, issue_access_token
from app.validators import (
    RegistrationErrorCode,
    validate_registration,
    map_registration_error_to_http_exception,
)

router = APIRouter(
    prefix="/api",
    tags=["users"],
)

settings = get_settings()
logger = logging.getLogger(__name__)


# =============================================================================
# 회원가입 API
# =============================================================================
#
# URL: POST /api/users
# 규칙:
#   - 닉네임은 최소 3자 이상, 알파벳 대소문자(a~z, A~Z), 숫자(0~9)
#   - 비밀번호 확인은 비밀번호와 정확하게 일치
#   - 비밀번호는 최소 4자 이상, 닉네임이 포함되면 실패
#   - 이미 있는 닉네임이면 "중복된 닉네임입니다."
#
@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    summary="회원 가입",
    responses={
        400: {"model": MessageResponse, "description": "닉네임 또는 비밀번호 형식 불일치"},
        401: {"model": MessageResponse, "description": "비밀번호와 비밀번호 확인 불일치"},
        409: {"model": MessageResponse, "description": "중복 닉네임 또는 비밀번호에 닉네임 포함"},
    },
)
async def signup(req: SignupRequest, db: AsyncSession = Depends(get_db)):
    rejection = validate_registration(req.nickname, req.password, req.confirmPassword)
    if rejection is not None:
        raise map_registration_error_to_http_exception(rejection)

    async with errors.store_errors(db, "signup"):
        # 닉네임 중복 확인
        result = await db.execute(select(User.user_id).where(User.nickname == req.nickname))
        if result.scalar_one_or_none() is not None:
            raise map_registration_error_to_http_exception(RegistrationErrorCode.DUPLICATE_NICKNAME)

        user = User(nickname=req.nickname, password_hash=hash_password(req.password))
        try:
            db.add(user)
            await db.commit()
        except IntegrityError as e:
            # 중복 확인과 INSERT 사이에 같은 닉네임이 먼저 저장된 경우
            await db.rollback()
            raise map_registration_error_to_http_exception(RegistrationErrorCode.DUPLICATE_NICKNAME) from e
        await db.refresh(user)

    logger.info("new user registered: user_id=%s nickname=%s", user.user_id, user.nickname)
    return {"message": errors.SIGNUP_SUCCESS}


# =============================================================================
# 로그인 API
# =============================================================================
#
# URL: POST /api/login
# 동작:
#   1. 닉네임으로 유저 조회 후 비밀번호 해시 검증
#   2. 하나라도 틀리면 같은 메시지로 412 (어느 쪽이 틀렸는지 알려주지 않음)
#   3. 성공 시 JWT를 "Bearer <token>" 형식으로 authorization 쿠키에 저장
#
@router.post(
    "/login",
    response_model=MessageResponse,
    summary="로그인",
    responses={412: {"model": MessageResponse, "description": "닉네임 또는 패스워드를 확인해주세요."}},
)
async def login(req: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    async with errors.store_errors(db, "login"):
        result = await db.execute(select(User).where(User.nickname == req.nickname))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(req.password, user.password_hash):
            logger.info("login failed for nickname=%r", req.nickname)
            raise HTTPException(status_code=status.HTTP_412_PRECONDITION_FAILED, detail=errors.LOGIN_FAILED)

    # Access Token 발급
    access_token = issue_access_token(user.user_id)

    response.set_cookie(
        key=settings.auth_cookie_name,
        value=f"{TOKEN_TYPE} {access_token}",
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )

    logger.info("user logged in: user_id=%s", user.user_id)
    return {"message": errors.LOGIN_SUCCESS}
