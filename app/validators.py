"""
회원가입 입력값 검증
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from fastapi import HTTPException, status

from app import errors


NICKNAME_PATTERN = re.compile(r"^[A-Za-z0-9]{3,}$")
MIN_PASSWORD_LENGTH = 4


class RegistrationErrorCode(str, Enum):
    """
    회원가입 거절 사유.

    DUPLICATE_NICKNAME은 DB 조회가 필요하므로 라우터에서 판단합니다.
    """

    INVALID_NICKNAME = "invalid_nickname"
    PASSWORD_MISMATCH = "password_mismatch"
    INVALID_PASSWORD = "invalid_password"
    PASSWORD_CONTAINS_NICKNAME = "password_contains_nickname"
    DUPLICATE_NICKNAME = "duplicate_nickname"


def validate_registration(
    nickname: str,
    password: str,
    confirm_password: str,
) -> Optional[RegistrationErrorCode]:
    """
    닉네임/비밀번호 형식을 정해진 순서대로 검사합니다.

    1. 닉네임: 알파벳 대소문자와 숫자로 3자 이상
    2. 비밀번호와 비밀번호 확인이 정확히 일치
    3. 비밀번호: 4자 이상
    4. 비밀번호에 닉네임이 (대소문자 구분 없이) 포함되지 않음

    Returns:
        첫 번째로 걸린 거절 사유, 모두 통과하면 None
    """
    if not NICKNAME_PATTERN.fullmatch(nickname):
        return RegistrationErrorCode.INVALID_NICKNAME

    if password != confirm_password:
        return RegistrationErrorCode.PASSWORD_MISMATCH

    if len(password) < MIN_PASSWORD_LENGTH:
        return RegistrationErrorCode.INVALID_PASSWORD

    if nickname.lower() in password.lower():
        return RegistrationErrorCode.PASSWORD_CONTAINS_NICKNAME

    return None


def map_registration_error_to_http_exception(code: RegistrationErrorCode) -> HTTPException:
    """RegistrationErrorCode를 HTTPException으로 변환합니다."""
    match code:
        case RegistrationErrorCode.INVALID_NICKNAME:
            return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors.INVALID_NICKNAME)
        case RegistrationErrorCode.PASSWORD_MISMATCH:
            return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=errors.PASSWORD_MISMATCH)
        case RegistrationErrorCode.INVALID_PASSWORD:
            return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors.INVALID_PASSWORD)
        case RegistrationErrorCode.PASSWORD_CONTAINS_NICKNAME:
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=errors.PASSWORD_CONTAINS_NICKNAME)
        case RegistrationErrorCode.DUPLICATE_NICKNAME:
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=errors.DUPLICATE_NICKNAME)
        case _:
            return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors.BAD_REQUEST)
