"""
비밀번호 해시 및 JWT 접근토큰 발급/검증
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from app.config import Settings, get_settings


_HASH_SCHEME = "pbkdf2_sha256"
_SALT_BYTES = 16


class InvalidTokenError(Exception):
    """토큰이 없거나, 형식이 틀리거나, 서명/만료 검증에 실패한 경우"""


# =============================================================================
# 비밀번호 해시
# =============================================================================
#
# 저장 형식: pbkdf2_sha256$<반복횟수>$<salt(base64)>$<hash(base64)>
# 반복 횟수를 해시 문자열에 함께 저장하므로 설정값을 바꿔도 기존 해시는 검증됩니다.
#

def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def hash_password(password: str, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    iterations = settings.password_hash_iterations
    salt = secrets.token_bytes(_SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_HASH_SCHEME}${iterations}${_b64encode(salt)}${_b64encode(digest)}"


def verify_password(password: str, password_hash: str) -> bool:
    """저장된 해시와 비밀번호를 상수 시간 비교로 검증합니다."""
    try:
        scheme, iterations, salt_b64, digest_b64 = password_hash.split("$")
        if scheme != _HASH_SCHEME:
            return False
        salt = base64.b64decode(salt_b64)
        expected = base64.b64decode(digest_b64)
        actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, int(iterations))
    except ValueError:
        # 형식이 깨진 해시는 어떤 비밀번호와도 일치하지 않음
        return False

    return hmac.compare_digest(actual, expected)


# =============================================================================
# JWT 접근토큰
# =============================================================================

def issue_access_token(user_id: int, settings: Optional[Settings] = None) -> str:
    """
    user_id를 sub 클레임에 담은 서명 토큰을 발급합니다.

    만료 시각(exp)은 access_token_expire_minutes 설정을 따릅니다.
    """
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": str(user_id), "exp": expire}

    # JWT 토큰 생성
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_access_token(token: Optional[str], settings: Optional[Settings] = None) -> int:
    """
    토큰을 검증하고 user_id를 반환합니다.

    Raises:
        InvalidTokenError: 토큰이 비어있거나, 서명이 틀리거나, 만료되었거나,
            sub 클레임이 숫자가 아닐 때
    """
    settings = settings or get_settings()
    if not token:
        raise InvalidTokenError("empty token")

    try:
        # 토큰 해독 (서명과 만료 시각을 함께 검사)
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("invalid subject") from exc
