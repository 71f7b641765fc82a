"""Pytest 설정과 공용 fixture."""
# ruff: noqa: E402

import os
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가 (`from app...` import용)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings는 처음 읽을 때 캐시되므로 app import 전에 환경변수를 지정
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")


import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.database import Base, get_db
from app.main import app


DEFAULT_PASSWORD = "pass1234"


# ==================== 요청 헬퍼 ====================


async def register(client: AsyncClient, nickname: str, password: str = DEFAULT_PASSWORD):
    return await client.post(
        "/api/users",
        json={"nickname": nickname, "password": password, "confirmPassword": password},
    )


def cookie_pair(response) -> str:
    """로그인 응답의 Set-Cookie에서 "authorization=..." 부분만 꺼냄"""
    return response.headers["set-cookie"].split(";", 1)[0]


def token_from_cookie(pair: str) -> str:
    value = pair.split("=", 1)[1].strip('"')
    token_type, _, token = value.partition(" ")
    assert token_type == "Bearer"
    return token


async def login(client: AsyncClient, nickname: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
    """
    로그인 후 다음 요청에 붙일 Cookie 헤더를 반환합니다.

    클라이언트 쿠키 저장소는 비워서, 헤더를 넘기지 않은 요청은 비로그인 요청이 되게 합니다.
    """
    response = await client.post("/api/login", json={"nickname": nickname, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Cookie": cookie_pair(response)}


async def signup_and_login(client: AsyncClient, nickname: str) -> dict[str, str]:
    response = await register(client, nickname)
    assert response.status_code == 201, response.text
    return await login(client, nickname)


async def create_post(client: AsyncClient, auth: dict[str, str], title: str = "제목", content: str = "내용"):
    response = await client.post("/api/posts", json={"title": title, "content": content}, headers=auth)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ==================== Fixtures ====================


@pytest_asyncio.fixture
async def db_engine():
    """테스트마다 새로 만드는 인메모리 SQLite 엔진"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def client(session_factory):
    """get_db를 테스트 DB로 바꿔 끼운 httpx 비동기 클라이언트"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
