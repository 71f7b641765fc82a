"""
==============================================================================
게시판 API 서버 진입점 (main.py)
==============================================================================

실행 방법:
    uvicorn app.main:app --reload
    또는
    python -m app.main

API 문서 (Swagger UI): http://localhost:8000/api-docs

==============================================================================
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.database import init_models
from app.errors import register_exception_handlers
from app.logger import setup_logging
from app.routers import users, posts, comments


settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    await init_models()
    logger.info("board api started (database=%s)", settings.database_url.split("://", 1)[0])
    yield


app = FastAPI(
    title="Board API",
    description="회원가입/로그인, 게시글, 댓글 API",
    version="1.0.0",
    docs_url="/api-docs",
    lifespan=lifespan,
)

# 쿠키 인증을 쓰므로 allow_credentials=True, 오리진은 설정값으로 제한
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(users.router)
app.include_router(posts.router)
app.include_router(comments.router)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """헬스 체크 엔드포인트"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
