"""
==============================================================================
데이터베이스 연결 모듈 (database.py)
==============================================================================

비동기 SQLAlchemy 엔진과 세션을 만들고, 라우터에서 쓰는 get_db 의존성을
제공합니다.

사용법:
    @router.get("/posts")
    async def list_posts(db: AsyncSession = Depends(get_db)):
        ...

==============================================================================
"""

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from app.config import get_settings


settings = get_settings()


class Base(DeclarativeBase):
    """모든 ORM 모델의 부모 클래스"""


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db():
    """요청마다 새 세션을 열고, 응답이 끝나면 닫습니다."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_models(drop: bool = False) -> None:
    """
    models.py에 정의된 모든 테이블을 생성합니다.

    이미 있는 테이블은 건너뜁니다. drop=True면 먼저 모두 지웁니다.
    """
    # Base.metadata에 테이블이 등록되도록 모델을 import
    from app import models  # noqa: F401

    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
