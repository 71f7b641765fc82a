#!/usr/bin/env python3
"""
==============================================================================
데이터베이스 초기화 스크립트 (init_db.py)
==============================================================================

이 스크립트는 models.py에 정의된 테이블(users, posts, comments)을 만듭니다.
서버도 시작할 때 없는 테이블을 만들지만, 배포 전에 미리 만들거나
개발 DB를 비울 때 사용합니다.

실행 방법:
    # 프로젝트 루트에서 실행
    python scripts/init_db.py

    # 기존 테이블을 모두 지우고 다시 생성
    python scripts/init_db.py --drop

주의:
    --drop 옵션을 주면 모든 회원/게시글/댓글 데이터가 삭제됩니다!

==============================================================================
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# scripts/ 상위 폴더를 Python 경로에 추가해야 app 패키지를 import할 수 있습니다.
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.database import engine, init_models  # noqa: E402
from app.logger import setup_logging  # noqa: E402


logger = logging.getLogger("init_db")


async def main(drop: bool) -> None:
    try:
        await init_models(drop=drop)
        if drop:
            logger.info("dropped and recreated all tables")
        else:
            logger.info("database tables created")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create board database tables")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.drop))
