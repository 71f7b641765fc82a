"""
로그 설정

setup_logging()을 서버 시작 시 한 번 호출해 루트 로거를 설정합니다.
로그 레벨은 인자 또는 LOG_LEVEL 설정값(기본 INFO)을 따릅니다.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%m-%d %H:%M:%S"


def _str_to_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    if level is None:
        from app.config import get_settings

        resolved_level = _str_to_level(get_settings().log_level)
    elif isinstance(level, str):
        resolved_level = _str_to_level(level)
    else:
        resolved_level = level

    root_logger = logging.getLogger()

    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    root_logger.setLevel(resolved_level)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(resolved_level)
    root_logger.addHandler(handler)

    # SQL 로그는 DATABASE_ECHO 설정으로만 켭니다
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
