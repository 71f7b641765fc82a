"""
==============================================================================
작성자 확인 후 수정/삭제 (ownership.py)
==============================================================================

게시글/댓글 수정·삭제 API가 공통으로 쓰는 순서:

    1. 대상 행 조회                   -> 없으면 404
    2. 작성자 확인                    -> 다르면 401 (내용 검사보다 먼저)
    3. (수정) 내용 검사               -> 라우터에서 처리
    4. "id AND 작성자" 조건으로 UPDATE/DELETE
       -> 영향받은 행이 0이면 그 사이 작성자/행이 바뀐 것이므로 401

모델은 user_id 컬럼(작성자)을 가지고 있어야 합니다.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app import errors


logger = logging.getLogger(__name__)


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=errors.FORBIDDEN)


async def get_owned_or_raise(
    db: AsyncSession,
    model: Any,
    *criteria: Any,
    owner_id: int,
    not_found_detail: str,
) -> Any:
    """
    criteria로 행을 찾고, owner_id가 작성자인지 확인합니다.

    Raises:
        HTTPException(404): 행이 없을 때
        HTTPException(401): 작성자가 아닐 때
    """
    result = await db.execute(select(model).where(*criteria))
    row = result.scalar_one_or_none()

    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_detail)

    if row.user_id != owner_id:
        logger.warning("ownership denied: %r requested by user_id=%s", row, owner_id)
        raise _forbidden()

    return row


async def update_owned(
    db: AsyncSession,
    model: Any,
    *criteria: Any,
    owner_id: int,
    values: dict[str, Any],
) -> None:
    """
    UPDATE ... WHERE criteria AND user_id = owner_id

    커밋은 호출한 쪽에서 합니다.
    """
    result = await db.execute(
        update(model)
        .where(*criteria, model.user_id == owner_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise _forbidden()


async def delete_owned(
    db: AsyncSession,
    model: Any,
    *criteria: Any,
    owner_id: int,
) -> None:
    """
    DELETE ... WHERE criteria AND user_id = owner_id

    커밋은 호출한 쪽에서 합니다.
    """
    result = await db.execute(
        delete(model)
        .where(*criteria, model.user_id == owner_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise _forbidden()
