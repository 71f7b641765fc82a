"""
==============================================================================
댓글 API 라우터 (comments.py)
==============================================================================

이 파일은 댓글 관련 API 엔드포인트를 정의합니다.

테이블 구조:
    - comments: 댓글 (comments.post_id -> posts.post_id, comments.user_id -> users.user_id)

API 엔드포인트:
    GET    /api/posts/{post_id}/comments               -> 댓글 목록 (작성일 최신순)
    POST   /api/posts/{post_id}/comments               -> 댓글 작성 (로그인 필요)
    PUT    /api/posts/{post_id}/comments/{comment_id}  -> 댓글 수정 (작성자만)
    DELETE /api/posts/{post_id}/comments/{comment_id}  -> 댓글 삭제 (작성자만)

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from app import errors
from app.database import get_db
from app.dependencies import get_current_user_id
from app.models import Comment, Post, User
from app.schemas import (
    CommentWriteRequest,
    CommentItem,
    CommentListResponse,
    CommentDetailResponse,
    CommentMutationResponse,
    MessageResponse,
)
from app.services.ownership import get_owned_or_raise, update_owned, delete_owned

router = APIRouter(
    prefix="/api/posts/{post_id}/comments",
    tags=["comments"],
)

logger = logging.getLogger(__name__)

_AUTH_RESPONSES = {401: {"model": MessageResponse, "description": "로그인 필요 또는 권한 없음"}}
_EMPTY_RESPONSES = {400: {"model": MessageResponse, "description": errors.COMMENT_EMPTY}}


def _to_item(comment: Comment, nickname: str) -> CommentItem:
    return CommentItem(
        commentId=comment.comment_id,
        postId=comment.post_id,
        userId=comment.user_id,
        nickname=nickname,
        comment=comment.comment,
        createdAt=comment.created_at,
        updatedAt=comment.updated_at,
    )


async def _ensure_post_exists(db: AsyncSession, post_id: int) -> None:
    result = await db.execute(select(Post.post_id).where(Post.post_id == post_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=errors.POST_NOT_FOUND)


def _ensure_not_blank(req: CommentWriteRequest) -> None:
    if not req.comment.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors.COMMENT_EMPTY)


# =============================================================================
# 댓글 목록 조회 API
# =============================================================================
#
# URL: GET /api/posts/{post_id}/comments?page=1&size=20
# 작성 날짜 기준 내림차순 정렬
#
@router.get(
    "",
    response_model=CommentListResponse,
    summary="댓글 목록 조회",
    responses={404: {"model": MessageResponse, "description": errors.POST_NOT_FOUND}},
)
async def list_comments(
    post_id: int,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    offset = (page - 1) * size
    query = (
        select(Comment, User.nickname)
        .join(User, Comment.user_id == User.user_id)
        .where(Comment.post_id == post_id)
        .order_by(desc(Comment.created_at), desc(Comment.comment_id))
        .offset(offset)
        .limit(size)
    )

    async with errors.store_errors(db, "list comments"):
        await _ensure_post_exists(db, post_id)
        rows = (await db.execute(query)).all()

    return {"data": [_to_item(comment, nickname) for comment, nickname in rows]}


# =============================================================================
# 댓글 작성 API
# =============================================================================
#
# URL: POST /api/posts/{post_id}/comments
# 댓글 내용이 비어있으면 "댓글 내용을 입력해주세요."
#
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentDetailResponse,
    summary="댓글 작성",
    responses={
        **_AUTH_RESPONSES,
        **_EMPTY_RESPONSES,
        404: {"model": MessageResponse, "description": errors.POST_NOT_FOUND},
    },
)
async def create_comment(
    post_id: int,
    req: CommentWriteRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    _ensure_not_blank(req)

    comment = Comment(user_id=user_id, post_id=post_id, comment=req.comment)
    async with errors.store_errors(db, "create comment"):
        await _ensure_post_exists(db, post_id)

        db.add(comment)
        await db.commit()
        await db.refresh(comment)

        nickname = (await db.execute(select(User.nickname).where(User.user_id == user_id))).scalar_one_or_none()

    logger.info("comment created: comment_id=%s post_id=%s user_id=%s", comment.comment_id, post_id, user_id)
    return {"data": _to_item(comment, nickname)}


# =============================================================================
# 댓글 수정 API
# =============================================================================
#
# URL: PUT /api/posts/{post_id}/comments/{comment_id}
# 검사 순서: 댓글 존재(404) -> 작성자(401) -> 빈 내용(400)
#
@router.put(
    "/{comment_id}",
    response_model=CommentMutationResponse,
    summary="댓글 수정",
    responses={
        **_AUTH_RESPONSES,
        **_EMPTY_RESPONSES,
        404: {"model": MessageResponse, "description": errors.COMMENT_NOT_FOUND},
    },
)
async def update_comment(
    post_id: int,
    comment_id: int,
    req: CommentWriteRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    criteria = (Comment.comment_id == comment_id, Comment.post_id == post_id)

    async with errors.store_errors(db, "update comment"):
        await get_owned_or_raise(
            db, Comment, *criteria,
            owner_id=user_id,
            not_found_detail=errors.COMMENT_NOT_FOUND,
        )
        _ensure_not_blank(req)

        await update_owned(db, Comment, *criteria, owner_id=user_id, values={"comment": req.comment})
        await db.commit()

    logger.info("comment updated: comment_id=%s user_id=%s", comment_id, user_id)
    return {"message": errors.COMMENT_UPDATED, "commentId": comment_id}


# =============================================================================
# 댓글 삭제 API
# =============================================================================
#
# URL: DELETE /api/posts/{post_id}/comments/{comment_id}
#
@router.delete(
    "/{comment_id}",
    response_model=CommentMutationResponse,
    summary="댓글 삭제",
    responses={
        **_AUTH_RESPONSES,
        404: {"model": MessageResponse, "description": errors.COMMENT_NOT_FOUND},
    },
)
async def delete_comment(
    post_id: int,
    comment_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    criteria = (Comment.comment_id == comment_id, Comment.post_id == post_id)

    async with errors.store_errors(db, "delete comment"):
        await get_owned_or_raise(
            db, Comment, *criteria,
            owner_id=user_id,
            not_found_detail=errors.COMMENT_NOT_FOUND,
        )
        await delete_owned(db, Comment, *criteria, owner_id=user_id)
        await db.commit()

    logger.info("comment deleted: comment_id=%s user_id=%s", comment_id, user_id)
    return {"message": errors.COMMENT_DELETED, "commentId": comment_id}
