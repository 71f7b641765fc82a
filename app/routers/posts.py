"""
==============================================================================
게시글 API 라우터 (posts.py)
==============================================================================

이 파일은 게시글 관련 API 엔드포인트를 정의합니다.

테이블 구조:
    - posts: 게시글 (posts.user_id -> users.user_id)
    - comments: 게시글 삭제 시 함께 삭제

API 엔드포인트:
    POST   /api/posts            -> 게시글 작성 (로그인 필요)
    GET    /api/posts            -> 게시글 목록 (작성일 최신순)
    GET    /api/posts/{post_id}  -> 게시글 상세
    PUT    /api/posts/{post_id}  -> 게시글 수정 (작성자만)
    DELETE /api/posts/{post_id}  -> 게시글 삭제 (작성자만)

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc

from app import errors
from app.database import get_db
from app.dependencies import get_current_user_id
from app.models import Post, Comment, User
from app.schemas import (
    PostWriteRequest,
    PostSummary,
    PostDetail,
    PostListResponse,
    PostDetailResponse,
    PostMutationResponse,
    MessageResponse,
)
from app.services.ownership import get_owned_or_raise, update_owned, delete_owned

router = APIRouter(
    prefix="/api/posts",
    tags=["posts"],
)

logger = logging.getLogger(__name__)

_AUTH_RESPONSES = {401: {"model": MessageResponse, "description": "로그인 필요 또는 권한 없음"}}
_NOT_FOUND_RESPONSES = {404: {"model": MessageResponse, "description": errors.POST_NOT_FOUND}}


def _to_summary(post: Post, nickname: str) -> PostSummary:
    return PostSummary(
        postId=post.post_id,
        userId=post.user_id,
        nickname=nickname,
        title=post.title,
        createdAt=post.created_at,
        updatedAt=post.updated_at,
    )


def _to_detail(post: Post, nickname: str) -> PostDetail:
    return PostDetail(
        postId=post.post_id,
        userId=post.user_id,
        nickname=nickname,
        title=post.title,
        content=post.content,
        createdAt=post.created_at,
        updatedAt=post.updated_at,
    )


def _ensure_not_blank(req: PostWriteRequest) -> None:
    if not req.title.strip() or not req.content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors.POST_EMPTY)


# =============================================================================
# 게시글 작성 API
# =============================================================================
#
# URL: POST /api/posts
# 작성자는 토큰의 user_id로만 정합니다. (요청 본문의 값은 사용하지 않음)
#
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PostDetailResponse,
    summary="게시글 작성",
    responses={**_AUTH_RESPONSES, 400: {"model": MessageResponse, "description": errors.POST_EMPTY}},
)
async def create_post(
    req: PostWriteRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    _ensure_not_blank(req)

    post = Post(user_id=user_id, title=req.title, content=req.content)
    async with errors.store_errors(db, "create post"):
        db.add(post)
        await db.commit()
        await db.refresh(post)

        nickname = (await db.execute(select(User.nickname).where(User.user_id == user_id))).scalar_one_or_none()

    logger.info("post created: post_id=%s user_id=%s", post.post_id, user_id)
    return {"data": _to_detail(post, nickname)}


# =============================================================================
# 게시글 목록 조회 API
# =============================================================================
#
# URL: GET /api/posts?page=1&size=20
# 작성 날짜 기준 내림차순 정렬 (같은 시각이면 나중에 쓴 글이 먼저)
#
@router.get("", response_model=PostListResponse, summary="게시글 목록 조회")
async def list_posts(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    offset = (page - 1) * size
    query = (
        select(Post, User.nickname)
        .join(User, Post.user_id == User.user_id)
        .order_by(desc(Post.created_at), desc(Post.post_id))
        .offset(offset)
        .limit(size)
    )

    async with errors.store_errors(db, "list posts"):
        rows = (await db.execute(query)).all()

    return {"data": [_to_summary(post, nickname) for post, nickname in rows]}


# =============================================================================
# 게시글 상세 조회 API
# =============================================================================
#
# URL: GET /api/posts/{post_id}
#
@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="게시글 상세 조회",
    responses=_NOT_FOUND_RESPONSES,
)
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    query = (
        select(Post, User.nickname)
        .join(User, Post.user_id == User.user_id)
        .where(Post.post_id == post_id)
    )
    async with errors.store_errors(db, "get post"):
        row = (await db.execute(query)).first()

    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=errors.POST_NOT_FOUND)

    post, nickname = row
    return {"data": _to_detail(post, nickname)}


# =============================================================================
# 게시글 수정 API
# =============================================================================
#
# URL: PUT /api/posts/{post_id}
# 검사 순서: 게시글 존재(404) -> 작성자(401) -> 빈 내용(400)
#
@router.put(
    "/{post_id}",
    response_model=PostMutationResponse,
    summary="게시글 수정",
    responses={
        **_AUTH_RESPONSES,
        **_NOT_FOUND_RESPONSES,
        400: {"model": MessageResponse, "description": errors.POST_EMPTY},
    },
)
async def update_post(
    post_id: int,
    req: PostWriteRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    async with errors.store_errors(db, "update post"):
        await get_owned_or_raise(
            db, Post, Post.post_id == post_id,
            owner_id=user_id,
            not_found_detail=errors.POST_NOT_FOUND,
        )
        _ensure_not_blank(req)

        await update_owned(
            db, Post, Post.post_id == post_id,
            owner_id=user_id,
            values={"title": req.title, "content": req.content},
        )
        await db.commit()

    logger.info("post updated: post_id=%s user_id=%s", post_id, user_id)
    return {"message": errors.POST_UPDATED, "postId": post_id}


# =============================================================================
# 게시글 삭제 API
# =============================================================================
#
# URL: DELETE /api/posts/{post_id}
# 게시글에 달린 댓글도 같은 트랜잭션에서 삭제합니다.
#
@router.delete(
    "/{post_id}",
    response_model=PostMutationResponse,
    summary="게시글 삭제",
    responses={**_AUTH_RESPONSES, **_NOT_FOUND_RESPONSES},
)
async def delete_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    async with errors.store_errors(db, "delete post"):
        await get_owned_or_raise(
            db, Post, Post.post_id == post_id,
            owner_id=user_id,
            not_found_detail=errors.POST_NOT_FOUND,
        )

        await delete_owned(db, Post, Post.post_id == post_id, owner_id=user_id)
        await db.execute(delete(Comment).where(Comment.post_id == post_id))
        await db.commit()

    logger.info("post deleted: post_id=%s user_id=%s", post_id, user_id)
    return {"message": errors.POST_DELETED, "postId": post_id}
