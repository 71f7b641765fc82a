import pytest
from fastapi import HTTPException
from sqlalchemy import select

from app import errors
from app.models import Post, User
from app.services.ownership import delete_owned, get_owned_or_raise, update_owned


async def _seed(session_factory):
    async with session_factory() as session:
        owner = User(nickname="owner", password_hash="x")
        other = User(nickname="other", password_hash="x")
        session.add_all([owner, other])
        await session.flush()
        post = Post(user_id=owner.user_id, title="제목", content="내용")
        session.add(post)
        await session.commit()
        return owner.user_id, other.user_id, post.post_id


@pytest.mark.asyncio
async def test_get_owned_returns_row_for_owner(session_factory):
    owner_id, _, post_id = await _seed(session_factory)

    async with session_factory() as session:
        post = await get_owned_or_raise(
            session, Post, Post.post_id == post_id, owner_id=owner_id, not_found_detail=errors.POST_NOT_FOUND
        )

    assert post.post_id == post_id


@pytest.mark.asyncio
async def test_get_owned_not_found_wins_over_identity(session_factory):
    _, other_id, _ = await _seed(session_factory)

    async with session_factory() as session:
        with pytest.raises(HTTPException) as exc_info:
            await get_owned_or_raise(
                session, Post, Post.post_id == 999, owner_id=other_id, not_found_detail=errors.POST_NOT_FOUND
            )

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_owned_rejects_other_user(session_factory):
    _, other_id, post_id = await _seed(session_factory)

    async with session_factory() as session:
        with pytest.raises(HTTPException) as exc_info:
            await get_owned_or_raise(
                session, Post, Post.post_id == post_id, owner_id=other_id, not_found_detail=errors.POST_NOT_FOUND
            )

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == errors.FORBIDDEN


@pytest.mark.asyncio
async def test_update_reasserts_owner(session_factory):
    # 조회 후 작성자가 바뀐 경우: 조건부 UPDATE가 0행이면 권한 없음
    _, other_id, post_id = await _seed(session_factory)

    async with session_factory() as session:
        with pytest.raises(HTTPException) as exc_info:
            await update_owned(session, Post, Post.post_id == post_id, owner_id=other_id, values={"title": "탈취"})

    assert exc_info.value.status_code == 401
    async with session_factory() as session:
        post = (await session.execute(select(Post).where(Post.post_id == post_id))).scalar_one()
    assert post.title == "제목"


@pytest.mark.asyncio
async def test_delete_reasserts_owner(session_factory):
    owner_id, other_id, post_id = await _seed(session_factory)

    async with session_factory() as session:
        with pytest.raises(HTTPException):
            await delete_owned(session, Post, Post.post_id == post_id, owner_id=other_id)

    async with session_factory() as session:
        await delete_owned(session, Post, Post.post_id == post_id, owner_id=owner_id)
        await session.commit()

    async with session_factory() as session:
        assert (await session.execute(select(Post))).first() is None


@pytest.mark.asyncio
async def test_update_by_owner_bumps_updated_at(session_factory):
    owner_id, _, post_id = await _seed(session_factory)
    async with session_factory() as session:
        before = (await session.execute(select(Post.updated_at).where(Post.post_id == post_id))).scalar_one()

    async with session_factory() as session:
        await update_owned(session, Post, Post.post_id == post_id, owner_id=owner_id, values={"title": "새 제목"})
        await session.commit()

    async with session_factory() as session:
        post = (await session.execute(select(Post).where(Post.post_id == post_id))).scalar_one()
    assert post.title == "새 제목"
    assert post.updated_at >= before
