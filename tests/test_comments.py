import pytest

from app import errors

from conftest import create_post, signup_and_login


async def _write_comment(client, post_id, auth, text="댓글"):
    response = await client.post(f"/api/posts/{post_id}/comments", json={"comment": text}, headers=auth)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_create_comment_requires_login(client):
    auth = await signup_and_login(client, "writer")
    post = await create_post(client, auth)

    response = await client.post(f"/api/posts/{post['postId']}/comments", json={"comment": "hi"})

    assert response.status_code == 401
    assert response.json() == {"message": errors.LOGIN_REQUIRED}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"comment": ""}, {"comment": "  \n "}, {}])
async def test_create_blank_comment_rejected(client, body):
    auth = await signup_and_login(client, "writer")
    post = await create_post(client, auth)

    response = await client.post(f"/api/posts/{post['postId']}/comments", json=body, headers=auth)

    assert response.status_code == 400
    assert response.json() == {"message": errors.COMMENT_EMPTY}


@pytest.mark.asyncio
async def test_comment_owner_is_caller_not_client_value(client):
    writer = await signup_and_login(client, "writer")
    reader = await signup_and_login(client, "reader")
    post = await create_post(client, writer)

    response = await client.post(
        f"/api/posts/{post['postId']}/comments",
        json={"comment": "좋아요", "userId": post["userId"]},
        headers=reader,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["userId"] != post["userId"]
    assert data["nickname"] == "reader"
    assert data["postId"] == post["postId"]
    assert data["comment"] == "좋아요"


@pytest.mark.asyncio
async def test_comment_on_missing_post(client):
    auth = await signup_and_login(client, "writer")

    create = await client.post("/api/posts/999/comments", json={"comment": "hi"}, headers=auth)
    listing = await client.get("/api/posts/999/comments")

    assert create.status_code == 404
    assert create.json() == {"message": errors.POST_NOT_FOUND}
    assert listing.status_code == 404


@pytest.mark.asyncio
async def test_list_comments_newest_first_and_scoped_to_post(client):
    auth = await signup_and_login(client, "writer")
    post = await create_post(client, auth)
    other_post = await create_post(client, auth, title="다른 글")
    created = [await _write_comment(client, post["postId"], auth, f"댓글 {i}") for i in range(4)]
    await _write_comment(client, other_post["postId"], auth, "다른 글 댓글")

    response = await client.get(f"/api/posts/{post['postId']}/comments")

    assert response.status_code == 200
    listed = response.json()["data"]
    assert [c["commentId"] for c in listed] == [c["commentId"] for c in reversed(created)]


@pytest.mark.asyncio
async def test_update_comment_by_owner(client):
    auth = await signup_and_login(client, "writer")
    post = await create_post(client, auth)
    comment = await _write_comment(client, post["postId"], auth)
    url = f"/api/posts/{post['postId']}/comments/{comment['commentId']}"

    response = await client.put(url, json={"comment": "수정된 댓글"}, headers=auth)

    assert response.status_code == 200
    assert response.json() == {"message": errors.COMMENT_UPDATED, "commentId": comment["commentId"]}
    listed = (await client.get(f"/api/posts/{post['postId']}/comments")).json()["data"]
    assert listed[0]["comment"] == "수정된 댓글"


@pytest.mark.asyncio
async def test_update_comment_check_order(client):
    writer = await signup_and_login(client, "writer")
    other = await signup_and_login(client, "other")
    post = await create_post(client, writer)
    comment = await _write_comment(client, post["postId"], writer)
    url = f"/api/posts/{post['postId']}/comments/{comment['commentId']}"

    missing = await client.put(f"/api/posts/{post['postId']}/comments/999", json={"comment": ""}, headers=other)
    not_owner = await client.put(url, json={"comment": ""}, headers=other)
    blank = await client.put(url, json={"comment": " "}, headers=writer)

    assert missing.status_code == 404
    assert missing.json() == {"message": errors.COMMENT_NOT_FOUND}
    assert not_owner.status_code == 401
    assert not_owner.json() == {"message": errors.FORBIDDEN}
    assert blank.status_code == 400
    assert blank.json() == {"message": errors.COMMENT_EMPTY}


@pytest.mark.asyncio
async def test_comment_under_wrong_post_not_found(client):
    auth = await signup_and_login(client, "writer")
    post = await create_post(client, auth)
    other_post = await create_post(client, auth, title="다른 글")
    comment = await _write_comment(client, post["postId"], auth)

    response = await client.delete(
        f"/api/posts/{other_post['postId']}/comments/{comment['commentId']}", headers=auth
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_comment(client):
    writer = await signup_and_login(client, "writer")
    other = await signup_and_login(client, "other")
    post = await create_post(client, writer)
    comment = await _write_comment(client, post["postId"], writer)
    url = f"/api/posts/{post['postId']}/comments/{comment['commentId']}"

    denied = await client.delete(url, headers=other)
    deleted = await client.delete(url, headers=writer)
    again = await client.delete(url, headers=writer)

    assert denied.status_code == 401
    assert deleted.status_code == 200
    assert deleted.json() == {"message": errors.COMMENT_DELETED, "commentId": comment["commentId"]}
    assert again.status_code == 404
    assert (await client.get(f"/api/posts/{post['postId']}/comments")).json()["data"] == []
