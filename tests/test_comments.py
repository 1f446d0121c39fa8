"""
Comment endpoint tests: listing an article's comments and posting new
ones, including every rejection path.
"""
from datetime import datetime

import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# List comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_comments(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments")
    assert resp.status_code == 200
    comments = resp.json()["comments"]
    assert len(comments) == 5

    for comment in comments:
        assert isinstance(comment["comment_id"], int)
        assert isinstance(comment["votes"], int)
        assert isinstance(comment["created_at"], str)
        assert isinstance(comment["author"], str)
        assert isinstance(comment["body"], str)
        assert comment["article_id"] == 1


@pytest.mark.asyncio
async def test_list_comments_most_recent_first(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments")
    comments = resp.json()["comments"]
    created = [datetime.fromisoformat(c["created_at"]) for c in comments]
    assert created == sorted(created, reverse=True)
    assert comments[0]["body"] == "I hate streaming noses"


@pytest.mark.asyncio
async def test_list_comments_empty(async_client: AsyncClient):
    """An existing article without comments gives an empty array, not 404."""
    resp = await async_client.get("/api/articles/2/comments")
    assert resp.status_code == 200
    assert resp.json() == {"comments": []}


@pytest.mark.asyncio
async def test_list_comments_misspelt_path(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/commentsssssss")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Route not found"}


@pytest.mark.asyncio
async def test_list_comments_invalid_id(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/54etr4e/comments")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Bad Request"}


@pytest.mark.asyncio
async def test_list_comments_unknown_article(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/12345/comments")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article Not Found"}


@pytest.mark.asyncio
async def test_list_comments_id_out_of_range(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1234523423432423/comments")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Out Of Range For Type Integer"}


# ---------------------------------------------------------------------------
# Post comment: happy path
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_post_comment(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "butter_bridge", "body": "test body"},
    )
    assert resp.status_code == 201
    comment = resp.json()["comment"]
    assert comment["body"] == "test body"
    assert comment["article_id"] == 1
    assert comment["author"] == "butter_bridge"
    assert comment["votes"] == 0
    assert isinstance(comment["created_at"], str)
    # Seed data holds comment ids 1..8.
    assert comment["comment_id"] not in range(1, 9)


@pytest.mark.asyncio
async def test_posted_comment_is_listed(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/2/comments",
        json={"username": "lurker", "body": "first!"},
    )
    comment_id = resp.json()["comment"]["comment_id"]

    resp = await async_client.get("/api/articles/2/comments")
    comments = resp.json()["comments"]
    assert [c["comment_id"] for c in comments] == [comment_id]

    resp = await async_client.get("/api/articles/2")
    assert resp.json()["article"]["comment_count"] == 1


# ---------------------------------------------------------------------------
# Post comment: error paths
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_post_comment_unknown_user(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "some_random_dude", "body": "test body"},
    )
    assert resp.status_code == 404
    assert resp.json() == {"msg": "User Not Found"}


@pytest.mark.asyncio
async def test_post_comment_missing_body(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "butter_bridge"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Not Null Violation"}


@pytest.mark.asyncio
async def test_post_comment_missing_username(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"body": "anonymous"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Not Null Violation"}


@pytest.mark.asyncio
async def test_failed_post_leaves_no_comment(async_client: AsyncClient):
    await async_client.post("/api/articles/2/comments", json={"username": "lurker"})
    resp = await async_client.get("/api/articles/2/comments")
    assert resp.json() == {"comments": []}


@pytest.mark.asyncio
async def test_post_comment_invalid_article_id(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/54etr4e/comments",
        json={"username": "butter_bridge", "body": "test body"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Bad Request"}


@pytest.mark.asyncio
async def test_post_comment_unknown_article(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/12345/comments",
        json={"username": "butter_bridge", "body": "test body"},
    )
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article Not Found"}


@pytest.mark.asyncio
async def test_post_comment_article_id_out_of_range(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1234523423432423/comments",
        json={"username": "butter_bridge", "body": "test body"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Out Of Range For Type Integer"}


@pytest.mark.asyncio
async def test_post_comment_malformed_json(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Bad Request"}
