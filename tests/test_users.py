"""
User and topic endpoint tests.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_users(async_client: AsyncClient, seeded):
    resp = await async_client.get("/api/users")
    assert resp.status_code == 200
    users = resp.json()["users"]
    assert len(users) == 4
    for user in users:
        assert set(user) == {"username", "name", "avatar_url"}


@pytest.mark.asyncio
async def test_list_users_empty(async_client: AsyncClient):
    resp = await async_client.get("/api/users")
    assert resp.status_code == 200
    assert resp.json() == {"users": []}


@pytest.mark.asyncio
async def test_get_user(async_client: AsyncClient, seeded):
    resp = await async_client.get("/api/users/butter_bridge")
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["username"] == "butter_bridge"
    assert user["name"] == "jonny"
    assert user["avatar_url"].startswith("https://")


@pytest.mark.asyncio
async def test_get_user_not_found(async_client: AsyncClient, seeded):
    resp = await async_client.get("/api/users/fakeusername")
    assert resp.status_code == 404
    assert resp.json()["msg"] == "username not found"


# ---------------------------------------------------------------------------
# Topics
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_topics(async_client: AsyncClient, seeded):
    resp = await async_client.get("/api/topics")
    assert resp.status_code == 200
    topics = resp.json()["topics"]
    assert {t["slug"] for t in topics} == {"mitch", "cats", "paper"}
    for topic in topics:
        assert set(topic) == {"slug", "description"}


@pytest.mark.asyncio
async def test_create_topic(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/topics",
        json={"slug": "new topic", "description": "description for new topic"},
    )
    assert resp.status_code == 200
    assert resp.json()["topic"] == {
        "slug": "new topic",
        "description": "description for new topic",
    }


@pytest.mark.asyncio
async def test_create_topic_missing_field(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/topics",
        json={"slg": "new topic", "description": "description for new topic"},
    )
    assert resp.status_code == 400
    assert resp.json()["msg"] == "posted body missing required fields"


@pytest.mark.asyncio
async def test_create_topic_duplicate_slug(async_client: AsyncClient, seeded):
    resp = await async_client.post("/api/topics", json={"slug": "cats", "description": "again"})
    assert resp.status_code == 409
    assert resp.json()["msg"] == "topic already exists"


@pytest.mark.asyncio
async def test_create_topic_lower_cases_slug(async_client: AsyncClient, seeded):
    resp = await async_client.post("/api/topics", json={"slug": "Dogs", "description": "Woof"})
    assert resp.status_code == 200
    assert resp.json()["topic"]["slug"] == "dogs"

    resp = await async_client.get("/api/articles?topic=DOGS")
    assert resp.status_code == 200
    assert resp.json()["total_count"] == 0


@pytest.mark.asyncio
async def test_create_topic_differing_only_by_case_is_a_duplicate(async_client: AsyncClient, seeded):
    resp = await async_client.post("/api/topics", json={"slug": "MITCH", "description": "shouting"})
    assert resp.status_code == 409
    assert resp.json()["msg"] == "topic already exists"


@pytest.mark.asyncio
async def test_create_topic_without_body(async_client: AsyncClient):
    resp = await async_client.post("/api/topics")
    assert resp.status_code == 400
    assert resp.json()["msg"] == "posted body missing required fields"
