"""Enrollment Route — POST /users/{userId}/quizzes/{quizId}.

Invariants:
    - first enrollment -> 200 {quiz, user} with userCount=1, quizIds=[quizId]
    - repeat -> 404 already-enrolled signal, counts unchanged
    - unknown user or quiz -> 404 {}
    - concurrent enrollments of distinct users are all counted
    - legacy /quizes/ path behaves the same
"""

import asyncio

from quizhub.core.enforce_enrollment import ALREADY_ENROLLED_MESSAGE
from quizhub.infrastructure.document_store import get_document_store
from quizhub.main import app

from tests.services.fake_stores import FailingStore


async def test_enroll_user(client, seed_user, seed_quiz):
    res = await client.post(f"/users/{seed_user['id']}/quizzes/{seed_quiz['id']}", json={})
    assert res.status_code == 200
    body = res.json()
    assert body["user"]["quizIds"] == [seed_quiz["id"]]
    assert body["quiz"]["userCount"] == 1
    assert body["quiz"]["createdOn"] == seed_quiz["createdOn"]


async def test_enroll_twice_returns_already_enrolled(client, seed_user, seed_quiz):
    path = f"/users/{seed_user['id']}/quizzes/{seed_quiz['id']}"
    await client.post(path, json={})

    res = await client.post(path, json={})
    assert res.status_code == 404
    assert res.json() == {"data": ALREADY_ENROLLED_MESSAGE}

    assert (await client.get(f"/quizzes/{seed_quiz['id']}")).json()["userCount"] == 1
    assert (await client.get(f"/users/{seed_user['id']}")).json()["quizIds"] == [seed_quiz["id"]]


async def test_enroll_unknown_user(client, seed_quiz):
    res = await client.post(f"/users/missing/quizzes/{seed_quiz['id']}")
    assert res.status_code == 404
    assert res.json() == {}


async def test_enroll_unknown_quiz(client, seed_user):
    res = await client.post(f"/users/{seed_user['id']}/quizzes/missing")
    assert res.status_code == 404
    assert res.json() == {}


async def test_body_is_ignored(client, seed_user, seed_quiz):
    res = await client.post(
        f"/users/{seed_user['id']}/quizzes/{seed_quiz['id']}",
        json={"quizIds": ["other"], "userCount": 50},
    )
    assert res.status_code == 200
    assert res.json()["quiz"]["userCount"] == 1


async def test_legacy_path_alias(client, seed_user, seed_quiz):
    res = await client.post(f"/users/{seed_user['id']}/quizes/{seed_quiz['id']}")
    assert res.status_code == 200
    assert res.json()["user"]["quizIds"] == [seed_quiz["id"]]


async def test_concurrent_enrollments_are_all_counted(client, seed_quiz):
    user_ids = []
    for i in range(5):
        res = await client.post("/users", json={"name": f"User {i}"})
        user_ids.append(res.json()["id"])

    responses = await asyncio.gather(*(
        client.post(f"/users/{uid}/quizzes/{seed_quiz['id']}") for uid in user_ids
    ))

    assert [r.status_code for r in responses] == [200] * 5
    assert (await client.get(f"/quizzes/{seed_quiz['id']}")).json()["userCount"] == 5


async def test_store_failure_is_500(client):
    app.dependency_overrides[get_document_store] = FailingStore
    res = await client.post("/users/u1/quizzes/q1")
    assert res.status_code == 500
    assert res.json() == {}
