from sqlalchemy import func, select

from app.models.match import Match, MatchRequest
from app.models.user import User
from app.repositories.match_repository import MatchRepository, MatchRequestRepository


async def send_request(client, headers, selected_user):
    return await client.post(
        "/api/send-match-request",
        json={"selectedUser": selected_user},
        headers=headers,
    )


async def user_id(db, username):
    return await db.scalar(select(User.id).where(User.username == username))


async def test_send_and_list_requests(client, signup):
    alice = await signup("alice")
    bob = await signup("bob")
    carol = await signup("carol")

    response = await send_request(client, alice, "bob")
    assert response.status_code == 201
    assert response.json() == {"message": "Match request sent to bob"}

    await send_request(client, carol, "alice")

    response = await client.get("/api/fetch-requests", params={"user": "alice"}, headers=alice)
    assert response.status_code == 200
    assert response.json() == {"sentRequests": ["bob"], "receivedRequests": ["carol"]}

    response = await client.get("/api/fetch-requests", headers=bob)
    assert response.json() == {"sentRequests": [], "receivedRequests": ["alice"]}


async def test_requests_in_both_directions_coexist(client, signup, db):
    alice = await signup("alice")
    bob = await signup("bob")

    assert (await send_request(client, alice, "bob")).status_code == 201
    assert (await send_request(client, bob, "alice")).status_code == 201

    count = await db.scalar(select(func.count()).select_from(MatchRequest))
    assert count == 2


async def test_duplicate_request_is_conflict(client, signup, db):
    alice = await signup("alice")
    await signup("bob")
    await send_request(client, alice, "bob")

    response = await send_request(client, alice, "bob")
    assert response.status_code == 409
    assert response.json()["error"] == "MATCH_REQUEST_EXISTS"

    count = await db.scalar(select(func.count()).select_from(MatchRequest))
    assert count == 1


async def test_request_to_self_is_rejected(client, signup):
    alice = await signup("alice")

    response = await send_request(client, alice, "alice")
    assert response.status_code == 400
    assert response.json()["error"] == "SELF_REQUEST"


async def test_request_to_unknown_user(client, signup):
    alice = await signup("alice")

    response = await send_request(client, alice, "ghost")
    assert response.status_code == 404
    assert response.json()["error"] == "USER_NOT_FOUND"


async def test_remove_all_sent_requests_keeps_received(client, signup):
    alice = await signup("alice")
    await signup("bob")
    await signup("carol")
    dave = await signup("dave")

    await send_request(client, alice, "bob")
    await send_request(client, alice, "carol")
    await send_request(client, dave, "alice")

    response = await client.delete(
        "/api/remove-all-match-requests",
        params={"username": "alice"},
        headers=alice,
    )
    assert response.status_code == 200
    assert response.json() == {"message": "removed all sent requests", "removed": 2}

    response = await client.get("/api/fetch-requests", headers=alice)
    assert response.json() == {"sentRequests": [], "receivedRequests": ["dave"]}


async def test_remove_all_with_nothing_sent(client, signup):
    alice = await signup("alice")

    response = await client.delete("/api/remove-all-match-requests", headers=alice)
    assert response.status_code == 200
    assert response.json()["removed"] == 0


async def test_unmatch_removes_pair_and_is_idempotent(client, signup, session_maker):
    alice = await signup("alice")
    await signup("bob")

    async with session_maker() as db:
        await MatchRepository().create_pair(db, await user_id(db, "bob"), await user_id(db, "alice"))
        await db.commit()

    response = await client.post("/api/unmatch", json={"selectedUser": "bob", "user": "alice"}, headers=alice)
    assert response.status_code == 200
    assert response.json() == {"message": "deleted", "removed": 1}

    response = await client.post("/api/unmatch", json={"selectedUser": "bob"}, headers=alice)
    assert response.status_code == 200
    assert response.json() == {"message": "deleted", "removed": 0}

    async with session_maker() as db:
        count = await db.scalar(select(func.count()).select_from(Match))
    assert count == 0


async def test_unmatch_from_either_side(client, signup, session_maker):
    await signup("alice")
    bob = await signup("bob")

    async with session_maker() as db:
        await MatchRepository().create_pair(db, await user_id(db, "alice"), await user_id(db, "bob"))
        await db.commit()

    response = await client.post("/api/unmatch", json={"selectedUser": "alice"}, headers=bob)
    assert response.json()["removed"] == 1


async def test_match_pair_is_stored_in_canonical_order(signup, session_maker):
    await signup("alice")
    await signup("bob")

    async with session_maker() as db:
        a, b = await user_id(db, "alice"), await user_id(db, "bob")
        match = await MatchRepository().create_pair(db, max(a, b), min(a, b))
        await db.commit()

        assert match.user_id == min(a, b)
        assert match.match_id == max(a, b)
        assert await MatchRepository().exists(db, a, b)
        assert await MatchRepository().exists(db, b, a)


async def test_duplicate_request_caught_by_unique_constraint(client, signup, db, miss_once):
    alice = await signup("alice")
    await signup("bob")
    await send_request(client, alice, "bob")
    miss_once(MatchRequestRepository, "find_pending")

    response = await send_request(client, alice, "bob")
    assert response.status_code == 409
    assert response.json()["error"] == "MATCH_REQUEST_EXISTS"

    count = await db.scalar(select(func.count()).select_from(MatchRequest))
    assert count == 1
