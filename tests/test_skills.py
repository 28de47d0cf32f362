from sqlalchemy import select

from app.models.skill import Skill
from app.models.skill_assignment import SkillAssignment
from app.models.user import User
from app.repositories.skill_repository import SkillAssignmentRepository


async def add_skill(client, headers, skill, to_learn=True):
    return await client.post(
        "/api/add-skill",
        json={"skill": skill, "toLearn": to_learn},
        headers=headers,
    )


async def assignments_of(db, username):
    result = await db.execute(
        select(SkillAssignment)
        .join(User, User.id == SkillAssignment.user_id)
        .where(User.username == username)
    )
    return list(result.scalars().all())


async def test_unselected_skills_grouped_by_category(client, signup):
    headers = await signup("alice")

    response = await client.get("/api/unselected-skills", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == [
        {"category": "Art", "skills": ["Drawing", "Painting"]},
        {"category": "Music", "skills": ["Guitar", "Piano"]},
        {"category": "Technology", "skills": ["Python"]},
    ]


async def test_added_skill_leaves_unselected_list(client, signup):
    headers = await signup("alice")

    response = await add_skill(client, headers, "Painting", to_learn=True)
    assert response.status_code == 200
    assert response.json() == {
        "message": "'Painting' has been added to your list",
        "rowCount": 1,
    }

    response = await client.get("/api/unselected-skills", headers=headers)
    art = response.json()["data"][0]
    assert art == {"category": "Art", "skills": ["Drawing"]}


async def test_unselected_skills_no_data(client, signup):
    headers = await signup("alice")
    for name in ("Drawing", "Painting", "Guitar", "Piano"):
        await add_skill(client, headers, name, to_learn=True)
    await add_skill(client, headers, "Python", to_learn=False)

    response = await client.get("/api/unselected-skills", headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "No data"


async def test_unselected_skills_requires_token(client):
    response = await client.get("/api/unselected-skills", params={"username": "alice"})
    assert response.status_code == 401


async def test_add_duplicate_skill_is_conflict(client, signup, db):
    headers = await signup("alice")
    await add_skill(client, headers, "Painting", to_learn=True)

    # Same skill in the other role is still a duplicate
    response = await add_skill(client, headers, "Painting", to_learn=False)
    assert response.status_code == 409
    assert response.json()["error"] == "SKILL_ALREADY_ASSIGNED"

    rows = await assignments_of(db, "alice")
    assert len(rows) == 1
    assert rows[0].is_learning and not rows[0].is_teaching


async def test_add_unknown_skill(client, signup):
    headers = await signup("alice")

    response = await add_skill(client, headers, "Juggling")
    assert response.status_code == 404
    assert response.json()["error"] == "SKILL_NOT_FOUND"


async def test_remove_skill(client, signup, db):
    headers = await signup("alice")
    await add_skill(client, headers, "Painting", to_learn=False)
    await add_skill(client, headers, "Piano", to_learn=True)

    response = await client.delete(
        "/api/remove-skill",
        params={"skill": "Painting", "username": "alice"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"message": "deletion successful", "rowCount": 1}

    rows = await assignments_of(db, "alice")
    assert len(rows) == 1

    response = await client.get("/api/unselected-skills", headers=headers)
    assert {"category": "Art", "skills": ["Drawing", "Painting"]} in response.json()["data"]


async def test_remove_unassigned_skill_is_404(client, signup):
    headers = await signup("alice")

    response = await client.delete(
        "/api/remove-skill",
        params={"skill": "Painting"},
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "SKILL_NOT_ASSIGNED"


async def test_set_and_clear_priority(client, signup, db):
    headers = await signup("alice")
    await add_skill(client, headers, "Piano", to_learn=True)
    await add_skill(client, headers, "Painting", to_learn=False)

    response = await client.put(
        "/api/update-priority-skill",
        json={"user": "alice", "skill": "Piano", "isToLearn": True},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"message": "successfully updated"}

    piano = await db.scalar(select(Skill).where(Skill.name == "Piano"))
    rows = await assignments_of(db, "alice")
    assert all(row.learn_priority_skill_id == piano.id for row in rows)

    response = await client.get("/api/profile", params={"selectedUser": "alice"}, headers=headers)
    assert response.json()["profileData"]["prioritySkillToLearn"] == "Piano"

    response = await client.request(
        "DELETE",
        "/api/unprioritize-skill",
        json={"user": "alice", "skill": "Piano", "isToLearn": True},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"message": "'Piano' unprioritized"}

    db.expire_all()
    rows = await assignments_of(db, "alice")
    assert len(rows) == 2
    assert all(row.learn_priority_skill_id is None for row in rows)


async def test_new_skill_inherits_priority(client, signup, db):
    headers = await signup("alice")
    await add_skill(client, headers, "Piano", to_learn=True)
    await client.put(
        "/api/update-priority-skill",
        json={"skill": "Piano", "isToLearn": True},
        headers=headers,
    )

    await add_skill(client, headers, "Guitar", to_learn=True)

    piano = await db.scalar(select(Skill).where(Skill.name == "Piano"))
    rows = await assignments_of(db, "alice")
    assert len(rows) == 2
    assert all(row.learn_priority_skill_id == piano.id for row in rows)


async def test_priority_requires_matching_role(client, signup):
    headers = await signup("alice")
    await add_skill(client, headers, "Painting", to_learn=False)

    response = await client.put(
        "/api/update-priority-skill",
        json={"skill": "Painting", "isToLearn": True},
        headers=headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "SKILL_NOT_PRIORITIZABLE"


async def test_removing_priority_skill_clears_pointer(client, signup, db):
    headers = await signup("alice")
    await add_skill(client, headers, "Painting", to_learn=False)
    await add_skill(client, headers, "Piano", to_learn=False)
    await client.put(
        "/api/update-priority-skill",
        json={"skill": "Painting", "isToLearn": False},
        headers=headers,
    )

    await client.delete("/api/remove-skill", params={"skill": "Painting"}, headers=headers)

    rows = await assignments_of(db, "alice")
    assert len(rows) == 1
    assert rows[0].teach_priority_skill_id is None


async def test_acting_user_mismatch_is_403(client, signup):
    headers = await signup("alice")
    await signup("bob")

    response = await client.post(
        "/api/add-skill",
        json={"skill": "Painting", "username": "bob", "toLearn": True},
        headers=headers,
    )
    assert response.status_code == 403
    assert response.json()["error"] == "ACTING_USER_MISMATCH"


async def test_add_same_skill_twice_in_same_role(client, signup, db):
    headers = await signup("alice")

    first = await add_skill(client, headers, "Painting", to_learn=True)
    second = await add_skill(client, headers, "Painting", to_learn=True)
    assert first.status_code == 200
    assert second.status_code == 409

    rows = await assignments_of(db, "alice")
    assert len(rows) == 1


async def test_duplicate_add_caught_by_unique_constraint(client, signup, db, miss_once):
    headers = await signup("alice")
    await add_skill(client, headers, "Painting", to_learn=True)
    calls = miss_once(SkillAssignmentRepository, "get_for_user")

    response = await add_skill(client, headers, "Painting", to_learn=True)
    assert response.status_code == 409
    assert response.json()["error"] == "SKILL_ALREADY_ASSIGNED"
    assert len(calls) == 1

    rows = await assignments_of(db, "alice")
    assert len(rows) == 1


async def test_add_skill_without_role_is_validation_error(client, signup):
    headers = await signup("alice")

    response = await client.post("/api/add-skill", json={"skill": "Painting"}, headers=headers)
    assert response.status_code == 422

    data = response.json()
    assert data["error"] == "VALIDATION_ERROR"
    assert set(data["newErrors"]) == {"toLearn"}
