from app.core.config import settings
from app.repositories.social_link_repository import SocialLinkRepository
from app.repositories.user_repository import UserRepository
from app.schemas.profile import NO_SKILLS_PLACEHOLDER


async def get_profile(client, headers, username):
    return await client.get("/api/profile", params={"selectedUser": username}, headers=headers)


async def test_profile_without_skills_uses_placeholder(client, signup):
    headers = await signup("alice")

    response = await get_profile(client, headers, "alice")
    assert response.status_code == 200

    profile = response.json()["profileData"]
    assert profile["username"] == "alice"
    assert profile["email"] == "alice@x.com"
    assert profile["skillsToLearn"] == [NO_SKILLS_PLACEHOLDER]
    assert profile["skillsToTeach"] == [NO_SKILLS_PLACEHOLDER]
    assert profile["prioritySkillToLearn"] is None
    assert profile["profilePicture"] is None
    assert profile["socials"] == []


async def test_profile_lists_skills_by_role(client, signup):
    alice = await signup("alice")
    bob = await signup("bob")
    for skill, to_learn in (("Piano", True), ("Guitar", True), ("Painting", False)):
        await client.post("/api/add-skill", json={"skill": skill, "toLearn": to_learn}, headers=alice)

    # Any signed-in user may view another profile
    response = await get_profile(client, bob, "alice")
    profile = response.json()["profileData"]
    assert profile["skillsToLearn"] == ["Guitar", "Piano"]
    assert profile["skillsToTeach"] == ["Painting"]


async def test_profile_of_unknown_user(client, signup):
    headers = await signup("alice")

    response = await get_profile(client, headers, "ghost")
    assert response.status_code == 404
    assert response.json()["error"] == "USER_NOT_FOUND"


async def test_edit_username_issues_new_token(client, signup):
    headers = await signup("alice")

    response = await client.post(
        "/api/edit-profile",
        data={"currentUsername": "alice", "newUsername": "alicia"},
        headers=headers,
    )
    assert response.status_code == 200

    data = response.json()
    assert data["newUsername"] == "alicia"
    assert data["accessToken"]

    new_headers = {"Authorization": f"Bearer {data['accessToken']}"}
    response = await get_profile(client, new_headers, "alicia")
    assert response.status_code == 200

    # The old token names a username that no longer exists
    response = await get_profile(client, headers, "alicia")
    assert response.status_code == 403


async def test_edit_without_username_change_has_no_token(client, signup):
    headers = await signup("alice")

    response = await client.post(
        "/api/edit-profile",
        data={"newDescription": "I paint on weekends"},
        headers=headers,
    )
    assert response.status_code == 200

    data = response.json()
    assert data["newUsername"] == "alice"
    assert "accessToken" not in data
    assert data["img"] is None

    response = await get_profile(client, headers, "alice")
    assert response.json()["profileData"]["description"] == "I paint on weekends"


async def test_edit_to_taken_username(client, signup):
    headers = await signup("alice")
    await signup("bob")

    response = await client.post("/api/edit-profile", data={"newUsername": "bob"}, headers=headers)
    assert response.status_code == 409
    assert response.json()["message"] == "Username of: bob already exists"


async def test_social_link_is_upserted(client, signup):
    headers = await signup("alice")

    await client.post(
        "/api/edit-profile",
        data={"platform": "github", "linkToPlatform": "https://github.com/old"},
        headers=headers,
    )
    response = await client.post(
        "/api/edit-profile",
        data={"platform": "github", "linkToPlatform": "https://github.com/alice"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["newSocials"] == [
        {"platform": "github", "url": "https://github.com/alice"},
    ]


async def test_platform_without_link_is_rejected(client, signup):
    headers = await signup("alice")

    response = await client.post("/api/edit-profile", data={"platform": "github"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "LINK_REQUIRED"


async def test_upload_profile_picture(client, signup, uploads):
    headers = await signup("alice")

    response = await client.post(
        "/api/edit-profile",
        files={"imgFile": ("me.png", b"\x89PNG fake", "image/png")},
        headers=headers,
    )
    assert response.status_code == 200

    [(key, data, content_type)] = uploads["uploaded"]
    assert key.startswith("avatars/")
    assert key.endswith("me.png")
    assert data == b"\x89PNG fake"
    assert content_type == "image/png"

    expected_url = f"{settings.s3_public_base_url}/{key}"
    assert response.json()["img"] == expected_url

    response = await get_profile(client, headers, "alice")
    assert response.json()["profileData"]["profilePicture"] == expected_url


async def test_replacing_picture_deletes_old_object(client, signup, uploads):
    headers = await signup("alice")

    await client.post("/api/edit-profile", files={"imgFile": ("a.png", b"one", "image/png")}, headers=headers)
    await client.post("/api/edit-profile", files={"imgFile": ("b.png", b"two", "image/png")}, headers=headers)

    first_key = uploads["uploaded"][0][0]
    assert uploads["deleted"] == [first_key]


async def test_unsupported_image_type(client, signup, uploads):
    headers = await signup("alice")

    response = await client.post(
        "/api/edit-profile",
        files={"imgFile": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "UNSUPPORTED_IMAGE"
    assert uploads["uploaded"] == []


async def test_edit_for_another_user_is_403(client, signup):
    headers = await signup("alice")
    await signup("bob")

    response = await client.post(
        "/api/edit-profile",
        data={"currentUsername": "bob", "newDescription": "hijacked"},
        headers=headers,
    )
    assert response.status_code == 403


async def test_rename_conflict_caught_by_unique_constraint(client, signup, miss_once):
    headers = await signup("alice")
    await signup("bob")
    miss_once(UserRepository, "username_exists", False)

    response = await client.post("/api/edit-profile", data={"newUsername": "bob"}, headers=headers)
    assert response.status_code == 409
    assert response.json()["error"] == "USERNAME_TAKEN"

    response = await get_profile(client, headers, "alice")
    assert response.status_code == 200


async def test_concurrent_platform_insert_is_conflict(client, signup, uploads, miss_once):
    headers = await signup("alice")
    await client.post(
        "/api/edit-profile",
        data={"platform": "github", "linkToPlatform": "https://github.com/first"},
        headers=headers,
    )
    miss_once(SocialLinkRepository, "get_for_platform")

    response = await client.post(
        "/api/edit-profile",
        data={
            "newUsername": "alicia",
            "platform": "github",
            "linkToPlatform": "https://github.com/second",
        },
        files={"imgFile": ("me.png", b"png", "image/png")},
        headers=headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "PLATFORM_EXISTS"

    # Nothing from the failed edit is kept
    [(new_key, _, _)] = uploads["uploaded"]
    assert uploads["deleted"] == [new_key]

    response = await get_profile(client, headers, "alice")
    profile = response.json()["profileData"]
    assert profile["profilePicture"] is None
    assert profile["socials"] == [{"platform": "github", "url": "https://github.com/first"}]
