from datetime import timedelta

from jose import jwt

from app.core import storage
from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_token,
    get_token_subject,
    hash_password,
    verify_password,
)


def test_token_carries_username_and_expiry():
    token = create_access_token("alice")

    payload = decode_token(token)
    assert payload["sub"] == "alice"
    assert "exp" in payload
    assert set(payload) == {"sub", "exp"}


def test_expired_token_has_no_subject():
    token = create_access_token("alice", expires_delta=timedelta(seconds=-1))
    assert decode_token(token) is None
    assert get_token_subject(token) is None


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "alice"}, "some-other-key", algorithm=settings.algorithm)
    assert get_token_subject(token) is None


def test_token_without_subject_is_rejected():
    token = jwt.encode({"user": "alice"}, settings.secret_key, algorithm=settings.algorithm)
    assert get_token_subject(token) is None


def test_password_hash_round_trip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_avatar_key_layout():
    key = storage.build_avatar_key("user-1", "me.png", now_ms=1700000000000)
    assert key == "avatars/user-1/1700000000000me.png"


def test_avatar_key_sanitizes_filename():
    key = storage.build_avatar_key("user-1", "../../my photo (1).JPG", now_ms=5)
    assert key == "avatars/user-1/5my_photo_1_.JPG"


def test_file_extension():
    assert storage.file_extension("Photo.JPEG") == "jpeg"
    assert storage.file_extension("README") == ""


def test_public_url():
    assert storage.public_url(None) is None
    assert storage.public_url("avatars/u/1.png") == f"{settings.s3_public_base_url}/avatars/u/1.png"
