"""
S3 / MinIO object storage helpers for profile pictures.

All functions use aioboto3 for async I/O.  The same code works against:
  - MinIO in development  (endpoint_url=http://localhost:9000)
  - Real AWS S3           (endpoint_url=None)

Pictures are stored under avatars/{user_id}/{epoch_ms}{safe_filename}; the
millisecond prefix keeps successive uploads of the same file name distinct.
The users table stores only the key; public URLs are derived on read.
"""
import re
import time
from typing import Optional

import aioboto3

from app.core.config import settings


# ── Key construction ────────────────────────────────────────────────────────

def build_avatar_key(user_id: str, filename: str, *, now_ms: Optional[int] = None) -> str:
    """Canonical key:  avatars/{user_id}/{epoch_ms}{safe_filename}"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"avatars/{user_id}/{now_ms}{_sanitize_filename(filename)}"


def _sanitize_filename(name: str) -> str:
    """Keep only safe ASCII chars for object keys; collapse whitespace to underscore."""
    # Drop any directory part a client may have sent
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    safe = re.sub(r"[^\w\-.]", "_", name, flags=re.ASCII)
    safe = re.sub(r"_+", "_", safe)
    return safe[:200]


def file_extension(filename: str) -> str:
    """Lower-case extension without the dot, or '' when there is none."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def public_url(key: Optional[str]) -> Optional[str]:
    """Public URL for a stored key, or None when the user has no picture."""
    if not key:
        return None
    return f"{settings.s3_public_base_url.rstrip('/')}/{key}"


# ── Session factory ──────────────────────────────────────────────────────────

def _s3_client():
    """Return an async context-manager for an S3 client configured from settings."""
    session = aioboto3.Session()
    kwargs = dict(
        region_name=settings.s3_region,
        aws_access_key_id=settings.s3_aws_access_key_id,
        aws_secret_access_key=settings.s3_aws_secret_access_key,
    )
    if settings.s3_endpoint_url:
        kwargs["endpoint_url"] = settings.s3_endpoint_url
    return session.client("s3", **kwargs)


# ── Upload ───────────────────────────────────────────────────────────────────

async def upload_bytes(key: str, data: bytes, content_type: Optional[str] = None) -> None:
    """Store an object under key, replacing any existing object."""
    extra = {}
    if content_type:
        extra["ContentType"] = content_type

    async with _s3_client() as s3:
        await s3.put_object(
            Bucket=settings.s3_bucket_name,
            Key=key,
            Body=data,
            **extra,
        )


# ── Delete ───────────────────────────────────────────────────────────────────

async def delete_object(key: str) -> None:
    """
    Delete a single object.

    Called after a user replaces their picture. Succeeds if the object is
    already gone.
    """
    async with _s3_client() as s3:
        await s3.delete_object(Bucket=settings.s3_bucket_name, Key=key)
