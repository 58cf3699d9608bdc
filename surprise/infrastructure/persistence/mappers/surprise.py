"""Surprise mapper - converts between domain and persistence."""

from datetime import UTC, datetime
from typing import Any

from surprise.domain.surprise.model.aggregate import Surprise
from surprise.domain.surprise.model.value import SurpriseId


def row_to_surprise(row: dict[str, Any]) -> Surprise:
    """Convert database row to Surprise aggregate."""
    created_at = row["created_at"]
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    # SQLite drops tzinfo on round-trip; values are always written in UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)

    return Surprise(
        id=SurpriseId(row["id"]),
        slug=row["slug"],
        content_ref=row["filename"],
        original_name=row["original_name"],
        mime_type=row["mime_type"],
        message=row["message"],
        password_hash=row.get("password"),
        created_at=created_at,
    )


def surprise_to_dict(surprise: Surprise) -> dict[str, Any]:
    """Convert Surprise aggregate to database dict."""
    return {
        "id": surprise.id,
        "slug": surprise.slug,
        "filename": surprise.content_ref,
        "original_name": surprise.original_name,
        "mime_type": surprise.mime_type,
        "message": surprise.message,
        "password": surprise.password_hash,
        "created_at": surprise.created_at,
    }
