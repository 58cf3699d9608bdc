"""Surprise aggregate - immutable shared media record."""

from datetime import datetime

from pydantic import Field

from surprise.domain.shared.model.aggregate import Aggregate
from surprise.domain.surprise.model.value import SurpriseId


class Surprise(Aggregate):
    """A stored upload plus its message, reachable through its public slug.

    Created exactly once and never updated. `password_hash` must never
    leave the server.
    """

    id: SurpriseId
    slug: str
    content_ref: str  # Local filename or remote URL of the media blob
    original_name: str
    mime_type: str
    message: str
    password_hash: str | None = Field(default=None, repr=False)
    created_at: datetime

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None
