import secrets
import string
from typing import NewType

from pydantic import Field

from surprise.domain.shared.model.value import ValueObject

SurpriseId = NewType("SurpriseId", str)

# URL-safe alphabet (same 64 characters as nanoid)
SLUG_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_slug(length: int = 12) -> str:
    """Return a random URL-safe slug drawn from a CSPRNG."""
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


class NewSurprise(ValueObject):
    """Everything the record store needs to create a Surprise.

    The store assigns `id` and `created_at`.
    """

    slug: str
    content_ref: str
    original_name: str
    mime_type: str
    message: str
    password_hash: str | None = Field(default=None, repr=False)


class UploadLimits(ValueObject):
    """Constraints applied to an upload before anything is stored."""

    max_file_size: int
    allowed_type_prefixes: tuple[str, ...] = ("image/", "video/")

    def accepts_type(self, content_type: str) -> bool:
        return any(content_type.startswith(prefix) for prefix in self.allowed_type_prefixes)
