"""Unit tests for error to HTTP status mapping."""

import pytest

from surprise.application.api.v1.errors import map_surprise_error
from surprise.domain.shared.error import (
    AuthenticationError,
    BlobWriteError,
    ConfigurationError,
    ConflictError,
    DuplicateSlugError,
    NotFoundError,
    PayloadTooLargeError,
    StorageUnavailableError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (NotFoundError("Surprise not found"), 404),
        (ValidationError("Message is required"), 400),
        (PayloadTooLargeError("File is too large"), 413),
        (AuthenticationError("Invalid password"), 401),
        (ConflictError("conflict"), 409),
        (DuplicateSlugError("taken"), 409),
        (StorageUnavailableError("db down"), 500),
        (BlobWriteError("disk full"), 500),
        (ConfigurationError("bad"), 500),
    ],
)
def test_status_codes(error, status):
    assert map_surprise_error(error).status_code == status


def test_detail_carries_code_and_message():
    exc = map_surprise_error(NotFoundError("Surprise not found"))
    assert exc.detail == {"code": "NotFoundError", "message": "Surprise not found"}


def test_validation_detail_includes_field():
    exc = map_surprise_error(ValidationError("Message is required", field="message"))
    assert exc.detail == {
        "code": "VALIDATION_ERROR",
        "message": "Message is required",
        "field": "message",
    }
