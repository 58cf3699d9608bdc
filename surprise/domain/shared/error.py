"""Error hierarchy for Digital Surprise.

Error layers:
- SurpriseError: Base class for all application errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage/network issues (500 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class SurpriseError(Exception):
    """Base class for all Digital Surprise errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(SurpriseError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class PayloadTooLargeError(ValidationError):
    """Upload exceeds the configured size ceiling."""


class AuthenticationError(DomainError):
    """Supplied secret did not match."""


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class DuplicateSlugError(ConflictError):
    """A surprise with this slug already exists."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 500)
# =============================================================================


class InfrastructureError(SurpriseError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Record store (database) is unavailable or timed out."""


class BlobWriteError(InfrastructureError):
    """Blob backend (filesystem, object store) failed to persist content."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
