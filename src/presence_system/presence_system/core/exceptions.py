class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION"


class NotFoundError(DomainError):
    """Raised when a code, employee or kiosk does not exist (or is no longer active)."""

    code = "NOT_FOUND"


class ExpiredError(DomainError):
    """Raised when an access code is presented after its expiry time."""

    code = "EXPIRED"


class StorageError(DomainError):
    """Raised when the backing store fails an operation."""

    code = "STORAGE"
