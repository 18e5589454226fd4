"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
The client gateway maps HTTP status codes back onto the same classes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class DuplicateEmailError(DuplicateError):
    """Email is already registered."""

    def __init__(self, message: str = "Email already in use"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Caller is authenticated but lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    def __init__(self, message: str, field_errors: dict[str, str] | None = None):
        self.field_errors = field_errors or {}
        super().__init__(message)


class InvalidAccountTypeError(ValidationError):
    """Account type is not one of the settable roles."""

    def __init__(self, message: str = "Invalid account type"):
        super().__init__(message)


class InvalidCredentialsError(DomainError):
    """Email/password pair rejected. Deliberately vague."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class UnauthenticatedError(DomainError):
    """Missing, invalid or expired bearer token."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidTokenError(UnauthenticatedError):
    """Token signature or claims could not be verified."""

    def __init__(self, message: str = "Invalid authentication credentials"):
        super().__init__(message)


class ExpiredTokenError(UnauthenticatedError):
    """Token was valid once but its expiry has passed."""

    def __init__(self, message: str = "Session expired"):
        super().__init__(message)


class AccountTypeLockedError(DomainError):
    """Account type is already finalized and role switching is disabled."""

    def __init__(self, message: str = "Account type has already been set"):
        super().__init__(message)


class TransactionError(DomainError):
    """Atomic account setup write failed and was rolled back."""

    def __init__(self, message: str = "Account setup failed, please try again"):
        super().__init__(message)


class UploadError(DomainError):
    """Image host rejected or failed an upload."""

    def __init__(self, message: str = "Failed to upload image"):
        super().__init__(message)


class StorageError(DomainError):
    """The backing store could not be read or written."""

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
