class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NothingToExportError(ValidationError):
    """Raised when an export is requested for an empty collection."""


class ConfirmationRequiredError(DomainError):
    """Raised when a destructive action was not explicitly confirmed."""


class NotFoundError(DomainError):
    """Raised when a record id is unknown to the signed-in tenant."""


class AuthenticationError(DomainError):
    """Raised when credentials are invalid or nobody is signed in."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class BackendError(Exception):
    """Raised when a remote backend call fails (network, permission, quota).

    The message is safe to show to the user; the original exception is chained.
    """
