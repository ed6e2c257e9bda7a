class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class TimeWindowError(DomainError):
    """Raised when a meal is registered outside its configured window."""


class DuplicateRecordError(DomainError):
    """Raised when a user already has a record for the same meal and date."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class BackendError(DomainError):
    """Raised when the remote data backend cannot complete a call."""
