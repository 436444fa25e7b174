"""Application error types rendered into the API envelope."""

from http import HTTPStatus


class ProtocolTrackerError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    error_type: str = "INTERNAL_ERROR"

    def __init__(self, message: str, error_type: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error_type is not None:
            self.error_type = error_type


class NoChangesError(ProtocolTrackerError):
    """Raised when a routine version would record an empty diff."""

    status_code = HTTPStatus.BAD_REQUEST
    error_type = "NO_CHANGES"

    def __init__(self, message: str = "No changes to save") -> None:
        super().__init__(message)


class ValidationError(ProtocolTrackerError):
    """Raised for request payloads the API refuses."""

    status_code = HTTPStatus.BAD_REQUEST
    error_type = "VALIDATION_ERROR"


class AuthenticationError(ProtocolTrackerError):
    """Raised when a request carries no usable credentials."""

    status_code = HTTPStatus.UNAUTHORIZED
    error_type = "AUTHENTICATION_REQUIRED"


class AccountDeactivatedError(ProtocolTrackerError):
    """Raised when the authenticated account is switched off."""

    status_code = HTTPStatus.FORBIDDEN
    error_type = "ACCOUNT_DEACTIVATED"

    def __init__(self, message: str = "User account is deactivated") -> None:
        super().__init__(message)


class NotFoundError(ProtocolTrackerError):
    """Raised when a record is missing or owned by someone else."""

    status_code = HTTPStatus.NOT_FOUND
    error_type = "NOT_FOUND"


class VersionConflictError(ProtocolTrackerError):
    """Raised when another writer claimed the same version number."""

    status_code = HTTPStatus.CONFLICT
    error_type = "VERSION_CONFLICT"


class DatastoreError(ProtocolTrackerError):
    """Raised when a Supabase read or write fails."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    error_type = "DATASTORE_ERROR"
