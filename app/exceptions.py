from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"
    default_code: Optional[str] = None

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class NotFoundError(ServiceError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(ServiceError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class UnauthorizedError(ServiceError):
    """Raised when authentication fails or no session is active."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(ServiceError):
    """Raised when the active session lacks the role required for an operation."""

    http_status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"


# Authentication failures. Each one is surfaced to the user as its own message.


class InvalidCredentialsError(UnauthorizedError):
    default_message = "Invalid email or password"
    default_code = "INVALID_CREDENTIALS"


class AccountDeactivatedError(UnauthorizedError):
    default_message = "Account is deactivated. Please contact support."
    default_code = "ACCOUNT_DEACTIVATED"


class EmailNotVerifiedError(UnauthorizedError):
    default_message = "Please verify your email before logging in."
    default_code = "EMAIL_NOT_VERIFIED"


class EmailAlreadyExistsError(ConflictError):
    default_message = "An account with this email already exists."
    default_code = "EMAIL_ALREADY_EXISTS"


class DeserializationError(ServiceError):
    """Raised when a persisted collection blob cannot be decoded.

    The entity store absorbs it and degrades to an empty collection, so it
    never reaches HTTP handlers.
    """

    default_message = "Corrupt persisted collection"
    default_code = "DESERIALIZATION_FAILURE"
