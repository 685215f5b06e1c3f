"""Custom application exceptions."""

from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    error: str = "Internal Server Error"

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def to_envelope(self) -> dict[str, Any]:
        """Render as the `{success, message, error, statusCode}` error envelope."""
        return {
            "success": False,
            "message": self.detail,
            "error": self.error,
            "statusCode": self.status_code,
        }


class ValidationError(AppException):
    """Validation error exception."""

    error = "ValidationError"

    def __init__(self, detail: str = "Validation failed", errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)

    def to_envelope(self) -> dict[str, Any]:
        envelope = super().to_envelope()
        if self.errors:
            envelope["errors"] = self.errors
        return envelope


class NotFoundError(AppException):
    """Resource not found exception."""

    error = "NotFound"

    def __init__(self, resource: str = "Resource", identifier: str | None = None) -> None:
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} with ID '{identifier}' not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class AuthenticationError(AppException):
    """Authentication failed exception."""

    error = "Unauthorized"

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(AppException):
    """Authorization denied exception.

    ``redirect_to`` names the dashboard the caller should be sent to instead.
    """

    error = "Forbidden"

    def __init__(
        self,
        detail: str = "You don't have permission to access this resource",
        redirect_to: str | None = None,
    ) -> None:
        self.redirect_to = redirect_to
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

    def to_envelope(self) -> dict[str, Any]:
        envelope = super().to_envelope()
        if self.redirect_to:
            envelope["redirectTo"] = self.redirect_to
        return envelope


class InvalidBookingStatus(AppException):
    """Invalid booking status for operation."""

    error = "InvalidBookingStatus"

    def __init__(self, detail: str = "This operation is not allowed for the current booking status") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class BackendError(AppException):
    """Error envelope returned by the hostel backend.

    The server message is surfaced verbatim with the backend's status code.
    """

    def __init__(
        self,
        status_code: int,
        detail: str = "Something went wrong",
        error: str | None = None,
    ) -> None:
        self.error = error or "BackendError"
        super().__init__(status_code=status_code, detail=detail)


class NetworkError(AppException):
    """The backend could not be reached or did not answer in time."""

    error = "NetworkError"

    def __init__(self, detail: str = "Network error - no response received") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
