from enum import StrEnum


class ErrorKind(StrEnum):
    AUTHENTICATION_FAILED = "authentication_failed"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    BACKEND_ERROR = "backend_error"
    TRANSPORT_ERROR = "transport_error"
    CONFIGURATION_ERROR = "configuration_error"


class CodecovException(Exception):
    kind: ErrorKind = ErrorKind.BACKEND_ERROR
    default_message = "Unknown error occurred"

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code
        self.detail = detail


class AuthenticationError(CodecovException):
    kind = ErrorKind.AUTHENTICATION_FAILED
    default_message = "Authentication failed. Check your CODECOV_API_TOKEN."


class AccessDeniedError(CodecovException):
    kind = ErrorKind.ACCESS_DENIED
    default_message = (
        "Access denied. You may not have permission to access this resource."
    )


class ResourceNotFoundError(CodecovException):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found. Check the owner, repo, or path."


class RateLimitError(CodecovException):
    kind = ErrorKind.RATE_LIMITED
    default_message = "Rate limit exceeded. Try again later."

    def __init__(
        self,
        message: str = "",
        status_code: int | None = 429,
        detail: str | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, status_code, detail)
        self.retry_after = retry_after


class APIError(CodecovException):
    kind = ErrorKind.BACKEND_ERROR
    default_message = "Unknown API error"


class NetworkError(CodecovException):
    kind = ErrorKind.TRANSPORT_ERROR
    default_message = "Network error while contacting the Codecov API"


class TimeoutError(NetworkError):
    default_message = "Request to the Codecov API timed out"


class ConfigurationError(CodecovException):
    kind = ErrorKind.CONFIGURATION_ERROR
    default_message = "Invalid configuration"


_STATUS_ERRORS: dict[int, type[CodecovException]] = {
    401: AuthenticationError,
    403: AccessDeniedError,
    404: ResourceNotFoundError,
    429: RateLimitError,
}


def classify_http_error(
    status_code: int,
    detail: str | None = None,
    fallback: str = "",
    retry_after: int | None = None,
) -> CodecovException:
    """Map a non-2xx response onto the error taxonomy."""
    error_class = _STATUS_ERRORS.get(status_code)
    if error_class is RateLimitError:
        return RateLimitError(
            status_code=status_code, detail=detail, retry_after=retry_after
        )
    if error_class is not None:
        return error_class(status_code=status_code, detail=detail)
    return APIError(
        message=detail or fallback, status_code=status_code, detail=detail
    )
