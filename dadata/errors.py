"""Error taxonomy for the DaData client and classification of failed exchanges.

Two families reach callers:
- ApiError: the service answered with a non-2xx status (request rejected)
- DadataConnectionError: no usable answer was obtained (transport failure)

ConfigurationError is raised before any network call is made.
"""

import httpx

# Status code -> human-readable description, as documented by the service
ERRORS: dict[int, str] = {
    200: "Request processed successfully",
    400: "Invalid request (invalid JSON or XML)",
    401: "Missing API key or secret key, or non-existent key used",
    403: "Invalid API key, unconfirmed email, or daily request limit exceeded",
    404: "Service not found",
    405: "Request method other than POST used",
    413: "Request too long or too many conditions",
    429: "Too many requests per second or new connections per minute",
    500: "Internal service error",
}

UNKNOWN_ERROR = "Unknown error"

TIMED_OUT = "Request timed out"
FAILED_TO_CONNECT = "Failed to connect"
REQUEST_FAILED = "Request failed"


class DadataError(Exception):
    """Base class for every error raised by this library."""


class ConfigurationError(DadataError):
    pass


class ApiError(DadataError):
    """The service rejected the request with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Error: {status_code} - {message}")


class BadRequestError(ApiError):
    pass


class AuthenticationError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class DadataConnectionError(DadataError):
    """The exchange failed before a status code was obtained.

    Carries only a fixed canonical message, never the underlying
    transport message.
    """

    def __init__(self, message: str = REQUEST_FAILED):
        self.message = message
        super().__init__(message)


# Alias; unrelated to the builtin ConnectionError
ConnectionError = DadataConnectionError  # noqa: A001


class RequestTimeoutError(DadataConnectionError):
    def __init__(self, message: str = TIMED_OUT):
        super().__init__(message)


class ConnectionFailedError(DadataConnectionError):
    def __init__(self, message: str = FAILED_TO_CONNECT):
        super().__init__(message)


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    429: RateLimitError,
}


def describe_status(status_code: int) -> str:
    return ERRORS.get(status_code, UNKNOWN_ERROR)


def classify(status_code: int, body=None) -> ApiError:
    """Map a non-2xx status to its typed ApiError.

    The body is accepted for callers that have it at hand; the description
    always comes from the static status table.
    """
    error_cls = _STATUS_ERRORS.get(status_code, ApiError)
    return error_cls(status_code, describe_status(status_code))


def classify_transport(exc: BaseException) -> DadataConnectionError:
    """Map a transport-level exception to its typed DadataConnectionError."""
    # ConnectTimeout is both a timeout and a connect failure; timeout wins
    if isinstance(exc, httpx.TimeoutException):
        return RequestTimeoutError()
    if isinstance(exc, httpx.ConnectError):
        return ConnectionFailedError()
    return DadataConnectionError(REQUEST_FAILED)
