"""Exception hierarchy and HTTP error mapping for odrivefs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class OneDriveFsError(Exception):
    """
    Base exception for odrivefs.

    Attributes:
        details: Optional structured information (e.g., HTTP status, url).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidStateError(OneDriveFsError):
    """Raised when the library is used in an invalid state (e.g., reusing a stopped engine)."""


class UnsupportedSchemeError(OneDriveFsError):
    """Raised when a URI does not belong to this filesystem."""


class FileNotFound(OneDriveFsError):
    """Canonical filesystem not-found error surfaced to the host."""

    def __init__(self, uri: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"File not found: {uri}", details={"uri": uri}, cause=cause)
        self.uri = uri


class NetworkError(OneDriveFsError):
    """Raised when network/timeout issues prevent the request."""


class TokenError(OneDriveFsError):
    """Raised when the token source cannot provide a bearer credential."""


class RemoteRequestFailed(OneDriveFsError):
    """
    Raised for any non-2xx response from the remote API.

    Carries the numeric status code, the response body and the request URL.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        url: str = "",
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        merged = {"status_code": status_code, "url": url}
        if details:
            merged.update(details)
        super().__init__(message, details=merged, cause=cause)
        self.status_code = status_code
        self.body = body
        self.url = url


class RemoteNotFound(RemoteRequestFailed):
    """Raised when a remote item is absent (HTTP 404)."""


class AuthError(RemoteRequestFailed):
    """Raised when the bearer credential is rejected (HTTP 401)."""


class PermissionError(RemoteRequestFailed):
    """Raised when access is denied (HTTP 403)."""


class InvalidArgumentError(RemoteRequestFailed):
    """Raised when request arguments are invalid (HTTP 400)."""


class ConflictError(RemoteRequestFailed):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(RemoteRequestFailed):
    """Raised when rate-limited (HTTP 429)."""


class ApiError(RemoteRequestFailed):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to odrivefs exceptions."""

    status_code: int
    url: str = ""
    body: str = ""
    reason: str | None = None
    message: str | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteRequestFailed:
    """
    Map an HTTP error to an odrivefs exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError
        - 404 -> RemoteNotFound
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError

    Every result is a RemoteRequestFailed, so callers that only care about the
    status code can match on ``status_code`` alone.
    """
    status = f"{info.status_code} {info.reason}" if info.reason else str(info.status_code)
    message = info.message or f"{status} from {info.url}: {info.body}"
    kwargs: dict[str, Any] = {
        "status_code": info.status_code,
        "body": info.body,
        "url": info.url,
        "details": {"reason": info.reason} if info.reason else None,
        "cause": cause,
    }

    if info.status_code == 400:
        return InvalidArgumentError(message, **kwargs)
    if info.status_code == 401:
        return AuthError(message, **kwargs)
    if info.status_code == 403:
        return PermissionError(message, **kwargs)
    if info.status_code == 404:
        return RemoteNotFound(message, **kwargs)
    if info.status_code in (409, 412):
        return ConflictError(message, **kwargs)
    if info.status_code == 429:
        return RateLimitError(message, **kwargs)

    return ApiError(message, **kwargs)


def is_status(exc: BaseException, status_code: int) -> bool:
    """Return True if exc is a remote failure with the given HTTP status."""
    return isinstance(exc, RemoteRequestFailed) and exc.status_code == status_code
