"""Public error exports for odrivefs."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    FileNotFound,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    OneDriveFsError,
    PermissionError,
    RateLimitError,
    RemoteNotFound,
    RemoteRequestFailed,
    TokenError,
    UnsupportedSchemeError,
    is_status,
    map_http_error,
)

__all__ = [
    "OneDriveFsError",
    "InvalidStateError",
    "UnsupportedSchemeError",
    "FileNotFound",
    "NetworkError",
    "TokenError",
    "RemoteRequestFailed",
    "RemoteNotFound",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "ConflictError",
    "RateLimitError",
    "ApiError",
    "HttpErrorInfo",
    "is_status",
    "map_http_error",
]
