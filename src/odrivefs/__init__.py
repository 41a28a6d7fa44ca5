"""odrivefs public API."""

from __future__ import annotations

from odrivefs.auth import CachedToken, StaticTokenSource, TokenSource
from odrivefs.client import ClientProvider, GraphDriveClient
from odrivefs.config import FsOptions
from odrivefs.errors import (
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
from odrivefs.fs import Disposable, OneDriveFileSystem, PathResolver, VirtualPath
from odrivefs.models import (
    Drive,
    DriveItem,
    FileChange,
    FileChangeEvent,
    FileChangeType,
    FileStat,
    FileType,
    ParentReference,
)
from odrivefs.sync import DeltaSnapshot, DeltaSyncEngine, EngineState

__all__ = [
    # High-level
    "OneDriveFileSystem",
    "ClientProvider",
    "GraphDriveClient",
    "FsOptions",
    # Auth
    "TokenSource",
    "StaticTokenSource",
    "CachedToken",
    # Paths / Sync
    "VirtualPath",
    "PathResolver",
    "Disposable",
    "DeltaSnapshot",
    "DeltaSyncEngine",
    "EngineState",
    # Models
    "Drive",
    "DriveItem",
    "ParentReference",
    "FileType",
    "FileStat",
    "FileChange",
    "FileChangeEvent",
    "FileChangeType",
    # Errors
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
