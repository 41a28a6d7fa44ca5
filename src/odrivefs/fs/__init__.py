"""Filesystem adapter exports for odrivefs."""

from __future__ import annotations

from .events import Disposable, EventEmitter
from .filesystem import OneDriveFileSystem
from .paths import VirtualPath
from .resolver import PathResolver
from .watch import WatchSession

__all__ = [
    "OneDriveFileSystem",
    "VirtualPath",
    "PathResolver",
    "WatchSession",
    "EventEmitter",
    "Disposable",
]
