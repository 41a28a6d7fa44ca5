"""Filesystem-facing models: stat results and change events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from urllib.parse import quote


class FileType(IntEnum):
    FILE = 1
    DIRECTORY = 2


class FileChangeType(IntEnum):
    CHANGED = 1
    CREATED = 2
    DELETED = 3


@dataclass(slots=True, frozen=True)
class FileStat:
    """Metadata for one path. Times are milliseconds since the Unix epoch."""

    type: FileType
    ctime: int
    mtime: int
    size: int


@dataclass(slots=True, frozen=True)
class FileChange:
    """
    One change event from the delta feed.

    ``path`` is drive-root-relative without a leading slash ("" for the root).
    """

    type: FileChangeType
    path: str

    def uri(self, drive_id: str, scheme: str = "onedrive") -> str:
        return f"{scheme}://{drive_id}/{quote(self.path, safe='/')}"


@dataclass(slots=True, frozen=True)
class FileChangeEvent:
    """A change event as republished by the filesystem (URI-addressed)."""

    type: FileChangeType
    uri: str
