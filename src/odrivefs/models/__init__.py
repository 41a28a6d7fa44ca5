"""Public model exports for odrivefs."""

from __future__ import annotations

from .changes import FileChange, FileChangeEvent, FileChangeType, FileStat, FileType
from .delta_page import DeltaPage
from .drive import Drive, Identity, drive_from_dict
from .drive_item import DriveItem, ParentReference, item_from_dict

__all__ = [
    "DriveItem",
    "ParentReference",
    "Drive",
    "Identity",
    "DeltaPage",
    "FileType",
    "FileStat",
    "FileChangeType",
    "FileChange",
    "FileChangeEvent",
    "item_from_dict",
    "drive_from_dict",
]
