"""Data model for drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from odrivefs.util.time import parse_rfc3339

_ROOT_MARKER = "root:"


@dataclass(slots=True, frozen=True)
class ParentReference:
    """
    Pointer from an item to its containing folder.

    Notes:
        - ``path`` is the materialized absolute path (e.g. ``/drive/root:/Docs``).
          Items returned mid-delta often carry only ``id``.
    """

    id: Optional[str] = None
    path: Optional[str] = None
    drive_id: Optional[str] = None

    @property
    def relative_path(self) -> Optional[str]:
        """Drive-root-relative parent path, "" for root children, None if unknown."""
        if self.path is None:
            return None
        _, marker, rest = self.path.partition(_ROOT_MARKER)
        if not marker:
            return self.path.strip("/")
        return rest.strip("/")


@dataclass(slots=True)
class DriveItem:
    """
    Represents a file or folder on a drive.

    Notes:
        - ``id`` is stable across renames/moves; only ``name``/``parent_ref`` change.
        - ``is_folder`` and ``is_file`` are mutually exclusive.
        - Tombstones from the delta feed have ``is_deleted`` set and may lack a name.
    """

    id: str
    name: str

    size: int = 0
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    is_folder: bool = False
    is_file: bool = False
    is_root: bool = False
    is_deleted: bool = False
    parent_ref: Optional[ParentReference] = None

    mime_type: Optional[str] = None
    hashes: dict[str, str] = field(default_factory=dict)
    child_count: Optional[int] = None


def item_from_dict(data: dict[str, Any]) -> DriveItem:
    """Build a DriveItem from a Graph driveItem JSON object."""
    item_id = data.get("id")
    name = data.get("name")

    folder = data.get("folder")
    file = data.get("file")
    is_folder = isinstance(folder, dict)
    is_file = isinstance(file, dict) and not is_folder

    size = data.get("size")
    hashes: dict[str, str] = {}
    mime_type = None
    if is_file:
        raw_hashes = file.get("hashes") or {}
        if isinstance(raw_hashes, dict):
            hashes = {k: v for k, v in raw_hashes.items() if isinstance(v, str)}
        mime = file.get("mimeType")
        mime_type = mime if isinstance(mime, str) else None

    child_count = None
    if is_folder and isinstance(folder.get("childCount"), int):
        child_count = folder["childCount"]

    return DriveItem(
        id=item_id if isinstance(item_id, str) else "",
        name=name if isinstance(name, str) else "",
        size=size if isinstance(size, int) else 0,
        created_time=_parse_time(data.get("createdDateTime")),
        modified_time=_parse_time(data.get("lastModifiedDateTime")),
        is_folder=is_folder,
        is_file=is_file,
        is_root=isinstance(data.get("root"), dict),
        is_deleted=isinstance(data.get("deleted"), dict),
        parent_ref=_parent_ref_from_dict(data.get("parentReference")),
        mime_type=mime_type,
        hashes=hashes,
        child_count=child_count,
    )


def _parent_ref_from_dict(data: Any) -> Optional[ParentReference]:
    if not isinstance(data, dict):
        return None

    parent_id = data.get("id")
    path = data.get("path")
    drive_id = data.get("driveId")
    if not isinstance(parent_id, str) and not isinstance(path, str):
        return None

    return ParentReference(
        id=parent_id if isinstance(parent_id, str) else None,
        path=path if isinstance(path, str) else None,
        drive_id=drive_id if isinstance(drive_id, str) else None,
    )


def _parse_time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None
