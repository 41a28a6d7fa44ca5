"""Graph route builders for drive endpoints."""

from __future__ import annotations

from urllib.parse import quote


def encode_path(path: str) -> str:
    """Percent-encode a drive-relative path, keeping '/' separators."""
    return quote(path.strip("/"), safe="/")


def _drive(drive_id: str) -> str:
    return f"drives/{quote(drive_id, safe='!')}"


def _item(drive_id: str, item_id: str) -> str:
    return f"{_drive(drive_id)}/items/{quote(item_id, safe='!')}"


def own_drives() -> str:
    return "me/drives"


def root_children(drive_id: str) -> str:
    return f"{_drive(drive_id)}/root/children"


def item_children(drive_id: str, item_id: str) -> str:
    return f"{_item(drive_id, item_id)}/children"


def item_by_path(drive_id: str, path: str) -> str:
    """Metadata route; the empty path addresses the drive root itself."""
    if not path.strip("/"):
        return f"{_drive(drive_id)}/root"
    return f"{_drive(drive_id)}/root:/{encode_path(path)}"


def content_by_path(drive_id: str, path: str) -> str:
    return f"{_drive(drive_id)}/root:/{encode_path(path)}:/content"


def item_by_id(drive_id: str, item_id: str) -> str:
    return _item(drive_id, item_id)


def item_copy(drive_id: str, item_id: str) -> str:
    return f"{_item(drive_id, item_id)}/copy"


def root_delta(drive_id: str) -> str:
    return f"{_drive(drive_id)}/root/delta"
