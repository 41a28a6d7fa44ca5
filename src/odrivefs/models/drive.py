"""Data model for drives (top-level storage containers)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

_OWNER_KINDS: tuple[str, ...] = ("user", "application", "device")


@dataclass(slots=True, frozen=True)
class Identity:
    """A Graph identity (user, application or device)."""

    id: str
    display_name: str


@dataclass(slots=True)
class Drive:
    """A drive the signed-in account can access."""

    id: str
    drive_type: str
    name: Optional[str] = None
    owner: Optional[Identity] = None

    quota_total: int = 0
    quota_used: int = 0
    quota_remaining: int = 0


def drive_from_dict(data: dict[str, Any]) -> Drive:
    """Build a Drive from a Graph drive JSON object."""
    quota = data.get("quota") or {}
    if not isinstance(quota, dict):
        quota = {}

    name = data.get("name")
    return Drive(
        id=str(data.get("id", "")),
        drive_type=str(data.get("driveType", "personal")),
        name=name if isinstance(name, str) else None,
        owner=_owner_identity(data.get("owner")),
        quota_total=_int(quota.get("total")),
        quota_used=_int(quota.get("used")),
        quota_remaining=_int(quota.get("remaining")),
    )


def _owner_identity(owner: Any) -> Optional[Identity]:
    """Return the first of user/application/device identity present on the owner."""
    if not isinstance(owner, dict):
        return None
    for kind in _OWNER_KINDS:
        ident = owner.get(kind)
        if isinstance(ident, dict):
            return Identity(
                id=str(ident.get("id", "")),
                display_name=str(ident.get("displayName", "")),
            )
    return None


def _int(value: Any) -> int:
    return value if isinstance(value, int) else 0
