"""Per-round working set of the delta sync engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional

from odrivefs.models import DeltaPage, DriveItem


@dataclass(slots=True)
class DeltaSnapshot:
    """
    Items returned by one delta round, indexed by id.

    Notes:
        - ``items_by_id`` keeps server page order (dict insertion order).
        - ``cursor`` is the delta link to poll from next.
        - ``timestamp`` is the server-reported response time of the round.
        - Paths are derived on demand and never cached across rounds.
    """

    items_by_id: dict[str, DriveItem] = field(default_factory=dict)
    cursor: Optional[str] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_page(cls, page: DeltaPage) -> DeltaSnapshot:
        snap = cls(cursor=page.delta_link, timestamp=page.server_time)
        for item in page.items:
            # A later entry for the same id supersedes an earlier one but keeps
            # the first-seen position.
            snap.items_by_id[item.id] = item
        return snap

    def __len__(self) -> int:
        return len(self.items_by_id)

    def __iter__(self) -> Iterator[DriveItem]:
        return iter(self.items_by_id.values())

    # ----------------------------
    # Query helpers
    # ----------------------------
    def has(self, item_id: str) -> bool:
        return item_id in self.items_by_id

    def get(self, item_id: str) -> Optional[DriveItem]:
        return self.items_by_id.get(item_id)

    def is_new(self, item: DriveItem) -> bool:
        """True if the item was created after this snapshot was taken."""
        if item.created_time is None or self.timestamp is None:
            return False
        return item.created_time > self.timestamp

    def path_for(self, item: DriveItem) -> str:
        """
        Reconstruct the drive-root-relative path of item.

        Walks parent ids within this snapshot until a materialized parent path
        or the root is reached. A parent missing from the snapshot (or a cycle)
        ends the walk, leaving the path relative to the root.
        """
        names: list[str] = []
        visited: set[str] = set()
        cur = item

        while not cur.is_root:
            if cur.name:
                names.append(cur.name)

            ref = cur.parent_ref
            if ref is None:
                break

            parent_path = ref.relative_path
            if parent_path is not None:
                if parent_path:
                    names.append(parent_path)
                break

            visited.add(cur.id)
            parent = self.items_by_id.get(ref.id) if ref.id else None
            if parent is None or parent.id in visited:
                break
            cur = parent

        return "/".join(reversed(names))
