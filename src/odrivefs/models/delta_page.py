"""Materialized delta feed response."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .drive_item import DriveItem


@dataclass(slots=True)
class DeltaPage:
    """
    All pages of one delta call, concatenated in server order.

    Attributes:
        items: Items from every page, in page order.
        delta_link: Cursor for the next poll (from the final page).
        server_time: Response time reported by the server (``Date`` header).
    """

    items: list[DriveItem] = field(default_factory=list)
    delta_link: Optional[str] = None
    server_time: Optional[datetime] = None
