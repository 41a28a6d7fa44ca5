"""Remote API client exports for odrivefs."""

from __future__ import annotations

from .graph_client import GraphDriveClient
from .provider import ClientProvider, ClientSource

__all__ = ["GraphDriveClient", "ClientProvider", "ClientSource"]
