"""Path -> item id resolution for id-addressed operations."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from odrivefs.client import ClientSource
from odrivefs.errors import FileNotFound, RemoteRequestFailed, is_status

from .paths import VirtualPath


@contextmanager
def not_found_as_file_not_found(vpath: VirtualPath) -> Iterator[None]:
    """Translate a remote 404 into FileNotFound(vpath); let other errors through."""
    try:
        yield
    except RemoteRequestFailed as exc:
        if is_status(exc, 404):
            raise FileNotFound(vpath.uri, cause=exc) from exc
        raise


class PathResolver:
    """Resolve a VirtualPath to the remote item id with one metadata lookup."""

    def __init__(self, clients: ClientSource) -> None:
        self._clients = clients

    async def resolve(self, vpath: VirtualPath) -> str:
        """
        Return the item id at vpath.

        Raises:
            FileNotFound: if any segment of the path does not exist.
        """
        client = await self._clients.demand()
        with not_found_as_file_not_found(vpath):
            item = await client.get_item(vpath.drive_id, vpath.path)
        return item.id
