"""OneDriveFileSystem: path-addressed filesystem over the Graph drive API."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Iterable, Optional, Union

from odrivefs.client import ClientSource
from odrivefs.config import FsOptions
from odrivefs.models import (
    FileChange,
    FileChangeEvent,
    FileStat,
    FileType,
)
from odrivefs.sync import DeltaSyncEngine
from odrivefs.util.time import to_epoch_ms

from .events import Disposable, EventEmitter
from .paths import VirtualPath
from .resolver import PathResolver, not_found_as_file_not_found
from .watch import EngineFactory, WatchSession

logger = logging.getLogger(__name__)

PathLike = Union[str, VirtualPath]


class OneDriveFileSystem:
    """
    Filesystem provider for ``onedrive://{driveId}/{path}`` URIs.

    Notes:
        - Read-side operations call the client with the path directly.
        - create_directory/rename/copy resolve ids first (the API addresses
          them by id).
        - A remote 404 surfaces as FileNotFound, except for delete where it is
          ignored. Every other remote error propagates unchanged.
        - All watches on one drive share a single polling loop.
    """

    def __init__(
        self,
        clients: ClientSource,
        *,
        options: Optional[FsOptions] = None,
        engine_factory: EngineFactory = DeltaSyncEngine,
    ) -> None:
        self._clients = clients
        self._options = options or FsOptions()
        self._resolver = PathResolver(clients)
        self._engine_factory = engine_factory
        self._emitter: EventEmitter[list[FileChangeEvent]] = EventEmitter()
        self._sessions: dict[str, WatchSession] = {}
        self._watch_lock = threading.Lock()

    @property
    def scheme(self) -> str:
        return self._options.scheme

    def on_did_change_file(
        self, listener: Callable[[list[FileChangeEvent]], None]
    ) -> Disposable:
        """Subscribe to change batches from active watches."""
        return self._emitter.event(listener)

    # ----------------------------
    # Read APIs
    # ----------------------------
    async def stat(self, uri: PathLike) -> FileStat:
        vpath = self._parse(uri)
        client = await self._clients.demand()
        with not_found_as_file_not_found(vpath):
            item = await client.get_item(vpath.drive_id, vpath.path)

        return FileStat(
            type=FileType.DIRECTORY if item.is_folder or item.is_root else FileType.FILE,
            ctime=to_epoch_ms(item.created_time),
            mtime=to_epoch_ms(item.modified_time),
            size=item.size,
        )

    async def read_directory(self, uri: PathLike) -> list[tuple[str, FileType]]:
        vpath = self._parse(uri)
        parent_id = await self._resolver.resolve(vpath)
        client = await self._clients.demand()
        with not_found_as_file_not_found(vpath):
            children = await client.get_children(vpath.drive_id, parent_id)

        return [
            (child.name, FileType.DIRECTORY if child.is_folder else FileType.FILE)
            for child in children
        ]

    async def read_file(self, uri: PathLike) -> bytes:
        vpath = self._parse(uri)
        client = await self._clients.demand()
        with not_found_as_file_not_found(vpath):
            return await client.download(vpath.drive_id, vpath.path)

    # ----------------------------
    # Write APIs
    # ----------------------------
    async def write_file(
        self,
        uri: PathLike,
        content: bytes,
        *,
        mime_type: Optional[str] = None,
    ) -> None:
        """Create or overwrite the file at uri with content."""
        vpath = self._parse(uri)
        client = await self._clients.demand()
        with not_found_as_file_not_found(vpath):
            await client.upload(vpath.drive_id, vpath.path, content, mime_type=mime_type)

    async def create_directory(self, uri: PathLike) -> None:
        """
        Create a folder at uri.

        A name collision is resolved by the server (auto-rename). The drive
        root always exists, so creating it does nothing.
        """
        vpath = self._parse(uri)
        if vpath.is_root:
            return

        parent_id = await self._resolver.resolve(vpath.parent)
        client = await self._clients.demand()
        with not_found_as_file_not_found(vpath):
            await client.create_folder(vpath.drive_id, parent_id, vpath.basename)

    async def delete(self, uri: PathLike, *, recursive: bool = True) -> None:
        """Delete the item at uri. Deleting a missing item succeeds."""
        vpath = self._parse(uri)
        client = await self._clients.demand()
        await client.delete(vpath.drive_id, vpath.path)

    async def rename(self, old_uri: PathLike, new_uri: PathLike) -> None:
        """Move/rename in one request; the item id is unchanged."""
        old = self._parse(old_uri)
        new = self._parse(new_uri)
        item_id, new_parent_id = await asyncio.gather(
            self._resolver.resolve(old),
            self._resolver.resolve(new.parent),
        )

        client = await self._clients.demand()
        with not_found_as_file_not_found(old):
            await client.move(old.drive_id, item_id, new_parent_id, new.basename)

    async def copy(self, source: PathLike, destination: PathLike) -> None:
        """
        Copy source to destination.

        The server runs the copy asynchronously; acceptance of the request is
        treated as completion.
        """
        src = self._parse(source)
        dst = self._parse(destination)
        item_id, new_parent_id = await asyncio.gather(
            self._resolver.resolve(src),
            self._resolver.resolve(dst.parent),
        )

        client = await self._clients.demand()
        with not_found_as_file_not_found(src):
            await client.copy(src.drive_id, item_id, new_parent_id, dst.basename)

    # ----------------------------
    # Watch
    # ----------------------------
    def watch(
        self,
        uri: PathLike,
        *,
        recursive: bool = False,
        excludes: Iterable[str] = (),
    ) -> Disposable:
        """
        Watch the drive that uri belongs to.

        ``recursive`` and ``excludes`` are ignored: one root watch per drive
        covers every path, and events always carry root-relative paths.
        Must be called from a running event loop.
        """
        vpath = self._parse(uri)
        drive_id = vpath.drive_id

        with self._watch_lock:
            session = self._sessions.get(drive_id)
            if session is None:
                session = WatchSession(
                    drive_id,
                    self._clients,
                    self._publish,
                    interval=self._options.poll_interval,
                    engine_factory=self._engine_factory,
                )
                session.start()
                session.task.add_done_callback(lambda _task, s=session: self._forget(s))
                self._sessions[drive_id] = session
            session.ref_count += 1

        return Disposable(lambda: self._release(session))

    def active_session(self, drive_id: str) -> Optional[WatchSession]:
        """The live watch session for drive_id, if any."""
        with self._watch_lock:
            return self._sessions.get(drive_id)

    async def close(self) -> None:
        """Stop every watch and wait for the polling loops to end."""
        with self._watch_lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
            for session in sessions:
                session.ref_count = 0
                session.stop()

        for session in sessions:
            await session.wait_stopped()

    # ----------------------------
    # Internals
    # ----------------------------
    def _parse(self, uri: PathLike) -> VirtualPath:
        if isinstance(uri, VirtualPath):
            return uri
        return VirtualPath.parse(uri, scheme=self._options.scheme)

    def _release(self, session: WatchSession) -> None:
        with self._watch_lock:
            if session.ref_count <= 0:
                return
            session.ref_count -= 1
            if session.ref_count == 0:
                session.stop()
                if self._sessions.get(session.drive_id) is session:
                    del self._sessions[session.drive_id]

    def _forget(self, session: WatchSession) -> None:
        """Drop a session whose polling loop has ended."""
        with self._watch_lock:
            if self._sessions.get(session.drive_id) is session:
                del self._sessions[session.drive_id]

    def _publish(self, drive_id: str, changes: list[FileChange]) -> None:
        events = [
            FileChangeEvent(change.type, change.uri(drive_id, self._options.scheme))
            for change in changes
        ]
        self._emitter.fire(events)
