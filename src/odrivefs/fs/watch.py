"""Shared per-drive watch sessions."""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import Callable, Optional

from odrivefs.client import ClientSource, GraphDriveClient
from odrivefs.errors import InvalidStateError, OneDriveFsError
from odrivefs.models import FileChange
from odrivefs.sync import DeltaSyncEngine

logger = logging.getLogger(__name__)

EngineFactory = Callable[..., DeltaSyncEngine]
Publisher = Callable[[str, list[FileChange]], None]


class WatchSession:
    """
    One polling loop for one drive, shared by every observer of that drive.

    The owner increments ``ref_count`` per observer and calls ``stop()`` when it
    drops to zero. A stopped session is never restarted; the owner creates a
    new one instead.
    """

    def __init__(
        self,
        drive_id: str,
        clients: ClientSource,
        publish: Publisher,
        *,
        interval: float,
        engine_factory: EngineFactory = DeltaSyncEngine,
    ) -> None:
        self.drive_id = drive_id
        self.ref_count = 0
        self._clients = clients
        self._publish = publish
        self._interval = interval
        self._engine_factory = engine_factory
        self._cancel = asyncio.Event()
        self._task: Optional[asyncio.Task[None]] = None
        self.engine: Optional[DeltaSyncEngine] = None

    @property
    def task(self) -> Optional[asyncio.Task[None]]:
        return self._task

    @property
    def stopped(self) -> bool:
        return self._cancel.is_set()

    def start(self) -> None:
        """Start the polling task on the running loop."""
        if self._task is not None:
            raise InvalidStateError("Watch session already started")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise InvalidStateError(
                "watch() requires a running event loop",
                details={"drive_id": self.drive_id},
                cause=exc,
            ) from exc
        self._task = loop.create_task(self._run(), name=f"odrivefs-watch-{self.drive_id}")

    def stop(self) -> None:
        self._cancel.set()

    async def wait_stopped(self) -> None:
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self) -> None:
        logger.info("Watching drive %s", self.drive_id)
        try:
            client: GraphDriveClient = await self._clients.demand()
            if self._cancel.is_set():
                return

            self.engine = self._engine_factory(
                client,
                self.drive_id,
                interval=self._interval,
                cancel=self._cancel,
            )
            async with aclosing(self.engine.changes()) as batches:
                async for batch in batches:
                    if self._cancel.is_set():
                        break
                    self._publish(self.drive_id, batch)
        except OneDriveFsError as exc:
            logger.warning("Watch for drive %s ended: %s", self.drive_id, exc)
        finally:
            logger.info("Stopped watching drive %s", self.drive_id)
