"""Delta sync engine: turns the delta feed into a stream of change batches."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import AsyncIterator, Optional

from odrivefs.client import GraphDriveClient
from odrivefs.errors import InvalidStateError, OneDriveFsError
from odrivefs.models import FileChange, FileChangeType

from .snapshot import DeltaSnapshot

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SEC: float = 10.0


class EngineState(str, Enum):
    INITIALIZING = "initializing"
    POLLING = "polling"
    WAITING = "waiting"
    STOPPED = "stopped"


class DeltaSyncEngine:
    """
    Poll one drive's delta feed and classify what changed.

    Lifecycle:
        INITIALIZING -> (WAITING <-> POLLING) -> STOPPED

    The baseline fetched while INITIALIZING is not reported. Every later round
    with at least one item yields one ordered batch; the next round starts only
    after the consumer asks for the next batch. Setting the cancel event stops
    the engine at the next suspension point without yielding anything further.
    A stopped engine cannot be restarted.
    """

    def __init__(
        self,
        client: GraphDriveClient,
        drive_id: str,
        *,
        interval: float = DEFAULT_INTERVAL_SEC,
        cancel: Optional[asyncio.Event] = None,
    ) -> None:
        self.drive_id = drive_id
        self._client = client
        self._interval = interval
        self._cancel = cancel if cancel is not None else asyncio.Event()
        self._state = EngineState.INITIALIZING
        self._started = False
        self._snapshot: Optional[DeltaSnapshot] = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def snapshot(self) -> Optional[DeltaSnapshot]:
        """The most recent round's snapshot (None before the baseline)."""
        return self._snapshot

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def cancel(self) -> None:
        self._cancel.set()

    async def changes(self) -> AsyncIterator[list[FileChange]]:
        """Yield one batch of changes per poll round until cancelled or failed."""
        if self._started:
            raise InvalidStateError(
                "Engine already started; create a new engine to watch again",
                details={"drive_id": self.drive_id},
            )
        self._started = True

        try:
            current = await self._fetch(None)
            if current is None:
                return
            self._snapshot = current

            while True:
                self._state = EngineState.WAITING
                if await self._wait():
                    return

                self._state = EngineState.POLLING
                latest = await self._fetch(current.cursor)
                if latest is None:
                    return

                batch = classify_changes(current, latest)
                self._snapshot = latest
                current = latest

                logger.debug(
                    "Delta round for drive %s: %d item(s), %d event(s)",
                    self.drive_id,
                    len(latest),
                    len(batch),
                )
                if batch:
                    yield batch
        finally:
            self._state = EngineState.STOPPED

    # ----------------------------
    # Internals
    # ----------------------------
    async def _wait(self) -> bool:
        """Sleep for the interval. Returns True if cancelled meanwhile."""
        try:
            await asyncio.wait_for(self._cancel.wait(), timeout=self._interval)
        except asyncio.TimeoutError:
            return False
        return True

    async def _fetch(self, cursor: Optional[str]) -> Optional[DeltaSnapshot]:
        """Fetch one round, or None if cancelled or the request failed."""
        if self._cancel.is_set():
            return None

        fetch = asyncio.ensure_future(self._client.delta(self.drive_id, cursor))
        cancelled = asyncio.ensure_future(self._cancel.wait())
        try:
            await asyncio.wait({fetch, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not fetch.done():
                fetch.cancel()

        if self._cancel.is_set() or fetch.cancelled():
            # Retrieve the outcome so a late failure is not reported as unhandled.
            await asyncio.gather(fetch, return_exceptions=True)
            return None

        try:
            page = fetch.result()
        except OneDriveFsError as exc:
            logger.warning("Delta poll for drive %s failed; stopping: %s", self.drive_id, exc)
            return None

        return DeltaSnapshot.from_page(page)


def classify_changes(previous: DeltaSnapshot, latest: DeltaSnapshot) -> list[FileChange]:
    """
    Classify every item of latest, in page order.

    - deleted -> DELETED, at its last known path (from previous when present)
    - created after previous.timestamp -> CREATED
    - otherwise -> CHANGED
    """
    changes: list[FileChange] = []
    for item in latest:
        if item.is_deleted:
            known = previous.get(item.id)
            path = previous.path_for(known) if known is not None else latest.path_for(item)
            changes.append(FileChange(FileChangeType.DELETED, path))
        elif previous.is_new(item):
            changes.append(FileChange(FileChangeType.CREATED, latest.path_for(item)))
        else:
            changes.append(FileChange(FileChangeType.CHANGED, latest.path_for(item)))
    return changes
