"""Hands out authenticated Graph clients sharing one token and HTTP session."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import aiohttp

from odrivefs.auth import CachedToken, TokenSource
from odrivefs.config import FsOptions
from odrivefs.errors import TokenError

from .graph_client import GraphDriveClient

logger = logging.getLogger(__name__)


class ClientSource(Protocol):
    """What the filesystem needs: a way to get a ready client."""

    async def demand(self) -> GraphDriveClient: ...


class ClientProvider:
    """
    Create GraphDriveClient instances on demand.

    Notes:
        - The token is fetched lazily, once, and cached for the provider's lifetime.
        - All clients share one aiohttp session, closed by ``close()``.
    """

    def __init__(
        self,
        token_source: TokenSource,
        *,
        options: Optional[FsOptions] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._options = options or FsOptions()
        self._token = CachedToken(token_source)
        self._session = session
        self._owns_session = session is None

    @property
    def options(self) -> FsOptions:
        return self._options

    async def demand(self) -> GraphDriveClient:
        """Return a client, obtaining the token if needed. Raises TokenError."""
        token = await self._token.get()
        return GraphDriveClient(
            token,
            session=self._ensure_session(),
            base_url=self._options.base_url,
            timeout=self._options.request_timeout,
        )

    async def request(self) -> Optional[GraphDriveClient]:
        """Like demand(), but return None when no token can be obtained."""
        try:
            return await self.demand()
        except TokenError as exc:
            logger.info("No OneDrive client available: %s", exc)
            return None

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session
