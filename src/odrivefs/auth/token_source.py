"""Bearer token sources for odrivefs."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from odrivefs.errors import TokenError

logger = logging.getLogger(__name__)


class TokenSource(Protocol):
    """Anything that can obtain a usable bearer credential."""

    async def get_token(self) -> str: ...


class StaticTokenSource:
    """Token source returning a token obtained elsewhere."""

    def __init__(self, token: str) -> None:
        if not isinstance(token, str) or not token.strip():
            raise ValueError("token must be a non-empty string")
        self._token = token

    async def get_token(self) -> str:
        return self._token


class CachedToken:
    """
    Once-initialized slot around a TokenSource.

    The first caller fetches the token; concurrent callers wait on the same
    lock and reuse the result. A failed fetch leaves the slot empty so the
    next caller tries again. The token is never refreshed here.
    """

    def __init__(self, source: TokenSource) -> None:
        self._source = source
        self._token: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def is_set(self) -> bool:
        return self._token is not None

    async def get(self) -> str:
        if self._token is not None:
            return self._token

        async with self._lock:
            if self._token is not None:
                return self._token

            try:
                token = await self._source.get_token()
            except TokenError:
                raise
            except Exception as exc:
                raise TokenError("Failed to obtain access token", cause=exc) from exc

            if not isinstance(token, str) or not token:
                raise TokenError("Token source returned an empty token")

            logger.debug("Access token obtained")
            self._token = token
            return token
