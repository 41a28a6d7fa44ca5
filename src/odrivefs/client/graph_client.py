"""Microsoft Graph drive client (internal use only)."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp
from multidict import CIMultiDict

from odrivefs.config import GRAPH_BASE_URL
from odrivefs.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    RemoteNotFound,
    map_http_error,
)
from odrivefs.models import (
    DeltaPage,
    Drive,
    DriveItem,
    drive_from_dict,
    item_from_dict,
)
from odrivefs.util.time import now_utc, parse_http_date

from . import routes

logger = logging.getLogger(__name__)

_NEXT_LINK = "@odata.nextLink"
_DELTA_LINK = "@odata.deltaLink"
_CONFLICT_BEHAVIOR = "@microsoft.graph.conflictBehavior"


@dataclass(frozen=True)
class _Response:
    status: int
    headers: CIMultiDict[str]
    body: bytes
    url: str

    def json(self) -> dict[str, Any]:
        if not self.body:
            return {}
        try:
            payload = json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ApiError(
                "Invalid JSON in response",
                status_code=self.status,
                body=_body_text(self.body),
                url=self.url,
                cause=exc,
            ) from exc
        if not isinstance(payload, dict):
            raise ApiError(
                "Unexpected JSON payload",
                status_code=self.status,
                body=_body_text(self.body),
                url=self.url,
            )
        return payload


class GraphDriveClient:
    """
    Graph drive API client (internal only).

    Notes:
        - Every request carries ``Authorization: Bearer <token>``; the token is
          never refreshed here.
        - Non-2xx responses raise RemoteRequestFailed subclasses; nothing is retried.
        - Paged responses are followed until the last page.
    """

    def __init__(
        self,
        access_token: str,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = GRAPH_BASE_URL,
        timeout: float = 60.0,
    ) -> None:
        self._access_token = access_token
        self._session = session
        self._owns_session = session is None
        self._base_url = base_url
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self) -> "GraphDriveClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # ----------------------------
    # Drives and listings
    # ----------------------------
    async def list_drives(self) -> list[Drive]:
        values, _, _ = await self._get_paged(routes.own_drives())
        return [drive_from_dict(d) for d in values if isinstance(d, dict)]

    async def get_root_children(self, drive_id: str) -> list[DriveItem]:
        values, _, _ = await self._get_paged(routes.root_children(drive_id))
        return _items(values)

    async def get_children(self, drive_id: str, item_id: str) -> list[DriveItem]:
        values, _, _ = await self._get_paged(routes.item_children(drive_id, item_id))
        return _items(values)

    # ----------------------------
    # Path-addressed operations
    # ----------------------------
    async def get_item(self, drive_id: str, path: str) -> DriveItem:
        resp = await self._send("GET", routes.item_by_path(drive_id, path))
        return item_from_dict(resp.json())

    async def download(self, drive_id: str, path: str) -> bytes:
        resp = await self._send("GET", routes.content_by_path(drive_id, path))
        return resp.body

    async def upload(
        self,
        drive_id: str,
        path: str,
        content: bytes,
        *,
        mime_type: Optional[str] = None,
    ) -> DriveItem:
        """Replace the whole content at path (creating the file if needed)."""
        resp = await self._send(
            "PUT",
            routes.content_by_path(drive_id, path),
            data=bytes(content),
            content_type=mime_type,
        )
        return item_from_dict(resp.json())

    async def delete(self, drive_id: str, path: str) -> None:
        """Delete the item at path. A missing item is not an error."""
        try:
            await self._send("DELETE", routes.item_by_path(drive_id, path))
        except RemoteNotFound:
            logger.debug("Delete of missing item ignored: %s/%s", drive_id, path)

    # ----------------------------
    # Id-addressed operations
    # ----------------------------
    async def create_folder(self, drive_id: str, parent_id: str, name: str) -> DriveItem:
        body = {"name": name, "folder": {}, _CONFLICT_BEHAVIOR: "rename"}
        resp = await self._send(
            "POST",
            routes.item_children(drive_id, parent_id),
            json_body=body,
        )
        return item_from_dict(resp.json())

    async def move(
        self,
        drive_id: str,
        item_id: str,
        new_parent_id: str,
        new_name: str,
    ) -> DriveItem:
        """Update name and parent in one request."""
        body = {"name": new_name, "parentReference": {"id": new_parent_id}}
        resp = await self._send(
            "PATCH",
            routes.item_by_id(drive_id, item_id),
            json_body=body,
        )
        return item_from_dict(resp.json())

    async def copy(
        self,
        drive_id: str,
        item_id: str,
        new_parent_id: str,
        new_name: str,
    ) -> Optional[str]:
        """
        Start a server-side copy.

        Returns:
            The monitor URL from the ``Location`` header, if any. The copy itself
            completes asynchronously on the server.
        """
        body = {"name": new_name, "parentReference": {"id": new_parent_id}}
        resp = await self._send(
            "POST",
            routes.item_copy(drive_id, item_id),
            json_body=body,
        )
        return resp.headers.get("Location")

    # ----------------------------
    # Delta feed
    # ----------------------------
    async def delta(self, drive_id: str, cursor: Optional[str] = None) -> DeltaPage:
        """
        Fetch every change since cursor (or the full state when cursor is None).

        The server time comes from the first page's ``Date`` header.
        """
        route = cursor or routes.root_delta(drive_id)
        values, delta_link, first = await self._get_paged(route)

        server_time = now_utc()
        date_header = first.headers.get("Date")
        if date_header:
            try:
                server_time = parse_http_date(date_header)
            except ValueError:
                logger.debug("Unparseable Date header: %r", date_header)

        return DeltaPage(
            items=_items(values),
            delta_link=delta_link,
            server_time=server_time,
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def _url(self, route: str) -> str:
        if route.startswith(("https:", "http:")):
            return route
        return self._base_url + route.lstrip("/")

    async def _get_paged(self, route: str) -> tuple[list[Any], Optional[str], _Response]:
        first = await self._send("GET", route)
        payload = first.json()

        values: list[Any] = list(payload.get("value") or [])
        next_link = payload.get(_NEXT_LINK)
        delta_link = payload.get(_DELTA_LINK)

        while next_link:
            page = (await self._send("GET", next_link)).json()
            values.extend(page.get("value") or [])
            next_link = page.get(_NEXT_LINK)
            delta_link = page.get(_DELTA_LINK)

        return values, delta_link, first

    async def _send(
        self,
        method: str,
        route: str,
        *,
        json_body: Optional[dict[str, Any]] = None,
        data: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> _Response:
        url = self._url(route)
        headers = {"Authorization": f"Bearer {self._access_token}"}
        if content_type:
            headers["Content-Type"] = content_type

        session = self._ensure_session()
        logger.debug("%s %s", method, url)
        try:
            async with session.request(
                method,
                url,
                headers=headers,
                json=json_body,
                data=data,
                timeout=self._timeout,
            ) as response:
                body = await response.read()
                status = response.status
                reason = response.reason
                resp_headers = CIMultiDict(response.headers)
        except asyncio.TimeoutError as exc:
            raise NetworkError("Request timed out", details={"url": url}, cause=exc) from exc
        except aiohttp.ClientError as exc:
            raise NetworkError("Network error", details={"url": url}, cause=exc) from exc

        logger.debug("%s %s -> %s", method, url, status)
        if not 200 <= status < 300:
            text = _body_text(body)
            logger.error("Graph request failed: %s %s -> %s %s", method, url, status, text)
            raise map_http_error(
                HttpErrorInfo(status_code=status, url=url, body=text, reason=reason)
            )

        return _Response(status=status, headers=resp_headers, body=body, url=url)


def _items(values: list[Any]) -> list[DriveItem]:
    return [item_from_dict(v) for v in values if isinstance(v, dict)]


def _body_text(body: bytes) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return "<unreadable>"
