"""URI <-> (drive id, segments) mapping."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from odrivefs.config import DEFAULT_SCHEME
from odrivefs.errors import UnsupportedSchemeError


@dataclass(slots=True, frozen=True)
class VirtualPath:
    """
    A tokenized filesystem path: a drive and the segments below its root.

    An empty segment tuple denotes the drive root.
    """

    drive_id: str
    segments: tuple[str, ...] = ()
    scheme: str = DEFAULT_SCHEME

    @classmethod
    def parse(cls, uri: str, *, scheme: str = DEFAULT_SCHEME) -> VirtualPath:
        """
        Parse ``scheme://driveId/a/b`` into a VirtualPath.

        Raises:
            UnsupportedSchemeError: if the URI is not ours, names no drive, or has
                a segment that decodes to a name containing "/".
        """
        parts = urlsplit(uri)
        if parts.scheme != scheme:
            raise UnsupportedSchemeError(
                f"Unsupported scheme: {parts.scheme}",
                details={"uri": uri, "expected": scheme},
            )
        if not parts.netloc:
            raise UnsupportedSchemeError("URI has no drive authority", details={"uri": uri})

        segments = tuple(unquote(s) for s in parts.path.split("/") if s)
        if any("/" in s for s in segments):
            raise UnsupportedSchemeError(
                "URI path segment contains an encoded '/'", details={"uri": uri}
            )
        return cls(drive_id=parts.netloc, segments=segments, scheme=scheme)

    @property
    def path(self) -> str:
        """Drive-root-relative path without a leading slash."""
        return "/".join(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def basename(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> VirtualPath:
        return VirtualPath(self.drive_id, self.segments[:-1], self.scheme)

    def child(self, name: str) -> VirtualPath:
        return VirtualPath(self.drive_id, self.segments + (name,), self.scheme)

    @property
    def uri(self) -> str:
        return f"{self.scheme}://{self.drive_id}/{quote(self.path, safe='/')}"

    def __str__(self) -> str:
        return self.uri
