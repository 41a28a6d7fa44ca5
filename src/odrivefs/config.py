"""Options for the OneDrive filesystem."""

from __future__ import annotations

from dataclasses import dataclass

GRAPH_BASE_URL: str = "https://graph.microsoft.com/v1.0/"
DEFAULT_SCHEME: str = "onedrive"


@dataclass(slots=True, frozen=True)
class FsOptions:
    """
    Options shared by the client provider, resolver and filesystem.

    Attributes:
        poll_interval: Seconds between delta polls while a watch is active.
        base_url: Graph API root; relative routes are joined onto it.
        request_timeout: Total timeout per HTTP request, in seconds.
        scheme: URI scheme served by the filesystem.
    """

    poll_interval: float = 10.0
    base_url: str = GRAPH_BASE_URL
    request_timeout: float = 60.0
    scheme: str = DEFAULT_SCHEME

    def __post_init__(self) -> None:
        if not isinstance(self.poll_interval, (int, float)) or self.poll_interval <= 0:
            raise ValueError("FsOptions.poll_interval must be a positive number")

        if not isinstance(self.request_timeout, (int, float)) or self.request_timeout <= 0:
            raise ValueError("FsOptions.request_timeout must be a positive number")

        if not isinstance(self.base_url, str) or not self.base_url.startswith(
            ("https://", "http://")
        ):
            raise ValueError("FsOptions.base_url must be an http(s) URL")
        if not self.base_url.endswith("/"):
            raise ValueError("FsOptions.base_url must end with '/'")

        if not isinstance(self.scheme, str) or not self.scheme.strip():
            raise ValueError("FsOptions.scheme must be a non-empty string")
