"""Incoming requests.

SeatSweep never reads a request body; everything it routes on is in the
ASGI scope, so a request is just that scope, frozen.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from seatsweep.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """What the router, the static tree and the HTTPS gate look at.

    ``path`` is percent-decoded and is what routes and files match
    against. ``raw_path`` is the path exactly as the client sent it;
    redirects echo it back so escapes survive the round trip.
    """

    method: str
    path: str
    raw_path: str
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)

    @property
    def url(self) -> str:
        """``raw_path`` plus ``?query`` when there is one."""
        return f"{self.raw_path}?{self.query_string}" if self.query_string else self.raw_path

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> "Request":
        # raw_path is optional in ASGI; rebuild it from the decoded path.
        raw_path: bytes = scope.get("raw_path") or b""
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_path=raw_path.decode("latin-1") or quote(scope["path"]),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=Headers.from_asgi(scope.get("headers", ())),
        )
