"""Outgoing responses.

Every response is complete before the first byte is sent (pages are
rendered into a buffer first), so a body is always plain text or bytes
already in hand.
"""

from dataclasses import dataclass, replace

HTML = "text/html; charset=utf-8"
PLAIN_TEXT = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """A finished response. ``with_header`` returns a copy."""

    body: str | bytes = b""
    status: int = 200
    content_type: str = HTML
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "Response":
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


def plain_text(body: str, status: int, headers: tuple[tuple[str, str], ...] = ()) -> Response:
    """The ``text/plain`` response every error is reported with."""
    return Response(body=body, status=status, content_type=PLAIN_TEXT, headers=headers)


def redirect(location: str, status: int = 301) -> Response:
    """An empty-bodied redirect to *location*."""
    return Response(status=status).with_header("Location", location)
