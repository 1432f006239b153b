"""HTTPS coercion behind a TLS-terminating proxy.

The proxy forwards plain-HTTP traffic with ``X-Forwarded-Proto: http``
and the public host name in ``X-Forwarded-Host``. When both are present
the request is answered with a permanent redirect to the HTTPS form of
the same URL, plus an HSTS header. Anything else falls through.

The forwarded host is trusted as sent; the process is expected to be
reachable only through the proxy.
"""

from seatsweep.http.request import Request
from seatsweep.http.response import Response, redirect
from seatsweep.routing.route import Handler

HSTS_VALUE = "max-age=31536000; preload"


class ForwardedHTTPSRedirect:
    """Middleware that redirects proxied plain-HTTP requests to HTTPS.

    Only installed outside debug mode.
    """

    __slots__ = ("hsts", "status")

    def __init__(self, *, status: int = 301, hsts: str = HSTS_VALUE) -> None:
        self.status = status
        self.hsts = hsts

    def matches(self, request: Request) -> bool:
        """True if *request* is proxied plain HTTP with a usable host."""
        return "http" in request.headers.get_list("X-Forwarded-Proto") and bool(
            request.headers.get("X-Forwarded-Host")
        )

    def location(self, request: Request) -> str:
        """The HTTPS URL for *request*: forwarded host, same path and query."""
        return f"https://{request.headers.get('X-Forwarded-Host')}{request.url}"

    async def __call__(self, request: Request, next: Handler) -> Response:
        if not self.matches(request):
            return await next(request)
        return redirect(self.location(request), self.status).with_header(
            "Strict-Transport-Security", self.hsts
        )
