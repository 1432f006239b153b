"""The per-request pipeline: one ASGI ``http`` scope in, one response out.

The middleware chain is wrapped around router dispatch. An ``HTTPError``
from anywhere in the chain becomes a plain-text response with its status;
any other exception is logged and becomes a 500. Either way exactly one
response is sent, and a client that has gone away by then is only logged.
"""

import logging
from collections.abc import Sequence
from functools import partial

from seatsweep._internal.asgi import Receive, Scope, Send
from seatsweep.errors import HTTPError
from seatsweep.http.request import Request
from seatsweep.http.response import Response, plain_text, redirect
from seatsweep.routing.route import Handler, Middleware
from seatsweep.routing.router import Router

logger = logging.getLogger("seatsweep.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: Sequence[Middleware],
) -> None:
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    endpoint = wrap(middleware, partial(dispatch, router))
    try:
        response = await endpoint(request)
    except HTTPError as exc:
        logger.debug("%d %s %s", exc.status, request.method, request.path)
        response = error_response(exc)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = plain_text("Internal Server Error", 500)

    try:
        await send_response(send, response, head=request.method == "HEAD")
    except OSError as exc:
        logger.warning("Error writing response for %s %s: %s", request.method, request.path, exc)


async def dispatch(router: Router, request: Request) -> Response:
    """Call the matched route, or redirect to its canonical spelling."""
    match = router.match(request.method, request.path)
    if match.redirect_to is None:
        return await match.route.handler(request)
    location = match.redirect_to
    if request.query_string:
        location = f"{location}?{request.query_string}"
    return redirect(location)


def wrap(middleware: Sequence[Middleware], endpoint: Handler) -> Handler:
    """Fold *middleware* around *endpoint*; ``middleware[0]`` runs first."""
    for layer in reversed(middleware):
        endpoint = partial(layer, next=endpoint)
    return endpoint


def error_response(exc: HTTPError) -> Response:
    return plain_text(exc.detail, exc.status, exc.headers)


async def send_response(send: Send, response: Response, *, head: bool = False) -> None:
    """Send *response* as a start message and a single body message.

    ``content-length`` is the full body length even for HEAD, where the
    body itself is withheld.
    """
    body = response.body_bytes
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers += [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    ]
    headers.append((b"content-length", str(len(body)).encode("latin-1")))
    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
