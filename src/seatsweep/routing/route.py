"""Route table entries and the handler shape shared with middleware."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from seatsweep.http.request import Request
from seatsweep.http.response import Response

# A route handler, and equally the ``next`` a middleware calls on.
type Handler = Callable[[Request], Awaitable[Response]]

# ``async (request, next) -> Response``, wrapped around route dispatch.
type Middleware = Callable[[Request, Handler], Awaitable[Response]]


@dataclass(frozen=True, slots=True)
class Route:
    """One fixed path and the methods it answers."""

    path: str
    handler: Handler
    methods: frozenset[str]

    def allows(self, method: str) -> bool:
        return method in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """A found route; ``redirect_to`` is set when only the slash differed."""

    route: Route
    redirect_to: str | None = None
