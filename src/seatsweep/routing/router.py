"""Exact-path router with trailing-slash canonicalisation."""

from seatsweep.errors import MethodNotAllowed, NotFound
from seatsweep.routing.route import Route, RouteMatch


def toggle_trailing_slash(path: str) -> str:
    """``/map`` -> ``/map/`` and ``/map/`` -> ``/map``. The root is left alone."""
    if path == "/":
        return path
    if path.endswith("/"):
        return path.rstrip("/") or "/"
    return path + "/"


class Router:
    """Route table keyed by exact path, one route per path.

    With ``strict_slash`` on, ``/map/`` finds the route registered as
    ``/map`` (and the reverse) and the match carries a redirect to the
    registered spelling instead of the handler being called.

    Usage::

        router = Router()
        router.add(Route("/map", handler, frozenset({"GET", "HEAD"})))
        router.compile()
        assert router.match("GET", "/map/").redirect_to == "/map"
    """

    __slots__ = ("_compiled", "_routes", "strict_slash")

    def __init__(self, *, strict_slash: bool = True) -> None:
        self._routes: dict[str, Route] = {}
        self._compiled = False
        self.strict_slash = strict_slash

    def add(self, route: Route) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if route.path in self._routes:
            msg = f"A route is already registered for {route.path!r}."
            raise ValueError(msg)
        self._routes[route.path] = route

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in registration order."""
        return list(self._routes.values())

    def compile(self) -> None:
        """Close the table to further ``add()`` calls."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *path*.

        Raises:
            NotFound: Neither *path* nor its slash-toggled form is registered.
            MethodNotAllowed: The route exists but does not answer *method*.
        """
        redirect_to = None
        route = self._routes.get(path)
        if route is None and self.strict_slash:
            redirect_to = toggle_trailing_slash(path)
            route = self._routes.get(redirect_to)
        if route is None:
            raise NotFound()
        if not route.allows(method):
            raise MethodNotAllowed(route.methods)
        return RouteMatch(route=route, redirect_to=redirect_to)
