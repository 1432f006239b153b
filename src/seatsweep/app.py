"""The SeatSweep ASGI application.

Nothing is compiled when an ``App`` is constructed. The first of a
lifespan startup, a request or ``run()`` compiles it: the template
registry is built, the two page routes installed and the middleware
chain fixed. The result is frozen and shared by every request.
"""

import threading
from dataclasses import dataclass
from pathlib import Path

from seatsweep._internal.asgi import Receive, Scope, Send
from seatsweep.config import ServerConfig
from seatsweep.errors import TemplateRegistryError
from seatsweep.middleware.https_redirect import ForwardedHTTPSRedirect
from seatsweep.middleware.static import StaticFiles
from seatsweep.pages import HOME_TEMPLATE, MAP_TEMPLATE, PageHandler
from seatsweep.routing.route import Middleware, Route
from seatsweep.routing.router import Router
from seatsweep.server.handler import handle_request
from seatsweep.templating.bufpool import SizedBufferPool
from seatsweep.templating.registry import TemplateRegistry

PAGE_METHODS = frozenset({"GET", "HEAD"})

# (path, template) pairs served as pages
PAGES: tuple[tuple[str, str], ...] = (
    ("/", HOME_TEMPLATE),
    ("/map", MAP_TEMPLATE),
)


@dataclass(frozen=True, slots=True)
class Compiled:
    """Everything a request reads, built once per App."""

    registry: TemplateRegistry
    router: Router
    middleware: tuple[Middleware, ...]


def compile_app(config: ServerConfig, buffers: SizedBufferPool) -> Compiled:
    """Build the registry, routes and middleware for *config*.

    Raises:
        TemplateRegistryError: If the templates do not compile.
    """
    registry = TemplateRegistry.build(Path(config.templates_dir))

    router = Router(strict_slash=True)
    for path, template in PAGES:
        router.add(Route(path, PageHandler(template, registry, buffers), PAGE_METHODS))
    router.compile()

    # The gate comes first so static files are redirected too.
    middleware: list[Middleware] = []
    if not config.debug:
        middleware.append(ForwardedHTTPSRedirect())
    middleware.append(StaticFiles(config.static_dir, prefix="/static"))

    return Compiled(registry, router, tuple(middleware))


class App:
    """ASGI 3.0 callable for one resolved ``ServerConfig``.

    ``compile()`` is safe to race: worker threads that arrive together
    wait on a lock and only the first one builds.
    """

    __slots__ = ("_buffers", "_compiled", "_lock", "config")

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config = config or ServerConfig()
        self._buffers = SizedBufferPool()
        self._lock = threading.Lock()
        self._compiled: Compiled | None = None

    def compile(self) -> Compiled:
        """Compile on first call; later calls return the same result."""
        if self._compiled is None:
            with self._lock:
                if self._compiled is None:
                    self._compiled = compile_app(self.config, self._buffers)
        return self._compiled

    @property
    def registry(self) -> TemplateRegistry:
        return self.compile().registry

    @property
    def router(self) -> Router:
        return self.compile().router

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        return self.compile().middleware

    def run(self) -> None:
        """Compile, then serve on ``config.address`` until the server stops.

        Raises:
            TemplateRegistryError: If the templates do not compile.
            OSError: If the address cannot be bound.
        """
        self.compile()

        from seatsweep.server.serve import run_server

        run_server(self, self.config.host, self.config.port, debug=self.config.debug)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        compiled = self.compile()
        await handle_request(
            scope, receive, send, router=compiled.router, middleware=compiled.middleware
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        """Compile at startup so a broken template set fails before traffic."""
        while (message := await receive())["type"] != "lifespan.shutdown":
            if message["type"] != "lifespan.startup":
                continue
            try:
                self.compile()
            except TemplateRegistryError as exc:
                await send({"type": "lifespan.startup.failed", "message": str(exc)})
                return
            await send({"type": "lifespan.startup.complete"})
        await send({"type": "lifespan.shutdown.complete"})
