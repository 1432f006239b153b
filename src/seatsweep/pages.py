"""Page handlers: render one registered template with an empty context.

The page is rendered into a pooled buffer first and only copied into
the response once rendering has finished, so a template that fails
partway produces a clean 500 instead of half a page.
"""

import logging

from anyio import to_thread

from seatsweep.http.request import Request
from seatsweep.http.response import Response, plain_text
from seatsweep.templating.bufpool import SizedBufferPool
from seatsweep.templating.registry import TemplateRegistry

logger = logging.getLogger("seatsweep.server")

HOME_TEMPLATE = "home.html"
MAP_TEMPLATE = "map.html"


def render_page(registry: TemplateRegistry, pool: SizedBufferPool, name: str) -> Response:
    """Render template *name* into an HTML response.

    Returns a 500 ``text/plain`` response when *name* is not registered
    or the template raises while rendering.
    """
    template = registry.get(name)
    if template is None:
        logger.error("Template %s is not registered", name)
        return plain_text(f"Template Error - Can't find template {name}", 500)

    with pool.buffer() as buf:
        try:
            for chunk in template.render_stream({}):
                buf.write(chunk.encode("utf-8"))
        except Exception:
            logger.exception("Error executing template %s", name)
            return plain_text(f"Template Error - Can't execute template {name}", 500)
        body = buf.getvalue()

    return Response(body=body)


class PageHandler:
    """Route handler that renders a single named page.

    Rendering is CPU-bound, so it runs in a worker thread and the event
    loop stays free for other requests.
    """

    __slots__ = ("name", "pool", "registry")

    def __init__(self, name: str, registry: TemplateRegistry, pool: SizedBufferPool) -> None:
        self.name = name
        self.registry = registry
        self.pool = pool

    async def __call__(self, request: Request) -> Response:
        return await to_thread.run_sync(render_page, self.registry, self.pool, self.name)

    def __repr__(self) -> str:
        return f"PageHandler({self.name!r})"
