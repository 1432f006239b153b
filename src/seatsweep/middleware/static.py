"""The static asset tree under ``/static/``."""

import mimetypes
from pathlib import Path

from anyio import to_thread

from seatsweep.errors import Forbidden
from seatsweep.http.request import Request
from seatsweep.http.response import Response
from seatsweep.routing.route import Handler

FILE_METHODS = frozenset({"GET", "HEAD"})


class StaticFiles:
    """Serve the files below *directory* for request paths under *prefix*.

    The prefix is stripped and the rest resolved against the root,
    symlinks included; a result outside the root raises ``Forbidden``.
    A directory serves its *index* file. Anything not found falls
    through to ``next``, which ends in the router's 404.
    """

    __slots__ = ("cache_control", "index", "prefix", "root")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/static",
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self.root = Path(directory).resolve()
        self.prefix = prefix.rstrip("/") + "/"
        self.index = index
        self.cache_control = cache_control

    def locate(self, path: str) -> Path | None:
        """The file served for URL *path*, or ``None`` if there is none.

        Raises:
            Forbidden: If *path* resolves outside the root.
        """
        target = (self.root / path.removeprefix(self.prefix)).resolve()
        if not target.is_relative_to(self.root):
            raise Forbidden()
        if target.is_dir():
            target = target / self.index
        return target if target.is_file() else None

    async def __call__(self, request: Request, next: Handler) -> Response:
        if request.method not in FILE_METHODS or not request.path.startswith(self.prefix):
            return await next(request)

        target = self.locate(request.path)
        if target is None:
            return await next(request)

        content_type, _ = mimetypes.guess_type(target.name)
        body = await to_thread.run_sync(target.read_bytes)
        return Response(
            body=body,
            content_type=content_type or "application/octet-stream",
            headers=(("Cache-Control", self.cache_control),),
        )
