"""Serve an ASGI app with pounce.

Pounce's ``run()`` takes an import string, but seatsweep builds its App
at startup from the resolved configuration, so ``pounce.Server`` is used
directly with the live ASGI callable.
"""

from __future__ import annotations


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    debug: bool = False,
) -> None:
    """Bind *host*:*port* and serve *app* until the server stops.

    Args:
        app: ASGI callable (seatsweep App instance).
        host: Bind host address.
        port: Bind port number.
        debug: Log at debug level instead of info.

    Raises:
        OSError: If the listening socket cannot be bound.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        log_level="debug" if debug else "info",
    )
    server = Server(config, app)
    server.run()
