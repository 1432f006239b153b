"""Server bootstrap: turn a resolved configuration into a running server.

Every failure that could otherwise surface while serving (unresolvable
paths, a missing base template, a template that does not compile) is
forced to happen here, before the listener accepts a connection.
"""

import logging

from seatsweep.app import App
from seatsweep.config import ServerConfig
from seatsweep.errors import TemplateRegistryError

logger = logging.getLogger("seatsweep.cli")


def fatal(message: str, *args: object) -> SystemExit:
    """Log a FATAL line and build the SystemExit to raise."""
    logger.critical("FATAL: " + message, *args)
    return SystemExit(1)


def run(config: ServerConfig) -> None:
    """Resolve paths, compile templates, then serve until the listener returns.

    Raises:
        SystemExit: Always with code 1; the server is not expected to
            stop on its own.
    """
    try:
        config = config.with_absolute_paths()
    except OSError as exc:
        raise fatal("Error building absolute path to directories: %s", exc) from exc

    logger.info("Using static directory: %s", config.static_dir)
    logger.info("Using template directory: %s", config.templates_dir)

    app = App(config)
    try:
        app.run()
    except TemplateRegistryError as exc:
        raise fatal("Template processing error: %s", exc) from exc
    except OSError as exc:
        raise fatal("%s", exc) from exc

    raise fatal("server on %s stopped", config.address)
