"""SeatSweep CLI: resolve configuration and start the server.

Entry point registered as ``seatsweep`` in ``pyproject.toml``::

    [project.scripts]
    seatsweep = "seatsweep.cli:main"

Every option can also be set through ``SEATSWEEP_<NAME>``; the command
line wins when both are given.
"""

import logging
import os
from collections.abc import Sequence

from seatsweep.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for the ``seatsweep`` command."""
    from seatsweep.cli._resolve import resolve_config
    from seatsweep.cli._run import fatal, run

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    try:
        config = resolve_config(argv, os.environ)
    except ConfigurationError as exc:
        raise fatal("%s", exc) from exc

    run(config)
