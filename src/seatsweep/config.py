"""Server configuration.

ServerConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. The four recognised
options are described once in ``OPTIONS`` so the CLI parser, the
environment overlay and the help text all read the same table.
"""

import os
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

ENV_PREFIX = "SEATSWEEP_"

# Bind host used when an address has no host part (IPv4 wildcard).
EMPTY_HOST = "0.0.0.0"

_ADDRESS_RE = re.compile(r"^(?P<host>\[[0-9A-Fa-f:.%\w]+\]|[^:\[\]]*):(?P<port>\d{1,5})$")

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_address(value: str) -> str:
    """Validate a ``[host]:port`` bind endpoint and return it unchanged.

    The host may be empty (bind every interface), a name, an IPv4
    address, or a bracketed IPv6 address. The port is mandatory.

    Raises:
        ValueError: If *value* is not a bind endpoint.
    """
    match = _ADDRESS_RE.match(value)
    if match is None:
        msg = f"invalid bind address {value!r}, expected [host]:port"
        raise ValueError(msg)
    if int(match.group("port")) > 65535:
        msg = f"port out of range in bind address {value!r}"
        raise ValueError(msg)
    return value


def parse_bool(value: str) -> bool:
    """Parse a boolean the way ``--debug=<value>`` and ``SEATSWEEP_DEBUG`` accept it."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    msg = f"invalid boolean value {value!r}"
    raise ValueError(msg)


def parse_path(value: str) -> str:
    """Accept any non-empty filesystem path."""
    if not value:
        msg = "path must not be empty"
        raise ValueError(msg)
    return value


def split_address(address: str) -> tuple[str, int]:
    """Split a validated bind endpoint into ``(host, port)``.

    An empty host becomes ``0.0.0.0``, which listens on every IPv4
    interface only; pass ``[::]:port`` to listen on IPv6 as well.
    Brackets around IPv6 hosts are removed.
    """
    match = _ADDRESS_RE.match(parse_address(address))
    assert match is not None
    host = match.group("host").strip("[]") or EMPTY_HOST
    return host, int(match.group("port"))


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    Every field has the same default the CLI advertises::

        config = ServerConfig(address=":9000", debug=True)
    """

    address: str = ":8877"
    debug: bool = False
    static_dir: str | Path = "static"
    templates_dir: str | Path = "templates"

    @property
    def host(self) -> str:
        """Bind host derived from ``address``."""
        return split_address(self.address)[0]

    @property
    def port(self) -> int:
        """Bind port derived from ``address``."""
        return split_address(self.address)[1]

    def with_absolute_paths(self) -> "ServerConfig":
        """Return a copy whose directories are absolute.

        Relative paths are joined to the current working directory and
        normalised. Symlinks are left alone.

        Raises:
            OSError: If the working directory cannot be determined.
        """
        return replace(
            self,
            static_dir=Path(os.path.abspath(self.static_dir)),
            templates_dir=Path(os.path.abspath(self.templates_dir)),
        )


@dataclass(frozen=True, slots=True)
class Option:
    """One recognised option: its CLI name, config field and value setter.

    ``parse`` is the single code path turning a raw string into a field
    value, used for both CLI arguments and environment variables.
    """

    name: str
    field: str
    parse: Callable[[str], Any]
    default: Any
    help: str
    metavar: str | None = None

    @property
    def env_var(self) -> str:
        return env_var_name(self)


def env_var_name(option: Option) -> str:
    """Environment variable mirroring *option*, e.g. ``SEATSWEEP_ADDRESS``."""
    return f"{ENV_PREFIX}{option.name.upper()}"


OPTIONS: tuple[Option, ...] = (
    Option(
        name="address",
        field="address",
        parse=parse_address,
        default=":8877",
        help="Address for the server to bind on.",
        metavar="ADDR",
    ),
    Option(
        name="debug",
        field="debug",
        parse=parse_bool,
        default=False,
        help="Run the server in debug/development mode.",
    ),
    Option(
        name="staticdir",
        field="static_dir",
        parse=parse_path,
        default="static",
        help=(
            "Directory where the static files are stored. "
            "If not absolute, will be joined to the current working directory."
        ),
        metavar="DIR",
    ),
    Option(
        name="templatesdir",
        field="templates_dir",
        parse=parse_path,
        default="templates",
        help=(
            "Directory where the template files are stored. "
            "If not absolute, will be joined to the current working directory."
        ),
        metavar="DIR",
    ),
)
