"""Configuration resolution: CLI flags over environment over defaults.

The parser is built with suppressed defaults, so an option appears in
the parsed namespace only when it was given on the command line. The
options that are missing are exactly the unset ones; each of those is
looked up as ``SEATSWEEP_<NAME>`` and, when non-empty, fed through the
same value setter the CLI uses.
"""

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import fields

from seatsweep import __version__
from seatsweep.config import OPTIONS, Option, ServerConfig
from seatsweep.errors import ConfigurationError

PRODUCT_NAME = "SeatSweep"


def _argparse_type(option: Option):
    """Wrap ``option.parse`` so argparse reports its ValueError cleanly."""

    def convert(value: str):
        try:
            return option.parse(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    convert.__name__ = option.name
    return convert


def _epilog() -> str:
    lines = ["The possible environment variables:"]
    lines.extend(f"  {option.env_var}" for option in OPTIONS)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every option in ``OPTIONS``."""
    parser = argparse.ArgumentParser(
        prog="seatsweep",
        description=f"{PRODUCT_NAME}\nVersion {__version__}",
        epilog=_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        argument_default=argparse.SUPPRESS,
        allow_abbrev=False,
    )
    for option in OPTIONS:
        help_text = f"{option.help} (default: {option.default}; env: {option.env_var})"
        if isinstance(option.default, bool):
            parser.add_argument(
                f"--{option.name}",
                dest=option.field,
                nargs="?",
                const=True,
                type=_argparse_type(option),
                metavar="BOOL",
                help=help_text,
            )
        else:
            parser.add_argument(
                f"--{option.name}",
                dest=option.field,
                type=_argparse_type(option),
                metavar=option.metavar,
                help=help_text,
            )
    return parser


def unset_options(namespace: argparse.Namespace) -> list[Option]:
    """Options the command line did not set."""
    explicitly_set = set(vars(namespace))
    return [option for option in OPTIONS if option.field not in explicitly_set]


def apply_environment(
    namespace: argparse.Namespace,
    environ: Mapping[str, str],
) -> dict[str, object]:
    """Fill options the CLI left unset from their environment variables.

    Empty values count as unset.

    Raises:
        ConfigurationError: If a variable's value is rejected by its option.
    """
    values: dict[str, object] = dict(vars(namespace))
    for option in unset_options(namespace):
        raw = environ.get(option.env_var, "")
        if raw == "":
            continue
        try:
            values[option.field] = option.parse(raw)
        except ValueError as exc:
            raise ConfigurationError(option.name, option.env_var, raw) from exc
    return values


def resolve_config(
    argv: Sequence[str] | None,
    environ: Mapping[str, str],
    *,
    parser: argparse.ArgumentParser | None = None,
) -> ServerConfig:
    """Merge *argv* and *environ* into a ServerConfig.

    Precedence per option: command line, then a non-empty
    ``SEATSWEEP_<NAME>`` variable, then the built-in default. Paths are
    returned as given; ``ServerConfig.with_absolute_paths()`` makes them
    absolute.

    Raises:
        ConfigurationError: If an environment value is invalid.
        SystemExit: On ``--help`` (code 0) or a bad command line (code 2).
    """
    parser = parser or build_parser()
    namespace = parser.parse_args(argv)
    values = apply_environment(namespace, environ)
    known = {f.name for f in fields(ServerConfig)}
    return ServerConfig(**{k: v for k, v in values.items() if k in known})
