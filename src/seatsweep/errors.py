"""SeatSweep exception hierarchy.

Startup errors (``ConfigurationError``, ``TemplateRegistryError``) are
fatal and end the process. ``HTTPError`` subclasses end a single request
with their status and never leave the request pipeline.
"""

from collections.abc import Iterable
from http import HTTPStatus


class SeatSweepError(Exception):
    """Base for all seatsweep-specific errors."""


class ConfigurationError(SeatSweepError):
    """An environment variable holds a value its option rejects."""

    def __init__(self, option: str, env_var: str, value: str) -> None:
        self.option = option
        self.env_var = env_var
        self.value = value
        super().__init__(
            f"Unable to set configuration option {option} from environment "
            f'variable {env_var}, which has a value of "{value}"'
        )


class TemplateRegistryError(SeatSweepError):
    """The template directory cannot be turned into a registry.

    Covers a missing ``base.html``, a failed directory scan, and any
    template that does not compile.
    """


class HTTPError(SeatSweepError):
    """Ends the current request with ``status`` and a plain-text ``detail``.

    ``detail`` defaults to the status phrase; ``headers`` are added to
    the error response as given.
    """

    status = 500

    def __init__(self, detail: str = "", headers: tuple[tuple[str, str], ...] = ()) -> None:
        self.detail = detail or HTTPStatus(self.status).phrase
        self.headers = headers
        super().__init__(f"{self.status} {self.detail}")


class Forbidden(HTTPError):  # noqa: N818
    status = 403


class NotFound(HTTPError):  # noqa: N818
    status = 404


class MethodNotAllowed(HTTPError):  # noqa: N818
    """The path exists but does not answer this method; ``Allow`` lists those it does."""

    status = 405

    def __init__(self, allowed: Iterable[str]) -> None:
        self.allowed = frozenset(allowed)
        super().__init__(headers=(("Allow", ", ".join(sorted(self.allowed))),))
