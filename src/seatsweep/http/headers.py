"""Request headers, indexed once by lower-cased name."""

from collections.abc import Iterable


class Headers:
    """Case-insensitive view of the headers a request arrived with.

    Every value sent under a name is kept, in arrival order: a proxy
    chain may append a second ``X-Forwarded-Proto`` instead of replacing
    the first, and the HTTPS gate has to see all of them.
    """

    __slots__ = ("_values",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in pairs:
            values.setdefault(name.lower(), []).append(value)
        self._values = {name: tuple(found) for name, found in values.items()}

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Headers":
        """Decode the ``headers`` list of an ASGI scope."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self._values.get(name.lower())
        return values[0] if values else default

    def get_list(self, name: str) -> tuple[str, ...]:
        return self._values.get(name.lower(), ())

    def to_asgi(self) -> list[tuple[bytes, bytes]]:
        """Encode back into the ASGI scope form."""
        return [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, values in self._values.items()
            for value in values
        ]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"
