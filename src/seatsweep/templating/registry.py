"""Template registry: every content template composed with ``base.html``.

The registry is built once at startup from a flat directory of ``*.html``
files. ``base.html`` holds the shared page chrome; each other file is a
content template that fills the base's blocks. Composition happens at
compile time, so handlers refer to a page purely by its file name::

    registry = TemplateRegistry.build(Path("/srv/seatsweep/templates"))
    html = registry.get("home.html").render({})

A content template does not declare its own parent. The registry
compiles it as if it began with ``{% extends "base.html" %}``::

    {# home.html #}
    {% block title %}Seats{% endblock %}
    {% block content %}<h1>Find a seat</h1>{% endblock %}

Every failure (unreadable directory, missing ``base.html``, a template
that does not compile) raises ``TemplateRegistryError`` so the server
never starts with a partial template set.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from kida import ChoiceLoader, DictLoader, Environment, FileSystemLoader

from seatsweep.errors import TemplateRegistryError

logger = logging.getLogger("seatsweep.templating")

BASE_TEMPLATE = "base.html"
TEMPLATE_GLOB = "*.html"


def compose_source(source: str, base: str = BASE_TEMPLATE) -> str:
    """Prefix a content template's source so it extends *base*."""
    return f'{{% extends "{base}" %}}\n{source}'


class TemplateRegistry:
    """Read-only mapping from content-template file name to compiled template.

    ``base.html`` is never a key. Lookups for unknown names return
    ``None`` rather than raising; the page handler turns that into a 500.
    """

    __slots__ = ("_directory", "_env", "_templates")

    def __init__(self, directory: Path, env: Environment, templates: dict[str, Any]) -> None:
        self._directory = directory
        self._env = env
        self._templates = templates

    @classmethod
    def build(cls, directory: str | Path) -> "TemplateRegistry":
        """Scan *directory* and compile every content template against the base.

        Only files directly inside *directory* are considered.

        Raises:
            TemplateRegistryError: If the directory cannot be read, it has
                no ``base.html``, or any template fails to compile.
        """
        directory = Path(directory)
        try:
            files = sorted(p for p in directory.glob(TEMPLATE_GLOB) if p.is_file())
        except OSError as exc:
            msg = f"Can't list templates in {directory}: {exc}"
            raise TemplateRegistryError(msg) from exc

        if not any(p.name == BASE_TEMPLATE for p in files):
            msg = f"Can't find {BASE_TEMPLATE} in {directory}"
            raise TemplateRegistryError(msg)

        content_files = [p for p in files if p.name != BASE_TEMPLATE]

        composed: dict[str, str] = {}
        for path in content_files:
            try:
                composed[path.name] = compose_source(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as exc:
                msg = f"Can't read template {path.name}: {exc}"
                raise TemplateRegistryError(msg) from exc

        env = Environment(
            loader=ChoiceLoader([DictLoader(composed), FileSystemLoader(str(directory))]),
            autoescape=True,
        )

        # The base is compiled on its own first so a broken layout is
        # reported against base.html rather than the first page using it.
        templates: dict[str, Any] = {}
        for name in (BASE_TEMPLATE, *composed):
            try:
                template = env.get_template(name)
            except Exception as exc:
                msg = f"Can't compile template {name}: {exc}"
                raise TemplateRegistryError(msg) from exc
            if name != BASE_TEMPLATE:
                templates[name] = template

        logger.debug("Compiled %d template(s) from %s", len(templates), directory)
        return cls(directory, env, templates)

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def names(self) -> tuple[str, ...]:
        """Registered template names, sorted."""
        return tuple(sorted(self._templates))

    def get(self, name: str) -> Any | None:
        """Return the compiled template for *name*, or ``None``."""
        return self._templates.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"TemplateRegistry({str(self._directory)!r}, {list(self.names)!r})"
