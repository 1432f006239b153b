"""Shared fixtures: a template directory and a static tree on disk."""

from pathlib import Path

import pytest

from seatsweep.app import App
from seatsweep.config import ServerConfig

BASE_HTML = """\
<html>
<head><title>{% block title %}SeatSweep{% endblock %}</title></head>
<body>
<header>SeatSweep chrome</header>
{% block content %}{% endblock %}
</body>
</html>
"""

HOME_HTML = """\
{% block title %}Home{% endblock %}
{% block content %}<h1>Find a seat</h1>{% endblock %}
"""

MAP_HTML = """\
{% block content %}<h1>Seat map</h1>{% endblock %}
"""


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "base.html").write_text(BASE_HTML)
    (directory / "home.html").write_text(HOME_HTML)
    (directory / "map.html").write_text(MAP_HTML)
    return directory


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "style.css").write_text("body { color: red; }")
    (directory / "map.js").write_text("console.log('map');")
    (directory / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    docs = directory / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")
    return directory


@pytest.fixture
def make_app(templates_dir: Path, static_dir: Path):
    """Factory for an App wired to the temporary directories."""

    def factory(**overrides: object) -> App:
        values: dict[str, object] = {
            "templates_dir": templates_dir,
            "static_dir": static_dir,
        }
        values.update(overrides)
        return App(ServerConfig(**values))

    return factory
