"""SeatSweep: a small public web server for a seat-availability page.

Serves server-rendered pages composed from a shared base template, a
static asset tree, and (behind a TLS-terminating proxy) redirects plain
HTTP to HTTPS.

Basic usage::

    from seatsweep import App, ServerConfig

    App(ServerConfig(address=":8877", templates_dir="templates")).run()

Or from the command line::

    seatsweep --address :8080 --debug
"""

from importlib import import_module

__version__ = "0.0.3"

# Public name -> defining module. Imported on first access so that
# ``import seatsweep`` does not pull in kida or pounce.
_EXPORTS = {
    "App": "seatsweep.app",
    "ServerConfig": "seatsweep.config",
    "Request": "seatsweep.http.request",
    "Response": "seatsweep.http.response",
    "TemplateRegistry": "seatsweep.templating.registry",
    "SeatSweepError": "seatsweep.errors",
    "ConfigurationError": "seatsweep.errors",
    "TemplateRegistryError": "seatsweep.errors",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    module = _EXPORTS.get(name)
    if module is None:
        msg = f"module 'seatsweep' has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
