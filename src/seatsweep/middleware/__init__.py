"""Request middleware, outermost first: the HTTPS gate, then static files.

A middleware is ``async (request, next) -> Response``; ``next`` is a
:data:`~seatsweep.routing.route.Handler`.
"""

from seatsweep.middleware.https_redirect import ForwardedHTTPSRedirect
from seatsweep.middleware.static import StaticFiles

__all__ = ["ForwardedHTTPSRedirect", "StaticFiles"]
