"""Test utilities for seatsweep applications::

    from seatsweep.testing import TestClient
"""

from seatsweep.testing.client import TestClient

__all__ = ["TestClient"]
