"""Test utilities for ghost routers.

    from ghost.testing import TestClient
"""

from ghost.testing.client import TestClient

__all__ = ["TestClient"]
