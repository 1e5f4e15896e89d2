"""HTTP clients shared across services."""

from py_common.clients.api_client import APIClient

__all__ = ["APIClient"]
