"""Clients for external services."""

from heap_ingestion.clients.indx_client import IndxClient

__all__ = ["IndxClient"]
