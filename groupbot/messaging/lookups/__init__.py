"""Third-party lookup clients."""

from .lookup_client import LookupClient

__all__ = ["LookupClient"]
