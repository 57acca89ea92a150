"""
Domain interfaces.

Defines the contracts that infrastructure layer must implement.
"""

from .messaging_interface import IGroupRoster, IMessenger
from .store_interface import IPersistentStore

__all__ = [
    "IGroupRoster",
    "IMessenger",
    "IPersistentStore",
]
