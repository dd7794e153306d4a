"""Vulnerability database sources for vulnmatch."""

from .base import MODULES_KEY, VULNS_KEY, Source, entry_key
from .online import OnlineSource
from .offline import OfflineSource
from .memory import InMemorySource
from .factory import new_source

__all__ = [
    "MODULES_KEY",
    "VULNS_KEY",
    "Source",
    "entry_key",
    "OnlineSource",
    "OfflineSource",
    "InMemorySource",
    "new_source",
]
