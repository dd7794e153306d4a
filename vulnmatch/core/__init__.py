"""Core matching, derivation and retrieval logic for vulnmatch."""

from .ranges import affects, collect_range_pairs, is_before_fix, RangePair
from .components import AffectedComponent, affected_components
from .client import ClientConfig, EntryLookup, LookupStatus, PackageRequest, VulnClient
from .vulns import Vuln, vulns_for_module, vulns_for_package

__all__ = [
    "affects",
    "collect_range_pairs",
    "is_before_fix",
    "RangePair",
    "AffectedComponent",
    "affected_components",
    "ClientConfig",
    "EntryLookup",
    "LookupStatus",
    "PackageRequest",
    "VulnClient",
    "Vuln",
    "vulns_for_module",
    "vulns_for_package",
]
