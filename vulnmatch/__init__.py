"""vulnmatch - match Go modules and packages against a Go vulnerability database."""

__version__ = "0.1.0"

from .core.client import ClientConfig, EntryLookup, LookupStatus, PackageRequest, VulnClient
from .core.components import AffectedComponent, affected_components
from .core.ranges import affects, is_before_fix
from .core.vulns import Vuln, vulns_for_module, vulns_for_package
from .errors import (
    AliasNotFoundError,
    DataInconsistencyError,
    DecodeError,
    NotFoundError,
    SourceError,
    SourceNotFoundError,
    VulnMatchError,
)
from .osv.models import Entry

__all__ = [
    "ClientConfig",
    "EntryLookup",
    "LookupStatus",
    "PackageRequest",
    "VulnClient",
    "AffectedComponent",
    "affected_components",
    "affects",
    "is_before_fix",
    "Vuln",
    "vulns_for_module",
    "vulns_for_package",
    "AliasNotFoundError",
    "DataInconsistencyError",
    "DecodeError",
    "NotFoundError",
    "SourceError",
    "SourceNotFoundError",
    "VulnMatchError",
    "Entry",
]
