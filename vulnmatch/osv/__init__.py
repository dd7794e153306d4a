"""OSV record schema and index decoding for vulnmatch."""

from .models import (
    RANGE_TYPE_SEMVER,
    Affected,
    EcosystemSpecific,
    Entry,
    ModuleMeta,
    ModuleVuln,
    Package,
    Range,
    RangeEvent,
    Reference,
    VulnMeta,
)
from .index import iter_json_array, iter_modules, iter_vulns

__all__ = [
    "RANGE_TYPE_SEMVER",
    "Affected",
    "EcosystemSpecific",
    "Entry",
    "ModuleMeta",
    "ModuleVuln",
    "Package",
    "Range",
    "RangeEvent",
    "Reference",
    "VulnMeta",
    "iter_json_array",
    "iter_modules",
    "iter_vulns",
]
