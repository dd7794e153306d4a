"""Vulnerability summaries for package and module pages."""

from dataclasses import dataclass, field
from typing import List

from ..errors import VulnMatchError
from ..osv.models import Entry
from ..utils.logging import get_logger
from .client import PackageRequest, VulnClient
from .versions import OSV_STDLIB_MODULE_PATH, STDLIB_MODULE_PATH

logger = get_logger("vulns")


@dataclass
class Vuln:
    """A vulnerability to show on a page."""

    id: str
    details: str = ""
    aliases: List[str] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: Entry) -> "Vuln":
        return cls(id=entry.id, details=entry.details, aliases=list(entry.aliases))


async def vulns_for_package(
    client: VulnClient,
    module_path: str,
    version: str,
    package_path: str = ""
) -> List[Vuln]:
    """Return the vulnerabilities affecting a package at a module version.

    The standard library is requested as module "std" with a Go release
    tag as its version (e.g. "go1.19.3").

    Database failures are logged and yield an empty list.
    """
    if module_path == STDLIB_MODULE_PATH:
        module_path = OSV_STDLIB_MODULE_PATH

    request = PackageRequest(module=module_path, package=package_path, version=version)
    try:
        entries = await client.by_package(request)
    except VulnMatchError as e:
        logger.error(f"Looking up vulnerabilities for {request} failed: {e}")
        return []
    return [Vuln.from_entry(entry) for entry in entries]


async def vulns_for_module(client: VulnClient, module_path: str, version: str) -> List[Vuln]:
    """Return the vulnerabilities affecting any package of a module version."""
    return await vulns_for_package(client, module_path, version)
