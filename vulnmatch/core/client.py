"""Client for reading Go vulnerability databases."""

import json
import os
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from ..errors import (
    AliasNotFoundError,
    ConfigurationError,
    DataInconsistencyError,
    DecodeError,
    SourceError,
    SourceNotFoundError,
)
from ..osv.index import iter_modules, iter_vulns
from ..osv.models import Entry
from ..sources import MODULES_KEY, VULNS_KEY, InMemorySource, Source, entry_key, new_source
from ..utils.logging import get_logger
from ..utils.performance import PerformanceMonitor
from .concurrency import gather_limited
from .ranges import affects, is_before_fix

DEFAULT_DATABASE_URL = "https://vuln.go.dev"
DATABASE_URL_ENV = "VULNMATCH_DB"


@dataclass
class ClientConfig:
    """Configuration for VulnClient."""

    package_concurrency: int = 10
    entries_concurrency: int = 4
    database_url: str = DEFAULT_DATABASE_URL

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.package_concurrency < 1:
            raise ConfigurationError(
                f"package_concurrency must be positive, got {self.package_concurrency}"
            )
        if self.entries_concurrency < 1:
            raise ConfigurationError(
                f"entries_concurrency must be positive, got {self.entries_concurrency}"
            )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration, reading the database URL from VULNMATCH_DB."""
        return cls(database_url=os.environ.get(DATABASE_URL_ENV) or DEFAULT_DATABASE_URL)


@dataclass(frozen=True)
class PackageRequest:
    """Filter for ``VulnClient.by_package``.

    Attributes:
        module: Module path; entries must affect it. If empty, nothing matches.
        package: Package path; if set, entries must affect this package
            (or list no packages for the module).
        version: Module version; if set, entries must affect this version.
    """

    module: str
    package: str = ""
    version: str = ""


class LookupStatus(Enum):
    FOUND = "found"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class EntryLookup:
    """Result of looking up one entry by ID.

    Exactly one of ``entry`` (FOUND) or ``error`` (ERROR) is set; both are
    None when the database has no such entry (ABSENT).
    """

    status: LookupStatus
    entry: Optional[Entry] = None
    error: Optional[SourceError] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def absent(self) -> bool:
        return self.status is LookupStatus.ABSENT


def is_affected(entry: Entry, request: PackageRequest) -> bool:
    """Report whether entry affects the module, package and version of request.

    A module that lists no packages matches any package filter.
    """
    for affected in entry.affected:
        if affected.module_path != request.module:
            continue
        if not affects(affected.ranges, request.version, request.module):
            continue
        if not request.package or not affected.packages:
            return True
        if any(package.path == request.package for package in affected.packages):
            return True
    return False


class VulnClient:
    """Reads a vulnerability database through a Source.

    The client keeps no per-call state, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        source: Source,
        config: Optional[ClientConfig] = None,
        performance_monitor: Optional[PerformanceMonitor] = None
    ) -> None:
        """Initialize the client.

        Args:
            source: Where database documents are read from
            config: Concurrency limits; defaults to ClientConfig()
            performance_monitor: Optional monitor timing each operation
        """
        self.source = source
        self.config = config or ClientConfig()
        self.performance_monitor = performance_monitor
        self.logger = get_logger("VulnClient")

    @classmethod
    def from_url(
        cls,
        url: Optional[str] = None,
        config: Optional[ClientConfig] = None
    ) -> "VulnClient":
        """Create a client for an http(s) or file database URL.

        Args:
            url: Database URL; defaults to config.database_url
            config: Client configuration; defaults to ClientConfig.from_env()
        """
        config = config or ClientConfig.from_env()
        return cls(new_source(url or config.database_url), config)

    @classmethod
    def in_memory(
        cls,
        entries: Iterable[Entry],
        config: Optional[ClientConfig] = None
    ) -> "VulnClient":
        """Create a client serving entries from memory, for tests."""
        return cls(InMemorySource.from_entries(entries), config)

    async def __aenter__(self) -> "VulnClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.source.close()

    async def by_package(self, request: PackageRequest) -> List[Entry]:
        """Return the entries matching request, sorted by ID.

        The module index selects candidate entries cheaply; the candidates
        are then fetched in parallel and filtered on their full ranges
        and packages.

        Args:
            request: Module, package and version to match

        Returns:
            Matching entries; empty if request.module is empty

        Raises:
            SourceError: If a document cannot be fetched
            DataInconsistencyError: If an indexed entry does not exist
            DecodeError: If a document is malformed
        """
        if not request.module:
            return []

        with self._measure("by_package"):
            data = await self._get("by_package", MODULES_KEY)
            ids = self._candidate_ids(data, request)
            if not ids:
                return []
            self.logger.debug(f"{request.module}: fetching {len(ids)} candidate entries")

            async def fetch(vuln_id: str) -> Optional[Entry]:
                entry = await self.by_id(vuln_id)
                if entry is None:
                    raise DataInconsistencyError(vuln_id, MODULES_KEY)
                return entry if is_affected(entry, request) else None

            results = await gather_limited(fetch, ids, self.config.package_concurrency)

        entries = [entry for entry in results if entry is not None]
        entries.sort(key=lambda entry: entry.id)
        return entries

    def _candidate_ids(self, data: bytes, request: PackageRequest) -> List[str]:
        """Return the IDs under request.module that may affect request.version."""
        ids: List[str] = []
        for module in iter_modules(data):
            if module.path != request.module:
                continue
            for vuln in module.vulns:
                # A full entry is needed if there is no fix, or the
                # requested version precedes the latest fix.
                if vuln.id not in ids and is_before_fix(request.version, vuln.fixed, request.module):
                    ids.append(vuln.id)
            # Each module appears in the index at most once.
            break
        return ids

    async def lookup(self, vuln_id: str) -> EntryLookup:
        """Look up the entry with vuln_id, telling absence apart from failure.

        Raises:
            DecodeError: If the entry document is malformed
        """
        key = entry_key(vuln_id)
        try:
            data = await self._get("by_id", key)
        except SourceNotFoundError:
            return EntryLookup(LookupStatus.ABSENT)
        except SourceError as e:
            return EntryLookup(LookupStatus.ERROR, error=e)
        return EntryLookup(LookupStatus.FOUND, entry=_decode_entry(key, data))

    async def by_id(self, vuln_id: str) -> Optional[Entry]:
        """Return the entry with vuln_id, or None if there isn't one.

        Raises:
            SourceError: If the entry cannot be fetched for another reason
            DecodeError: If the entry document is malformed
        """
        result = await self.lookup(vuln_id)
        if result.error is not None:
            raise result.error
        return result.entry

    async def by_alias(self, alias: str) -> str:
        """Return the ID of the first entry that has alias.

        Raises:
            AliasNotFoundError: If no entry has the alias
            SourceError: If the index cannot be fetched
        """
        with self._measure("by_alias"):
            data = await self._get("by_alias", VULNS_KEY)
            for vuln in iter_vulns(data):
                if alias in vuln.aliases:
                    return vuln.id
        raise AliasNotFoundError(alias)

    async def ids(self) -> List[str]:
        """Return the IDs of all entries in the database, in index order."""
        data = await self._get("ids", VULNS_KEY)
        return [vuln.id for vuln in iter_vulns(data)]

    async def entries(self) -> List[Entry]:
        """Return all entries in the database, in index order.

        Raises:
            SourceError: If any document cannot be fetched
            DataInconsistencyError: If an indexed entry does not exist
        """
        with self._measure("entries"):
            ids = await self.ids()

            async def fetch(vuln_id: str) -> Entry:
                entry = await self.by_id(vuln_id)
                if entry is None:
                    raise DataInconsistencyError(vuln_id, VULNS_KEY)
                return entry

            entries = await gather_limited(fetch, ids, self.config.entries_concurrency)
        self.logger.debug(f"Fetched {len(entries)} entries")
        return entries

    async def _get(self, operation: str, key: str) -> bytes:
        try:
            return await self.source.get(key)
        except SourceError as e:
            raise type(e)(operation, key, e.cause or e) from e

    def _measure(self, name: str):
        if self.performance_monitor is None:
            return nullcontext()
        return self.performance_monitor.measure(name)


def _decode_entry(key: str, data: bytes) -> Entry:
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"{key}: {e}") from e
    return Entry.from_dict(raw)
