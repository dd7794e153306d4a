"""In-memory source, mainly for tests and embedding small databases."""

import asyncio
import json
from typing import Dict, Iterable, List

from ..core.ranges import latest_fixed_version
from ..errors import SourceNotFoundError
from ..osv.models import Entry, ModuleMeta, ModuleVuln, Range, VulnMeta
from .base import MODULES_KEY, VULNS_KEY, Source, entry_key


class InMemorySource(Source):
    """Source serving documents from a dictionary."""

    def __init__(self, documents: Dict[str, bytes]) -> None:
        self._documents = dict(documents)

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> "InMemorySource":
        """Publish entries with the same layout as a served database.

        Args:
            entries: Entries to serve

        Returns:
            Source holding both indexes and one document per entry
        """
        entries = list(entries)
        documents: Dict[str, bytes] = {}
        ranges_by_module: Dict[str, Dict[str, List[Range]]] = {}

        for entry in entries:
            documents[entry_key(entry.id)] = _dump(entry.to_dict())
            for affected in entry.affected:
                by_id = ranges_by_module.setdefault(affected.module_path, {})
                by_id.setdefault(entry.id, []).extend(affected.ranges)

        modules = []
        for path in sorted(ranges_by_module):
            vulns = tuple(
                ModuleVuln(id=vuln_id, fixed=latest_fixed_version(ranges))
                for vuln_id, ranges in sorted(ranges_by_module[path].items())
            )
            modules.append(ModuleMeta(path=path, vulns=vulns).to_dict())
        documents[MODULES_KEY] = _dump(modules)

        documents[VULNS_KEY] = _dump([
            VulnMeta(id=entry.id, aliases=entry.aliases, modified=entry.modified).to_dict()
            for entry in entries
        ])
        return cls(documents)

    @property
    def documents(self) -> Dict[str, bytes]:
        """A copy of every document, keyed like the served database."""
        return dict(self._documents)

    async def get(self, key: str) -> bytes:
        await asyncio.sleep(0)  # Yield control, as a real transport would
        try:
            return self._documents[key]
        except KeyError:
            raise SourceNotFoundError("get", key) from None


def _dump(data) -> bytes:
    return json.dumps(data, indent=2).encode("utf-8")
