"""OSV record schema for Go vulnerability databases.

Full entries are served as ``ID/<id>.json``. The two index documents
(``index/modules.json`` and ``index/vulns.json``) hold lightweight
summaries that are only used to decide which entries to fetch.

Field names are matched case-insensitively, so both the current
lower-case index format and the older ``{"Path": ..., "Vulns": ...}``
spelling decode the same way.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..errors import DecodeError

RANGE_TYPE_SEMVER = "SEMVER"
GO_ECOSYSTEM = "Go"


def _get(data: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Look up a JSON field, ignoring case."""
    if name in data:
        return data[name]
    lowered = name.lower()
    for key, value in data.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return default


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"{what}: expected a JSON object, got {type(data).__name__}")
    return data


def _require_list(data: Any, what: str) -> List[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(f"{what}: expected a JSON array, got {type(data).__name__}")
    return data


def _require_str(data: Any, what: str) -> str:
    if data is None:
        return ""
    if not isinstance(data, str):
        raise DecodeError(f"{what}: expected a string, got {type(data).__name__}")
    return data


def _str_tuple(data: Any, what: str) -> Tuple[str, ...]:
    return tuple(_require_str(item, what) for item in _require_list(data, what))


@dataclass(frozen=True)
class RangeEvent:
    """One step of an affected range: a version introducing and/or fixing it."""

    introduced: str = ""
    fixed: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "RangeEvent":
        data = _require_object(data, "range event")
        return cls(
            introduced=_require_str(_get(data, "introduced"), "introduced"),
            fixed=_require_str(_get(data, "fixed"), "fixed"),
        )

    def to_dict(self) -> Dict[str, str]:
        out = {}
        if self.introduced:
            out["introduced"] = self.introduced
        if self.fixed:
            out["fixed"] = self.fixed
        return out


@dataclass(frozen=True)
class Range:
    """A typed sequence of range events."""

    type: str = RANGE_TYPE_SEMVER
    events: Tuple[RangeEvent, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Range":
        data = _require_object(data, "range")
        return cls(
            type=_require_str(_get(data, "type"), "range type"),
            events=tuple(
                RangeEvent.from_dict(event)
                for event in _require_list(_get(data, "events"), "range events")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "events": [event.to_dict() for event in self.events],
        }


@dataclass(frozen=True)
class Package:
    """An affected package and, optionally, its vulnerable symbols."""

    path: str
    symbols: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Package":
        data = _require_object(data, "package")
        return cls(
            path=_require_str(_get(data, "path"), "package path"),
            symbols=_str_tuple(_get(data, "symbols"), "package symbols"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"path": self.path}
        if self.symbols:
            out["symbols"] = list(self.symbols)
        return out


@dataclass(frozen=True)
class EcosystemSpecific:
    """Go-specific affected data: the list of vulnerable packages."""

    packages: Tuple[Package, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "EcosystemSpecific":
        if data is None:
            return cls()
        data = _require_object(data, "ecosystem_specific")
        raw = _get(data, "imports")
        if raw is None:
            raw = _get(data, "packages")
        return cls(
            packages=tuple(
                Package.from_dict(item)
                for item in _require_list(raw, "ecosystem_specific imports")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"imports": [package.to_dict() for package in self.packages]}


@dataclass(frozen=True)
class Affected:
    """The ranges and packages of one module affected by an entry."""

    module_path: str
    ranges: Tuple[Range, ...] = ()
    ecosystem_specific: EcosystemSpecific = field(default_factory=EcosystemSpecific)

    @property
    def packages(self) -> Tuple[Package, ...]:
        return self.ecosystem_specific.packages

    @classmethod
    def from_dict(cls, data: Any) -> "Affected":
        data = _require_object(data, "affected")
        package = _get(data, "package")
        if package is not None:
            path = _get(_require_object(package, "affected package"), "name")
        else:
            module = _require_object(_get(data, "module", {}), "affected module")
            path = _get(module, "path")
        return cls(
            module_path=_require_str(path, "affected module path"),
            ranges=tuple(
                Range.from_dict(item)
                for item in _require_list(_get(data, "ranges"), "affected ranges")
            ),
            ecosystem_specific=EcosystemSpecific.from_dict(
                _get(data, "ecosystem_specific")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "package": {"name": self.module_path, "ecosystem": GO_ECOSYSTEM},
            "ranges": [item.to_dict() for item in self.ranges],
        }
        if self.packages:
            out["ecosystem_specific"] = self.ecosystem_specific.to_dict()
        return out


@dataclass(frozen=True)
class Reference:
    type: str
    url: str

    @classmethod
    def from_dict(cls, data: Any) -> "Reference":
        data = _require_object(data, "reference")
        return cls(
            type=_require_str(_get(data, "type"), "reference type"),
            url=_require_str(_get(data, "url"), "reference url"),
        )


@dataclass(frozen=True)
class Entry:
    """A full OSV vulnerability entry."""

    id: str
    aliases: Tuple[str, ...] = ()
    summary: str = ""
    details: str = ""
    published: Optional[str] = None
    modified: Optional[str] = None
    withdrawn: Optional[str] = None
    affected: Tuple[Affected, ...] = ()
    references: Tuple[Reference, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Entry":
        """Decode an entry from its JSON object.

        Args:
            data: Parsed JSON document

        Returns:
            Decoded entry

        Raises:
            DecodeError: If the document does not have the OSV shape
        """
        data = _require_object(data, "entry")
        entry_id = _require_str(_get(data, "id"), "entry id")
        if not entry_id:
            raise DecodeError("entry: missing id")
        return cls(
            id=entry_id,
            aliases=_str_tuple(_get(data, "aliases"), "entry aliases"),
            summary=_require_str(_get(data, "summary"), "entry summary"),
            details=_require_str(_get(data, "details"), "entry details"),
            published=_get(data, "published"),
            modified=_get(data, "modified"),
            withdrawn=_get(data, "withdrawn"),
            affected=tuple(
                Affected.from_dict(item)
                for item in _require_list(_get(data, "affected"), "entry affected")
            ),
            references=tuple(
                Reference.from_dict(item)
                for item in _require_list(_get(data, "references"), "entry references")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id}
        for name in ("published", "modified", "withdrawn"):
            value = getattr(self, name)
            if value:
                out[name] = value
        if self.aliases:
            out["aliases"] = list(self.aliases)
        if self.summary:
            out["summary"] = self.summary
        if self.details:
            out["details"] = self.details
        out["affected"] = [item.to_dict() for item in self.affected]
        if self.references:
            out["references"] = [
                {"type": ref.type, "url": ref.url} for ref in self.references
            ]
        return out


@dataclass(frozen=True)
class ModuleVuln:
    """An entry ID listed under a module in the module index."""

    id: str
    fixed: str = ""
    modified: Optional[str] = None


@dataclass(frozen=True)
class ModuleMeta:
    """A module index record: a module path and the entries that affect it."""

    path: str
    vulns: Tuple[ModuleVuln, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ModuleMeta":
        data = _require_object(data, "module index record")
        vulns = []
        for item in _require_list(_get(data, "vulns"), "module index vulns"):
            item = _require_object(item, "module index vuln")
            vulns.append(ModuleVuln(
                id=_require_str(_get(item, "id"), "module index vuln id"),
                fixed=_require_str(_get(item, "fixed"), "module index vuln fixed"),
                modified=_get(item, "modified"),
            ))
        return cls(
            path=_require_str(_get(data, "path"), "module index path"),
            vulns=tuple(vulns),
        )

    def to_dict(self) -> Dict[str, Any]:
        vulns = []
        for vuln in self.vulns:
            item: Dict[str, Any] = {"id": vuln.id}
            if vuln.modified:
                item["modified"] = vuln.modified
            if vuln.fixed:
                item["fixed"] = vuln.fixed
            vulns.append(item)
        return {"path": self.path, "vulns": vulns}


@dataclass(frozen=True)
class VulnMeta:
    """A global index record: an entry ID and its aliases."""

    id: str
    aliases: Tuple[str, ...] = ()
    modified: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "VulnMeta":
        data = _require_object(data, "vuln index record")
        return cls(
            id=_require_str(_get(data, "id"), "vuln index id"),
            aliases=_str_tuple(_get(data, "aliases"), "vuln index aliases"),
            modified=_get(data, "modified"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id}
        if self.modified:
            out["modified"] = self.modified
        if self.aliases:
            out["aliases"] = list(self.aliases)
        return out
