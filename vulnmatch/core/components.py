"""Describe the packages, modules and symbols affected by an entry."""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ..osv.models import Affected, Entry
from .ranges import collect_range_pairs


@dataclass
class AffectedComponent:
    """A package or module affected by a vulnerability.

    Attributes:
        path: Package path, or module path for module components
        versions: Human-readable affected versions, e.g. "before v1.5"
        exported_symbols: Sorted exported symbols
        unexported_symbols: Sorted unexported symbols
    """

    path: str
    versions: str = ""
    exported_symbols: List[str] = field(default_factory=list)
    unexported_symbols: List[str] = field(default_factory=list)


def versions_description(affected: Affected) -> str:
    """Render the ranges of affected as text.

    Each interval becomes "from L before U", "before U" or "from L";
    intervals are joined with ", " in the order they were declared.
    """
    clauses = []
    for pair in collect_range_pairs(affected):
        if pair.introduced and pair.fixed:
            clauses.append(f"from {pair.introduced} before {pair.fixed}")
        elif pair.fixed:
            clauses.append(f"before {pair.fixed}")
        elif pair.introduced:
            clauses.append(f"from {pair.introduced}")
    return ", ".join(clauses)


def is_exported(symbol: str) -> bool:
    """Report whether a symbol is visible outside its package.

    ``F`` and ``S.F`` are exported; ``g``, ``S.f`` and ``s.F`` are not,
    since a method on an unexported type cannot be reached by name.
    """
    return all(part[:1].isupper() for part in symbol.split("."))


def _symbol_order(symbol: str) -> Tuple[str, str]:
    return symbol.lower(), symbol


def split_symbols(symbols: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split symbols into de-duplicated exported and unexported lists.

    Each list is sorted case-insensitively, ties broken by the exact name.
    """
    exported = set()
    unexported = set()
    for symbol in symbols:
        if is_exported(symbol):
            exported.add(symbol)
        else:
            unexported.add(symbol)
    return sorted(exported, key=_symbol_order), sorted(unexported, key=_symbol_order)


def affected_components(
    entry: Entry
) -> Tuple[List[AffectedComponent], List[AffectedComponent]]:
    """Compute the components affected by entry.

    Modules that list packages produce one component per package, with
    its symbols classified. Modules without package information produce
    a single module component carrying the affected versions.

    Args:
        entry: The vulnerability entry

    Returns:
        Package components and module components, each in declaration order
    """
    packages = []
    modules = []
    for affected in entry.affected:
        if not affected.packages:
            modules.append(AffectedComponent(
                path=affected.module_path,
                versions=versions_description(affected),
            ))
            continue
        for package in affected.packages:
            exported, unexported = split_symbols(package.symbols)
            packages.append(AffectedComponent(
                path=package.path,
                exported_symbols=exported,
                unexported_symbols=unexported,
            ))
    return packages, modules
