"""Version range matching for OSV affected ranges."""

from typing import Iterable, List, NamedTuple

from ..osv.models import RANGE_TYPE_SEMVER, Affected, Range
from .versions import (
    canonical_semver,
    compare_semver,
    is_stdlib,
    less_semver,
    module_semver,
)


class RangePair(NamedTuple):
    """A half-open interval ``[introduced, fixed)``.

    An empty ``introduced`` means there is no lower bound, an empty
    ``fixed`` means no fix has been published.
    """

    introduced: str
    fixed: str


def _with_prefix(version: str, prefix: str) -> str:
    return prefix + canonical_semver(version)[1:]


def range_pairs(r: Range, prefix: str = "v") -> List[RangePair]:
    """Pair up the introduced and fixed events of a single range.

    Events are consumed in declaration order. Semver values get prefix
    (``v`` for modules, ``go`` for the standard library); values of other
    range types are returned verbatim.
    """
    is_semver = r.type == RANGE_TYPE_SEMVER
    pairs = []
    lower = ""
    open_interval = False
    for event in r.events:
        if event.introduced:
            # A second introduced before a fixed replaces the first.
            lower = event.introduced
            if lower == "0":
                lower = ""
            elif is_semver:
                lower = _with_prefix(lower, prefix)
            open_interval = True
        if event.fixed:
            fixed = _with_prefix(event.fixed, prefix) if is_semver else event.fixed
            pairs.append(RangePair(lower, fixed))
            lower = ""
            open_interval = False
    if open_interval:
        pairs.append(RangePair(lower, ""))
    return pairs


def collect_range_pairs(affected: Affected) -> List[RangePair]:
    """Return the intervals of every range of affected, in declaration order.

    Unlike a strict introduced/fixed pairing, an introduced event left
    open at the end of a range also yields a pair, ``(introduced, "")``,
    so that "from v1.2" can be shown for a vulnerability with no fix.
    Standard library versions are written as Go tags (``go1.19.4``).
    """
    prefix = "go" if is_stdlib(affected.module_path) else "v"
    pairs = []
    for r in affected.ranges:
        pairs.extend(range_pairs(r, prefix))
    return pairs


def _in_interval(version: str, pair: RangePair) -> bool:
    if pair.introduced and compare_semver(version, pair.introduced) < 0:
        return False
    if pair.fixed and compare_semver(version, pair.fixed) >= 0:
        return False
    return True


def affects(ranges: Iterable[Range], version: str, module_path: str = "") -> bool:
    """Report whether version lies inside any of the semver ranges.

    An empty version is not filtered and always matches. No ranges at
    all, or no semver ranges, means every version is affected.

    For the standard library, version must be a Go release tag; anything
    else never matches.
    """
    if not version:
        return True
    candidate = module_semver(module_path, version)
    if not candidate:
        return False

    ranges = list(ranges)
    if not ranges:
        return True

    semver_present = False
    for r in ranges:
        if r.type != RANGE_TYPE_SEMVER:
            continue
        semver_present = True
        if not r.events:
            return True
        for pair in range_pairs(r):
            if _in_interval(candidate, pair):
                return True
    return not semver_present


def latest_fixed_version(ranges: Iterable[Range]) -> str:
    """Return the highest fixed version of the semver ranges.

    Returns ``""`` when there is no fix, or when any range leaves an
    interval open (the vulnerability was re-introduced after a fix).
    """
    latest = ""
    for r in ranges:
        if r.type != RANGE_TYPE_SEMVER:
            continue
        for pair in range_pairs(r):
            if not pair.fixed:
                return ""
            if not latest or less_semver(latest, pair.fixed):
                latest = pair.fixed
    return latest


def is_before_fix(version: str, fixed: str, module_path: str = "") -> bool:
    """Report whether version may precede fixed.

    Used to pre-filter index records, so it errs towards True: an empty
    fixed version, an empty version, or a version that cannot be read
    for the module all count as before the fix.
    """
    if not fixed:
        return True
    candidate = module_semver(module_path, version)
    return less_semver(candidate, canonical_semver(fixed))
