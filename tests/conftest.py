"""Shared fixtures for vulnmatch tests."""

import pytest

from vulnmatch.osv.models import (
    Affected,
    EcosystemSpecific,
    Entry,
    Package,
    Range,
    RangeEvent,
)


def semver_range(*events: RangeEvent) -> Range:
    return Range(type="SEMVER", events=tuple(events))


def packages(*paths: str) -> EcosystemSpecific:
    return EcosystemSpecific(packages=tuple(Package(path=path) for path in paths))


@pytest.fixture
def bad_entry() -> Entry:
    """Entry affecting bad.com before v1.2.3 and every version of unfixable.com."""
    return Entry(
        id="GO-1999-0001",
        aliases=("CVE-1999-1111",),
        details="bad.com is bad",
        affected=(
            Affected(
                module_path="bad.com",
                ranges=(semver_range(RangeEvent(introduced="0"), RangeEvent(fixed="1.2.3")),),
                ecosystem_specific=packages("bad.com", "bad.com/bad"),
            ),
            Affected(
                module_path="unfixable.com",
                ranges=(semver_range(RangeEvent(introduced="0")),),
                ecosystem_specific=packages("unfixable.com"),
            ),
        ),
    )


@pytest.fixture
def bad_pkg_entry() -> Entry:
    """Entry affecting only bad.com/pkg before v1.2.0."""
    return Entry(
        id="GO-1999-0002",
        aliases=("CVE-1999-2222", "GHSA-xxxx-yyyy-zzzz"),
        affected=(
            Affected(
                module_path="bad.com",
                ranges=(semver_range(RangeEvent(introduced="0"), RangeEvent(fixed="1.2.0")),),
                ecosystem_specific=packages("bad.com/pkg"),
            ),
        ),
    )


@pytest.fixture
def stdlib_entry() -> Entry:
    """Entry affecting net/http before go1.19.4."""
    return Entry(
        id="GO-2000-0003",
        aliases=("CVE-2000-3333",),
        affected=(
            Affected(
                module_path="stdlib",
                ranges=(semver_range(RangeEvent(introduced="0"), RangeEvent(fixed="1.19.4")),),
                ecosystem_specific=packages("net/http"),
            ),
        ),
    )


@pytest.fixture
def entries(bad_entry, bad_pkg_entry, stdlib_entry):
    return [bad_entry, bad_pkg_entry, stdlib_entry]
