"""Version comparison for Go modules and the Go standard library.

Module versions are semantic versions, optionally prefixed with ``v``
(``v1.2.3``, ``1.2.3`` and the shorthand ``v1.2`` are all accepted).
Standard library versions are Go toolchain tags such as ``go1.19.3``;
they are converted to semver before being compared.
"""

import re
from typing import Optional

import semver

# Module path used by pkgsite-style callers for the standard library.
STDLIB_MODULE_PATH = "std"
# Module path the vulnerability database files standard library entries under.
OSV_STDLIB_MODULE_PATH = "stdlib"

_GO_TAG_RE = re.compile(r"^go(\d+\.\d+)(\.\d+|)((beta|rc|-pre)(\d+))?$")


def is_stdlib(module_path: str) -> bool:
    return module_path in (STDLIB_MODULE_PATH, OSV_STDLIB_MODULE_PATH)


def canonical_semver(version: str) -> str:
    """Return version with a single leading ``v``, or ``""`` if empty."""
    version = version.strip()
    if not version:
        return ""
    if version.startswith("go"):
        version = version[2:]
    if not version.startswith("v"):
        version = "v" + version
    return version


def parse_semver(version: str) -> Optional[semver.Version]:
    """Parse a Go-style semantic version.

    Returns:
        The parsed version, or None if version is not valid semver
    """
    version = canonical_semver(version)
    if not version:
        return None
    try:
        return semver.Version.parse(version[1:], optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def compare_semver(v1: str, v2: str) -> int:
    """Compare two versions the way Go's semver package does.

    Invalid versions compare equal to each other and less than every
    valid version. Build metadata is ignored.
    """
    p1 = parse_semver(v1)
    p2 = parse_semver(v2)
    if p1 is None and p2 is None:
        return 0
    if p1 is None:
        return -1
    if p2 is None:
        return 1
    return p1.compare(p2)


def less_semver(v1: str, v2: str) -> bool:
    return compare_semver(v1, v2) < 0


def go_tag_to_semver(tag: str) -> str:
    """Convert a Go toolchain tag to a semantic version.

    ``go1.19.3`` becomes ``v1.19.3``, ``go1.20`` becomes ``v1.20.0`` and
    ``go1.21rc2`` becomes ``v1.21.0-rc.2``.

    Returns:
        The semantic version, or ``""`` if tag is not a Go release tag
    """
    if not tag:
        return ""
    tag = tag.split()[0]
    if tag == "go1":
        return "v1.0.0"
    if tag == "go1.0":
        return ""
    match = _GO_TAG_RE.match(tag)
    if match is None:
        return ""
    version = "v" + match.group(1)
    version += match.group(2) or ".0"
    if match.group(3):
        prerelease = match.group(4)
        if not prerelease.startswith("-"):
            version += "-"
        version += f"{prerelease}.{match.group(5)}"
    return version


def module_semver(module_path: str, version: str) -> str:
    """Return the semver form of version for module_path.

    Standard library versions must be Go release tags; any other string
    (an ordinary module pseudo-version, say) yields ``""``.
    """
    if is_stdlib(module_path):
        return go_tag_to_semver(version)
    return canonical_semver(version)
