"""Version parsing and the symbolic versions understood by the registry.

Ordering is delegated to the ``semver`` library; this module only adds the
"latest" sentinel and converts parse failures into ``MalformedVersionError``.
"""

from __future__ import annotations

from semver import Version

from prodmatrix.errors import MalformedVersionError

LATEST = "latest"

# Compares greater than every realistic release, so "latest" selects the
# newest branch of any version rule without knowing the release history.
LATEST_VERSION = "1000.1000.1000"

# Lowest possible version, used together with LATEST_VERSION to sample rules.
MINIMUM_VERSION = "0.0.0"

# Lowest version semver can express: below every release and prerelease.
FLOOR_VERSION = Version(0, 0, 0, prerelease="0")


def parse_version(version: str) -> Version:
    """Parse *version* into an ordered semantic ``Version``.

    Short forms such as ``"12"`` or ``"1.2"`` are padded with zeros.

    Raises:
        MalformedVersionError: if *version* is not a valid version string.
    """
    if not isinstance(version, str):
        raise MalformedVersionError(version)
    try:
        return Version.parse(version.strip(), optional_minor_and_patch=True)
    except (ValueError, TypeError) as exc:
        raise MalformedVersionError(version) from exc


def next_version(version: Version) -> Version:
    """The smallest version that sorts strictly after *version*.

    Build metadata does not take part in ordering and is dropped.
    """
    if version.prerelease:
        return Version(version.major, version.minor, version.patch, prerelease=f"{version.prerelease}.0")
    return Version(version.major, version.minor, version.patch + 1, prerelease="0")


def normalize_version(version: str | None) -> str:
    """Map ``"latest"`` (any case) or ``None`` to ``LATEST_VERSION``.

    Any other value is returned untouched; it is only parsed when a
    version-dependent property is read.
    """
    if version is None:
        return LATEST_VERSION
    if isinstance(version, str) and version.strip().lower() == LATEST:
        return LATEST_VERSION
    return version
