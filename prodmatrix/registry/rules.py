"""Declarative version rules.

A ``VersionRule`` is an ordered list of branches, each pairing a condition on
the version with a value, plus a default. It is callable with a parsed
``Version`` and can therefore be used directly as a ``Computed`` resolver.
The output only changes at branch thresholds, so evaluating the rule at each
threshold and at the first version of every interval between them yields
exactly the values some version can reach (``candidates``). Sampling an
arbitrary resolver at a few versions can not guarantee that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from semver import Version

from prodmatrix.errors import ConfigurationError, MalformedVersionError
from prodmatrix.registry.models import Computed, Resolved
from prodmatrix.versioning import FLOOR_VERSION, next_version, parse_version


class Comparison(Enum):
    """How a branch compares the version against its thresholds."""

    BELOW = "below"  # v < X
    ABOVE = "above"  # v > X
    AT_LEAST = "at_least"  # v >= X
    BETWEEN = "between"  # X < v < Y


@dataclass(frozen=True)
class Branch:
    """One ``condition -> value`` arm of a version rule."""

    comparison: Comparison
    thresholds: tuple[Version, ...]
    value: Resolved

    def matches(self, version: Version) -> bool:
        if self.comparison is Comparison.BELOW:
            return version < self.thresholds[0]
        if self.comparison is Comparison.ABOVE:
            return version > self.thresholds[0]
        if self.comparison is Comparison.AT_LEAST:
            return version >= self.thresholds[0]
        low, high = self.thresholds
        return low < version < high

    @classmethod
    def build(cls, comparison: Comparison | str, thresholds, value: Resolved) -> Branch:
        """Create a branch from threshold strings.

        A single value is accepted for the one-threshold comparisons;
        ``between`` needs exactly two.

        Raises:
            ConfigurationError: on an unknown comparison, a wrong number of
                thresholds, or a threshold that is not a valid version.
        """
        try:
            comparison = Comparison(comparison)
        except ValueError:
            raise ConfigurationError(f"Unknown version comparison: {comparison!r}") from None

        if not isinstance(thresholds, (list, tuple)):
            thresholds = [thresholds]
        expected = 2 if comparison is Comparison.BETWEEN else 1
        if len(thresholds) != expected:
            raise ConfigurationError(
                f"'{comparison.value}' takes {expected} version(s), got {len(thresholds)}"
            )

        try:
            parsed = tuple(parse_version(str(t)) for t in thresholds)
        except MalformedVersionError as exc:
            raise ConfigurationError(f"Invalid threshold in '{comparison.value}': {exc}") from exc

        if comparison is Comparison.BETWEEN and not parsed[0] < parsed[1]:
            raise ConfigurationError(
                f"'between' bounds must be increasing: {thresholds[0]} >= {thresholds[1]}"
            )
        return cls(comparison=comparison, thresholds=parsed, value=value)


@dataclass(frozen=True)
class VersionRule:
    """First matching branch wins; otherwise ``default``."""

    branches: tuple[Branch, ...] = field(default_factory=tuple)
    default: Resolved = None

    def __call__(self, version: Version) -> Resolved:
        for branch in self.branches:
            if branch.matches(version):
                return branch.value
        return self.default

    @property
    def candidates(self) -> tuple[Resolved, ...]:
        """Every value some version can produce, in ascending version order.

        Branches shadowed by earlier ones contribute nothing.
        """
        seen: list[Resolved] = []
        for point in self._sample_points():
            value = self(point)
            if value not in seen:
                seen.append(value)
        return tuple(seen)

    def as_property(self) -> Computed:
        """Wrap the rule as a computed property that knows its candidates."""
        return Computed(self, self.candidates)

    def _sample_points(self) -> list[Version]:
        thresholds = {t for branch in self.branches for t in branch.thresholds}
        points = [FLOOR_VERSION]
        for threshold in sorted(thresholds):
            points.extend([threshold, next_version(threshold)])
        return points

    @classmethod
    def threshold(cls, version: str, before: Resolved, after: Resolved) -> VersionRule:
        """The common two-branch rule: *before* below *version*, else *after*."""
        return cls(branches=(Branch.build(Comparison.BELOW, version, before),), default=after)
