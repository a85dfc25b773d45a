"""Registry data models — property names, markers and property values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from semver import Version

from prodmatrix.errors import ConfigurationError


class PropertyName(Enum):
    """The fixed set of properties a product can declare."""

    CONFIG_FILE = "config_file"
    CTL_COMMAND = "ctl_command"
    PRODUCT_KEY = "product_key"
    PACKAGE_NAME = "package_name"
    PRODUCT_NAME = "product_name"
    INSTALL_PATH = "install_path"
    OMNIBUS_PROJECT = "omnibus_project"
    GITHUB_REPO = "github_repo"
    DOWNLOADS_PRODUCT_PAGE_URL = "downloads_product_page_url"

    @classmethod
    def coerce(cls, name: PropertyName | str) -> PropertyName:
        """Accept either a member or its string value."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(f"Unknown product property: {name!r}") from None


class Marker(Enum):
    """Symbolic property values that are neither strings nor unset."""

    NOT_AVAILABLE = "not_available"  # No public downloads page

    def __str__(self) -> str:
        return self.value


NOT_AVAILABLE = Marker.NOT_AVAILABLE

# What a property resolves to: a literal, a marker, or no value.
Resolved = Union[str, Marker, None]

Resolver = Callable[[Version], Any]


@dataclass(frozen=True)
class Constant:
    """A property whose value does not depend on the version."""

    value: Resolved


@dataclass(frozen=True)
class Computed:
    """A property computed from the bound version.

    ``candidates`` lists every value ``resolver`` can return, when known.
    It lets callers enumerate outputs without sampling versions.
    """

    resolver: Resolver
    candidates: tuple[Resolved, ...] | None = None


@dataclass(frozen=True)
class Unset:
    """No explicit value; resolution falls back to the property's default."""


PropertyValue = Union[Constant, Computed, Unset]

UNSET = Unset()


def declare(
    value: Resolved = None,
    resolver: Resolver | None = None,
    *,
    candidates: tuple[Resolved, ...] | None = None,
    name: str = "",
) -> PropertyValue:
    """Build a property value from a literal, a resolver, or neither.

    *candidates* is kept with a resolver; see ``Computed``.

    Raises:
        ConfigurationError: if both a literal and a resolver are given.
    """
    if resolver is not None and value is not None:
        label = f" for {name}" if name else ""
        raise ConfigurationError(f"Can not use a constant and a version rule at the same time{label}.")
    if resolver is not None:
        return Computed(resolver, candidates)
    if value is not None:
        return Constant(value)
    return UNSET
