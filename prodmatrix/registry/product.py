"""Product definitions and their version-bound views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Union

from prodmatrix.errors import ConfigurationError, MalformedVersionError
from prodmatrix.registry.models import (
    UNSET,
    Computed,
    Constant,
    PropertyName,
    PropertyValue,
    Resolved,
    Unset,
)
from prodmatrix.versioning import LATEST_VERSION, MINIMUM_VERSION, parse_version

DOWNLOADS_SITE_URL = "https://downloads.chef.io/"
GITHUB_ORG = "chef"
INSTALL_ROOT = "/opt/"

Declarations = Union[
    Mapping[Union[PropertyName, str], PropertyValue],
    Iterable[tuple[Union[PropertyName, str], PropertyValue]],
]


class ProductDefinition:
    """One product's property declarations.

    Every property is a ``Constant``, a ``Computed`` rule or ``Unset``.
    Reading a property always takes the version explicitly; the definition
    holds no per-lookup state and can be shared freely.
    """

    def __init__(self, key: str, declarations: Declarations = ()):
        self._key = key
        self._properties: dict[PropertyName, PropertyValue] = {name: UNSET for name in PropertyName}

        declared: dict[PropertyName, set[type]] = {}
        items = declarations.items() if isinstance(declarations, Mapping) else declarations
        for raw_name, value in items:
            name = PropertyName.coerce(raw_name)
            kinds = declared.setdefault(name, set())
            kinds.add(type(value))
            if {Constant, Computed} <= kinds:
                raise ConfigurationError(
                    f"Can not use a constant and a version rule at the same time for "
                    f"{name.value} of product '{key}'."
                )
            self._properties[name] = value

    def __repr__(self) -> str:
        return f"ProductDefinition({self._key!r})"

    @property
    def key(self) -> str:
        return self._key

    @property
    def properties(self) -> Mapping[PropertyName, PropertyValue]:
        return dict(self._properties)

    def declaration(self, name: PropertyName | str) -> PropertyValue:
        return self._properties[PropertyName.coerce(name)]

    def resolve(self, name: PropertyName | str, version: str | None = None) -> Resolved:
        """Return the value of *name* at *version*.

        Constants never look at the version. Computed properties parse it,
        so a malformed (or missing) version only fails here.

        Raises:
            MalformedVersionError: if a computed property is read and
                *version* can not be parsed.
        """
        name = PropertyName.coerce(name)
        value = self._properties[name]

        if isinstance(value, Constant):
            return value.value
        if isinstance(value, Computed):
            if version is None:
                raise MalformedVersionError(version)
            return value.resolver(parse_version(version))
        return self._default_for(name, version)

    def bind(self, version: str) -> ResolvedProduct:
        """Return a view of this product at *version* (parsed lazily)."""
        return ResolvedProduct(definition=self, version=version)

    def known_omnibus_projects(self) -> list[str]:
        """All omnibus project names this product has used.

        Evaluates ``omnibus_project`` at the lowest and the "latest"
        versions, then adds every reachable value of the rule it derives
        from, so rules with more than two branches are fully covered.
        """
        projects: list[Resolved] = [
            self.resolve(PropertyName.OMNIBUS_PROJECT, v) for v in (MINIMUM_VERSION, LATEST_VERSION)
        ]
        projects.extend(self._omnibus_candidates())

        unique: list[str] = []
        for project in projects:
            if isinstance(project, str) and project not in unique:
                unique.append(project)
        return unique

    def _omnibus_candidates(self) -> tuple[Resolved, ...]:
        source = self._properties[PropertyName.OMNIBUS_PROJECT]
        if isinstance(source, Unset):
            source = self._properties[PropertyName.PACKAGE_NAME]
        if isinstance(source, Computed) and source.candidates:
            return source.candidates
        return ()

    def _default_for(self, name: PropertyName, version: str | None) -> Resolved:
        if name is PropertyName.INSTALL_PATH:
            package = self.resolve(PropertyName.PACKAGE_NAME, version)
            return f"{INSTALL_ROOT}{package}" if _has_text(package) else None
        if name is PropertyName.OMNIBUS_PROJECT:
            return self.resolve(PropertyName.PACKAGE_NAME, version)
        if name is PropertyName.DOWNLOADS_PRODUCT_PAGE_URL:
            return f"{DOWNLOADS_SITE_URL}{self._key}"
        if name is PropertyName.GITHUB_REPO:
            return f"{GITHUB_ORG}/{self._key}"
        if name is PropertyName.PRODUCT_KEY:
            return self._key
        return None


@dataclass(frozen=True)
class ResolvedProduct:
    """A product definition paired with the version it was looked up at."""

    definition: ProductDefinition
    version: str

    @property
    def key(self) -> str:
        return self.definition.key

    def get(self, name: PropertyName | str) -> Resolved:
        return self.definition.resolve(name, self.version)

    def as_dict(self) -> dict[str, Resolved]:
        """Every property resolved at this version, keyed by property name."""
        return {name.value: self.get(name) for name in PropertyName}

    def known_omnibus_projects(self) -> list[str]:
        return self.definition.known_omnibus_projects()

    @property
    def config_file(self) -> Resolved:
        return self.get(PropertyName.CONFIG_FILE)

    @property
    def ctl_command(self) -> Resolved:
        return self.get(PropertyName.CTL_COMMAND)

    @property
    def product_key(self) -> Resolved:
        return self.get(PropertyName.PRODUCT_KEY)

    @property
    def package_name(self) -> Resolved:
        return self.get(PropertyName.PACKAGE_NAME)

    @property
    def product_name(self) -> Resolved:
        return self.get(PropertyName.PRODUCT_NAME)

    @property
    def install_path(self) -> Resolved:
        return self.get(PropertyName.INSTALL_PATH)

    @property
    def omnibus_project(self) -> Resolved:
        return self.get(PropertyName.OMNIBUS_PROJECT)

    @property
    def github_repo(self) -> Resolved:
        return self.get(PropertyName.GITHUB_REPO)

    @property
    def downloads_product_page_url(self) -> Resolved:
        return self.get(PropertyName.DOWNLOADS_PRODUCT_PAGE_URL)


def _has_text(value: Resolved) -> bool:
    return isinstance(value, str) and bool(value)
