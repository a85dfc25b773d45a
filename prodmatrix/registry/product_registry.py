"""In-memory product registry.

Built once at startup (usually by ``prodmatrix.catalog.load_catalog``) and
read afterwards. Lookups return immutable ``ResolvedProduct`` views, so two
callers asking for different versions of the same product never interfere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from prodmatrix.errors import NotFoundError
from prodmatrix.registry.models import NOT_AVAILABLE, PropertyName
from prodmatrix.registry.product import Declarations, ProductDefinition, ResolvedProduct
from prodmatrix.versioning import LATEST, normalize_version

logger = logging.getLogger(__name__)


class ProductRegistry:
    """Product definitions keyed by product key, in registration order."""

    def __init__(self):
        self._entries: dict[str, ProductDefinition] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ProductDefinition]:
        return iter(self._entries.values())

    def register(self, key: str, declarations: Declarations = ()) -> ProductDefinition:
        """Create a product definition and store it under *key*.

        A later registration for the same key replaces the earlier one.

        Raises:
            ConfigurationError: if the declarations are invalid.
        """
        definition = ProductDefinition(key, declarations)
        if key in self._entries:
            logger.debug("Replacing product definition for %s", key)
        else:
            logger.debug("Registered product %s", key)
        self._entries[key] = definition
        return definition

    def keys(self) -> list[str]:
        return list(self._entries)

    def get_definition(self, key: str) -> ProductDefinition:
        try:
            return self._entries[key]
        except KeyError:
            raise NotFoundError(key) from None

    def lookup(self, key: str, version: str = LATEST) -> ResolvedProduct:
        """Find a product and bind *version* to it.

        ``"latest"`` (any case) is replaced by a version higher than any real
        release, so version rules pick their newest branch. Other strings are
        kept as given and only parsed when a computed property is read.

        Raises:
            NotFoundError: if *key* is not registered.
        """
        definition = self.get_definition(key)
        return definition.bind(normalize_version(version))

    def available_on_downloads_site(self, version: str = LATEST) -> dict[str, ProductDefinition]:
        """Products that have a public page on the downloads site.

        Args:
            version: Version at which a computed downloads URL is evaluated.
        """
        bound = normalize_version(version)
        return {
            key: definition
            for key, definition in self._entries.items()
            if definition.resolve(PropertyName.DOWNLOADS_PRODUCT_PAGE_URL, bound) is not NOT_AVAILABLE
        }
