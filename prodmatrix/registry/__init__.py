"""Registry — version-aware product metadata.

The registry provides:
- Declaration: per-product properties as constants or version rules
- Resolution: reading a property at a given version, with derived defaults
- Lookup: finding a product by key and binding a version to it
- Filtering: e.g. products published on the downloads site
"""

from prodmatrix.registry.models import (
    NOT_AVAILABLE,
    Computed,
    Constant,
    Marker,
    PropertyName,
    Unset,
    declare,
)
from prodmatrix.registry.product import ProductDefinition, ResolvedProduct
from prodmatrix.registry.product_registry import ProductRegistry
from prodmatrix.registry.rules import Branch, VersionRule

__all__ = [
    "NOT_AVAILABLE",
    "Branch",
    "Computed",
    "Constant",
    "Marker",
    "ProductDefinition",
    "ProductRegistry",
    "PropertyName",
    "ResolvedProduct",
    "Unset",
    "VersionRule",
    "declare",
]
