"""Catalog loader — reads a products YAML file into a ProductRegistry.

Catalog format::

    products:
      chef:
        product_name: Chef Client
        package_name: chef
      manage:
        package_name:
          rules:
            - below: "2.0.0"
              value: opscode-manage
          default: chef-manage
        downloads_product_page_url: {marker: not_available}

A property is either a plain string, ``{value: <string>}``,
``{marker: <marker>}`` or ``{rules: [...], default: <string>}``. Each rule
has exactly one of ``below``, ``above``, ``at_least`` or ``between`` plus a
``value``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from prodmatrix.errors import ConfigurationError
from prodmatrix.registry.models import Marker, PropertyName, PropertyValue, declare
from prodmatrix.registry.product_registry import ProductRegistry
from prodmatrix.registry.rules import Branch, Comparison, VersionRule

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = Path(__file__).parent / "data" / "products.yaml"

VALID_PROPERTIES = {p.value for p in PropertyName}
VALID_MARKERS = {m.value for m in Marker}
VALID_COMPARISONS = {c.value for c in Comparison}
PROPERTY_KEYS = {"value", "marker", "rules", "default"}


def read_catalog(path: str | Path | None = None) -> dict:
    """Read the raw catalog document from *path* (default: packaged catalog)."""
    path = Path(path) if path else DEFAULT_CATALOG
    if not path.exists():
        raise ConfigurationError(f"Catalog not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


def validate_catalog(data: dict) -> list[str]:
    """Validate a parsed catalog document.

    Returns a list of issues found. Empty list means valid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("products"), dict):
        return ["Missing top-level 'products' mapping"]

    issues: list[str] = []
    for key, props in data["products"].items():
        if not isinstance(key, str) or not key:
            issues.append(f"Product key {key!r} must be a non-empty string")
            continue
        if not isinstance(props, dict):
            issues.append(f"{key}: expected a mapping of properties, got {type(props).__name__}")
            continue
        for prop, raw in props.items():
            if prop not in VALID_PROPERTIES:
                issues.append(f"{key}: unknown property '{prop}'")
                continue
            try:
                _build_property(raw, f"{key}.{prop}")
            except ConfigurationError as e:
                issues.append(f"{key}.{prop}: {e}")

    return issues


def build_registry(data: dict) -> ProductRegistry:
    """Build a registry from a parsed catalog document.

    Raises:
        ConfigurationError: listing every issue if the document is invalid.
    """
    issues = validate_catalog(data)
    if issues:
        raise ConfigurationError(f"Invalid catalog ({len(issues)} issue(s))", issues=issues)

    registry = ProductRegistry()
    for key, props in data["products"].items():
        registry.register(
            key,
            [(prop, _build_property(raw, f"{key}.{prop}")) for prop, raw in props.items()],
        )
    return registry


def load_catalog(path: str | Path | None = None) -> ProductRegistry:
    """Read, validate and build the catalog at *path* (default: packaged)."""
    data = read_catalog(path)
    registry = build_registry(data)
    logger.debug("Loaded %d products from %s", len(registry), path or DEFAULT_CATALOG)
    return registry


def _build_property(raw, label: str) -> PropertyValue:
    if isinstance(raw, str):
        return declare(raw, name=label)
    if not isinstance(raw, dict):
        raise ConfigurationError(f"expected a string or mapping, got {type(raw).__name__}")

    unknown = set(raw) - PROPERTY_KEYS
    if unknown:
        raise ConfigurationError(f"unknown keys {sorted(unknown)}")
    if "value" in raw and "marker" in raw:
        raise ConfigurationError("'value' and 'marker' are mutually exclusive")

    constant = raw.get("value")
    if constant is not None and not isinstance(constant, str):
        raise ConfigurationError(f"'value' must be a string, got {type(constant).__name__}")
    if "marker" in raw:
        constant = _build_marker(raw["marker"])

    rule = _build_rule(raw) if "rules" in raw else None
    if rule is None and "default" in raw:
        raise ConfigurationError("'default' is only allowed together with 'rules'")

    candidates = rule.candidates if rule is not None else None
    return declare(constant, rule, candidates=candidates, name=label)


def _build_marker(raw) -> Marker:
    if raw not in VALID_MARKERS:
        raise ConfigurationError(f"unknown marker {raw!r}; expected one of {sorted(VALID_MARKERS)}")
    return Marker(raw)


def _build_rule(raw: dict) -> VersionRule:
    rules = raw["rules"]
    if not isinstance(rules, list) or not rules:
        raise ConfigurationError("'rules' must be a non-empty list")

    branches = []
    for i, rule in enumerate(rules):
        if not isinstance(rule, dict):
            raise ConfigurationError(f"rule {i + 1} must be a mapping")
        comparisons = [k for k in rule if k in VALID_COMPARISONS]
        if len(comparisons) != 1:
            raise ConfigurationError(
                f"rule {i + 1} needs exactly one of {sorted(VALID_COMPARISONS)}"
            )
        if not isinstance(rule.get("value"), str):
            raise ConfigurationError(f"rule {i + 1} is missing a string 'value'")
        extra = set(rule) - {comparisons[0], "value"}
        if extra:
            raise ConfigurationError(f"rule {i + 1} has unknown keys {sorted(extra)}")
        comparison = comparisons[0]
        branches.append(Branch.build(comparison, rule[comparison], rule["value"]))

    default = raw.get("default")
    if default is not None and not isinstance(default, str):
        raise ConfigurationError(f"'default' must be a string, got {type(default).__name__}")
    return VersionRule(branches=tuple(branches), default=default)
