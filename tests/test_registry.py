"""Tests for the product registry."""

import pytest

from prodmatrix.errors import NotFoundError
from prodmatrix.registry.models import NOT_AVAILABLE, Constant
from prodmatrix.registry.product_registry import ProductRegistry
from prodmatrix.registry.rules import VersionRule
from prodmatrix.versioning import LATEST_VERSION


def _registry() -> ProductRegistry:
    reg = ProductRegistry()
    reg.register(
        "manage",
        {
            "product_name": Constant("Management Console"),
            "package_name": VersionRule.threshold("2.0.0", "opscode-manage", "chef-manage").as_property(),
        },
    )
    reg.register(
        "sync",
        {
            "package_name": Constant("chef-sync"),
            "downloads_product_page_url": Constant(NOT_AVAILABLE),
        },
    )
    reg.register("chef", {"package_name": Constant("chef")})
    return reg


def test_register_and_keys_in_order():
    reg = _registry()
    assert reg.keys() == ["manage", "sync", "chef"]
    assert len(reg) == 3
    assert "sync" in reg
    assert "nope" not in reg


def test_register_same_key_last_wins():
    reg = _registry()
    reg.register("chef", {"package_name": Constant("chef-client")})
    assert reg.keys() == ["manage", "sync", "chef"]
    assert reg.lookup("chef").package_name == "chef-client"


def test_lookup_binds_version():
    reg = _registry()
    assert reg.lookup("manage", "1.9.0").package_name == "opscode-manage"
    assert reg.lookup("manage", "2.0.0").package_name == "chef-manage"
    assert reg.lookup("manage", "latest").package_name == "chef-manage"


def test_lookup_defaults_to_latest():
    view = _registry().lookup("manage")
    assert view.version == LATEST_VERSION
    assert view.package_name == "chef-manage"


def test_lookup_latest_matches_sentinel_version():
    reg = _registry()
    latest = reg.lookup("manage", "Latest")
    sentinel = reg.lookup("manage", LATEST_VERSION)
    assert latest.version == sentinel.version
    assert latest.as_dict() == sentinel.as_dict()


def test_lookup_unknown_key():
    with pytest.raises(NotFoundError) as exc_info:
        _registry().lookup("nonexistent", "1.0.0")
    assert exc_info.value.key == "nonexistent"
    assert "nonexistent" in str(exc_info.value)


def test_not_found_is_key_error():
    with pytest.raises(KeyError):
        _registry().lookup("nonexistent")


def test_lookups_do_not_share_version():
    reg = _registry()
    old = reg.lookup("manage", "1.0.0")
    new = reg.lookup("manage", "2.1.0")
    assert old.package_name == "opscode-manage"
    assert new.package_name == "chef-manage"
    assert old.definition is new.definition


def test_lookup_with_malformed_version_is_lazy():
    view = _registry().lookup("manage", "not-a-version")
    assert view.product_name == "Management Console"


def test_available_on_downloads_site():
    available = _registry().available_on_downloads_site()
    assert list(available) == ["manage", "chef"]
    assert available["chef"].key == "chef"


def test_available_on_downloads_site_evaluates_rules():
    reg = ProductRegistry()
    reg.register(
        "retired",
        {"downloads_product_page_url": VersionRule.threshold("3.0.0", "https://example.com", NOT_AVAILABLE).as_property()},
    )
    assert "retired" not in reg.available_on_downloads_site()
    assert "retired" in reg.available_on_downloads_site("2.0.0")


def test_get_definition():
    reg = _registry()
    assert reg.get_definition("sync").key == "sync"
    with pytest.raises(NotFoundError):
        reg.get_definition("nope")


def test_iterates_definitions():
    assert [d.key for d in _registry()] == ["manage", "sync", "chef"]


def test_empty_registry():
    reg = ProductRegistry()
    assert reg.keys() == []
    assert reg.available_on_downloads_site() == {}
