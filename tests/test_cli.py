"""Tests for the prodmatrix command line interface."""

import json
import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from prodmatrix import __version__
from prodmatrix.cli import main


def _write_catalog(tmpdir: str, products: dict) -> str:
    path = Path(tmpdir) / "products.yaml"
    with open(path, "w") as f:
        yaml.dump({"products": products}, f)
    return str(path)


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_list():
    result = CliRunner().invoke(main, ["list"])
    assert result.exit_code == 0, result.output
    assert "Products (23)" in result.output
    assert "supermarket" in result.output


def test_list_downloads_only():
    result = CliRunner().invoke(main, ["list", "--downloads-only"])
    assert result.exit_code == 0, result.output
    assert "Products (14)" in result.output
    assert "harmony" not in result.output


def test_show_json_at_version():
    result = CliRunner().invoke(main, ["show", "manage", "--version", "1.21.0", "--json"])
    assert result.exit_code == 0, result.output
    values = json.loads(result.stdout)
    assert values["package_name"] == "opscode-manage"
    assert values["ctl_command"] == "opscode-manage-ctl"
    assert values["install_path"] == "/opt/opscode-manage"
    assert values["product_key"] == "manage"


def test_show_marker_in_json():
    result = CliRunner().invoke(main, ["show", "sync", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["downloads_product_page_url"] == "not_available"


def test_show_table():
    result = CliRunner().invoke(main, ["show", "manage"])
    assert result.exit_code == 0, result.output
    assert "chef-manage" in result.output
    assert "package_name" in result.output


def test_show_unknown_product():
    result = CliRunner().invoke(main, ["show", "nope"])
    assert result.exit_code == 1
    assert "Unknown product: nope" in result.output


def test_show_malformed_version():
    result = CliRunner().invoke(main, ["show", "manage", "--version", "two", "--json"])
    assert result.exit_code == 1
    assert "Malformed version" in result.output


def test_omnibus_projects():
    result = CliRunner().invoke(main, ["omnibus-projects", "automate"])
    assert result.exit_code == 0, result.output
    assert "automate: delivery, automate" in result.output


def test_omnibus_projects_unknown():
    result = CliRunner().invoke(main, ["omnibus-projects", "nope"])
    assert result.exit_code == 1


def test_matrix_stdout():
    result = CliRunner().invoke(main, ["matrix"])
    assert result.exit_code == 0, result.output
    assert "| Chef Server | chef-server |" in result.stdout


def test_matrix_to_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "PRODUCT_MATRIX.md"
        result = CliRunner().invoke(main, ["matrix", "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert "| InSpec | inspec |" in target.read_text(encoding="utf-8")


def test_custom_catalog_option():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_catalog(tmpdir, {"widget": {"package_name": "widget"}})
        result = CliRunner().invoke(main, ["--catalog", path, "show", "widget", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["install_path"] == "/opt/widget"


def test_custom_catalog_env():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_catalog(tmpdir, {"widget": {"package_name": "widget"}})
        result = CliRunner().invoke(main, ["list"], env={"PRODMATRIX_CATALOG": path})
        assert result.exit_code == 0, result.output
        assert "Products (1)" in result.output


def test_invalid_catalog_reports_issues():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_catalog(tmpdir, {"widget": {"colour": "blue"}})
        result = CliRunner().invoke(main, ["--catalog", path, "list"])
        assert result.exit_code == 1
        assert "unknown property 'colour'" in result.output


def test_validate_default_catalog():
    result = CliRunner().invoke(main, ["validate"])
    assert result.exit_code == 0, result.output
    assert "Catalog is valid (23 products)" in result.output


def test_validate_broken_catalog():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_catalog(tmpdir, {"widget": {"colour": "blue"}})
        result = CliRunner().invoke(main, ["validate", path])
        assert result.exit_code == 1
        assert "FAILED (1 issue(s))" in result.output


def test_validate_missing_file():
    result = CliRunner().invoke(main, ["validate", "/nonexistent/products.yaml"])
    assert result.exit_code == 1
    assert "Catalog not found" in result.output
