"""prodmatrix CLI — inspect the product catalog from the command line."""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prodmatrix import __version__
from prodmatrix.errors import ProductMatrixError

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--catalog",
    "-c",
    envvar="PRODMATRIX_CATALOG",
    default=None,
    type=click.Path(dir_okay=False),
    help="Product catalog YAML (default: the packaged catalog)",
)
@click.option(
    "--log-level",
    envvar="PRODMATRIX_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Log level (DEBUG, INFO, WARNING, ERROR)",
)
@click.pass_context
def main(ctx: click.Context, catalog: str | None, log_level: str):
    """prodmatrix — version-aware product metadata.

    Look up package names, control commands, config files and install paths
    of a product as they were at a given version.
    """
    from prodmatrix.logging_config import setup_logging

    setup_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["catalog"] = catalog


def _registry(ctx: click.Context):
    from prodmatrix.catalog import load_catalog

    try:
        return load_catalog(ctx.obj.get("catalog"))
    except ProductMatrixError as e:
        _fail(ctx, e)


def _fail(ctx: click.Context, error: ProductMatrixError):
    console.print(f"[red]Error:[/] {escape(str(error))}")
    for issue in getattr(error, "issues", []):
        console.print(f"  [red]x[/] {escape(issue)}")
    ctx.exit(1)


def _display(value) -> str:
    if value is None:
        return "[dim]-[/]"
    return escape(str(value))


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.option("--downloads-only", is_flag=True, help="Only products published on the downloads site")
@click.pass_context
def list_products(ctx: click.Context, downloads_only: bool):
    """List all products in the catalog."""
    registry = _registry(ctx)

    keys = list(registry.available_on_downloads_site()) if downloads_only else registry.keys()

    if not keys:
        console.print("[yellow]No products found.[/]")
        return

    table = Table(title=f"Products ({len(keys)})")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Product")
    table.add_column("Package (latest)")

    for key in keys:
        product = registry.lookup(key)
        table.add_row(key, _display(product.product_name), _display(product.package_name))

    console.print(table)


# ── Show ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("key")
@click.option("--version", "-v", "version", default="latest", show_default=True, help="Product version")
@click.option("--json", "as_json", is_flag=True, help="Print the resolved properties as JSON")
@click.pass_context
def show(ctx: click.Context, key: str, version: str, as_json: bool):
    """Show every property of a product at a given version."""
    registry = _registry(ctx)

    try:
        product = registry.lookup(key, version)
        values = product.as_dict()
    except ProductMatrixError as e:
        _fail(ctx, e)
        return

    if as_json:
        click.echo(json.dumps({k: None if v is None else str(v) for k, v in values.items()}, indent=2))
        return

    table = Table(title=f"{key} @ {version}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value")
    for name, value in values.items():
        table.add_row(name, _display(value))

    console.print(table)


# ── Omnibus projects ─────────────────────────────────────────────────


@main.command(name="omnibus-projects")
@click.argument("key", required=False)
@click.pass_context
def omnibus_projects(ctx: click.Context, key: str | None):
    """List every omnibus project name a product has used."""
    registry = _registry(ctx)

    try:
        definitions = [registry.get_definition(key)] if key else list(registry)
    except ProductMatrixError as e:
        _fail(ctx, e)
        return

    for definition in definitions:
        names = ", ".join(definition.known_omnibus_projects())
        console.print(f"  [cyan]{definition.key}[/]: {escape(names)}")


# ── Matrix ───────────────────────────────────────────────────────────


@main.command()
@click.option("--output", "-o", default=None, help="Write the matrix to this file instead of stdout")
@click.pass_context
def matrix(ctx: click.Context, output: str | None):
    """Render the product matrix as Markdown."""
    from prodmatrix.render.markdown import render_product_matrix, write_product_matrix

    registry = _registry(ctx)

    if output:
        path = write_product_matrix(registry, output)
        console.print(f"[green]Product matrix written to:[/] {path}")
    else:
        click.echo(render_product_matrix(registry), nl=False)


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("catalog_path", required=False)
@click.pass_context
def validate(ctx: click.Context, catalog_path: str | None):
    """Validate a product catalog file.

    CATALOG_PATH defaults to the catalog selected with --catalog.
    """
    from prodmatrix.catalog import read_catalog, validate_catalog

    path = catalog_path or ctx.obj.get("catalog")

    try:
        data = read_catalog(path)
    except ProductMatrixError as e:
        _fail(ctx, e)
        return

    issues = validate_catalog(data)
    if issues:
        console.print(f"[red]Catalog validation FAILED ({len(issues)} issue(s)):[/]")
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        ctx.exit(1)

    count = len(data["products"])
    console.print(f"  [green]v[/] Catalog is valid ({count} products)")


if __name__ == "__main__":
    main()
