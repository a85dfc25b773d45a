"""Markdown product matrix — the table published as ``PRODUCT_MATRIX.md``.

Lists every product name next to the key used to look it up. Names are read
at ``latest`` so renamed products show their current name.
"""

from __future__ import annotations

from pathlib import Path

from prodmatrix.registry.product_registry import ProductRegistry

_HEADER = """\
# Product Matrix

This matrix lists the products known to prodmatrix and the key to use when
looking them up.

| Product | Product Key |
| ------- | ----------- |
"""

_FOOTER = """
Do not modify this file manually. It is generated from the product catalog
with `prodmatrix matrix -o PRODUCT_MATRIX.md`.
"""


def render_product_matrix(registry: ProductRegistry) -> str:
    """Render *registry* as a Markdown document, rows sorted by key."""
    lines: list[str] = []
    for key in sorted(registry.keys()):
        product = registry.lookup(key)
        name = product.product_name or key
        lines.append(f"| {_escape(str(name))} | {key} |")

    return _HEADER + "\n".join(lines) + "\n" + _FOOTER


def write_product_matrix(registry: ProductRegistry, path: str | Path) -> Path:
    """Write the rendered matrix to *path*, creating parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_product_matrix(registry), encoding="utf-8")
    return path


def _escape(cell: str) -> str:
    return cell.replace("|", "\\|")
