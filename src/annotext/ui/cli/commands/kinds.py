"""CLI helper listing the style catalog."""

from __future__ import annotations

from rich import box
from rich.table import Table

from annotext.core.styles import DEFAULT_CATALOG, StyleCatalog

from ..state import get_cli_state


def list_kinds(catalog: StyleCatalog = DEFAULT_CATALOG) -> None:
    """Print a table describing every style kind and its template."""
    console = get_cli_state().console
    table = Table(
        title="Annotation Styles",
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Kind", style="magenta")
    table.add_column("Template", style="green")
    table.add_column("Label")
    table.add_column("Color")

    for entry in catalog.describe():
        table.add_row(entry["kind"], entry["template"], entry["label"], entry["color"])

    console.print(table)


def kinds() -> None:
    """List the annotation styles known to the catalog."""
    list_kinds()


__all__ = ["kinds", "list_kinds"]
