"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"

DocumentArgument = Annotated[
    Path,
    typer.Argument(
        metavar="DOCUMENT",
        help="Annotation document (.yml, .yaml, .json or .toml) listing the spans to render.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

TextFileOption = Annotated[
    Path | None,
    typer.Option(
        "--text",
        "-t",
        help="Read the source text from this file instead of the document.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

TagOption = Annotated[
    str | None,
    typer.Option(
        "--tag",
        help="Element tag name used for every marker (default: span).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

SkipInvalidOption = Annotated[
    bool | None,
    typer.Option(
        "--skip-invalid/--strict",
        help="Skip spans with invalid offsets instead of aborting.",
        show_default=False,
        rich_help_panel=RENDERING_PANEL,
    ),
]

CheckOption = Annotated[
    bool,
    typer.Option(
        "--check",
        help="Verify that stripping the markup reproduces the source text.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the markup to this file instead of stdout.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

MarkupArgument = Annotated[
    Path,
    typer.Argument(
        metavar="MARKUP",
        help="File containing markup produced by 'annotext render'.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]
