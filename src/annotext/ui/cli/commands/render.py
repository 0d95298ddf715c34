"""Implementation of the ``annotext render`` and ``annotext strip`` commands."""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape
import typer

from annotext.core.annotator import TextAnnotator
from annotext.core.config import RenderConfig, load_annotation_document
from annotext.core.exceptions import AnnotationError, exception_hint
from annotext.core.sink import extract_text

from .._options import (
    CheckOption,
    DocumentArgument,
    MarkupArgument,
    OutputOption,
    SkipInvalidOption,
    TagOption,
    TextFileOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to read '{path}'.", exception=exc)
        raise typer.Exit(code=1) from exc


def _write_output(markup: str, output: Path | None) -> None:
    if output is None:
        typer.echo(markup, nl=False)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup, encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to write '{output}'.", exception=exc)
        raise typer.Exit(code=1) from exc
    get_cli_state().err_console.print(f"[green]Wrote[/] {escape(str(output))}")


def render(
    document: DocumentArgument,
    text_file: TextFileOption = None,
    output: OutputOption = None,
    tag: TagOption = None,
    skip_invalid: SkipInvalidOption = None,
    check: CheckOption = False,
) -> None:
    """Render the spans of DOCUMENT over its text as nested markup."""
    state = get_cli_state()
    emitter = CliEmitter(state)

    try:
        loaded = load_annotation_document(document)
        text = _read_text(text_file) if text_file else loaded.resolve_text(document.parent)
    except AnnotationError as exc:
        emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    overrides: dict[str, object] = {}
    if tag is not None:
        overrides["element_tag"] = tag
    if skip_invalid is not None:
        overrides["skip_invalid"] = skip_invalid
    try:
        config = RenderConfig.model_validate({**loaded.render.model_dump(), **overrides})
    except ValueError as exc:
        emit_error(f"Invalid render options: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc

    annotator = TextAnnotator(text, config=config, emitter=emitter)
    try:
        annotator.extend(loaded.spans)
        markup = annotator.render()
    except AnnotationError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if check and extract_text(markup) != text:
        emit_error("Rendered markup does not reproduce the source text.")
        raise typer.Exit(code=2)

    _write_output(markup, output)


def strip(markup_file: MarkupArgument, output: OutputOption = None) -> None:
    """Remove every annotation marker from MARKUP and print the plain text."""
    text = extract_text(_read_text(markup_file))
    _write_output(text, output)


__all__ = ["render", "strip"]
