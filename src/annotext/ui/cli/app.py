"""Typer application wiring for the annotext CLI."""

from __future__ import annotations

import typer

from annotext.core.exceptions import AnnotationError, exception_hint

from .commands import kinds, render, strip
from .state import configure_logging, debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Render overlapping text annotations as properly nested markup.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Report render statistics (-v) and exception causes (-vv).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
) -> None:
    configure_logging(set_cli_state(ctx=ctx, verbosity=verbose, debug=debug))


app.command(name="render")(render)
app.command(name="strip")(strip)
app.command(name="kinds")(kinds)


def _print_traceback(exc: BaseException) -> None:
    from rich.traceback import Traceback

    state = get_cli_state()
    state.err_console.print(
        Traceback.from_exception(
            type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
        )
    )


def main() -> None:
    """Console-script entry point."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Rendering interrupted.", exception=exc)
        raise typer.Exit(code=130) from exc
    except AnnotationError as exc:
        if debug_enabled():
            _print_traceback(exc)
        else:
            emit_error(exception_hint(exc) or type(exc).__name__, exception=exc)
        raise typer.Exit(code=1) from exc
    except Exception as exc:  # pragma: no cover - last-resort reporting
        if debug_enabled():
            _print_traceback(exc)
        else:
            emit_error(f"Unexpected {type(exc).__name__}: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
