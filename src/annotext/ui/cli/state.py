"""Per-invocation CLI state: verbosity, consoles and recorded diagnostics.

The state lives on the Click context object of the root command. Helpers that
run outside a command (the console-script wrapper, tests) fall back to a
context variable so every message goes through the same consoles.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import click


if TYPE_CHECKING:
    from rich.console import Console


_LEVEL_STYLES = {"error": "red", "warning": "yellow"}


@dataclass(slots=True)
class CLIState:
    """Verbosity flags plus lazily bound Rich consoles."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: defaultdict[str, list[dict[str, Any]]] = field(
        default_factory=lambda: defaultdict(list), init=False
    )
    _consoles: dict[str, Console] = field(default_factory=dict, init=False, repr=False)

    def _bound(self, name: str, stream: IO[str], **options: Any) -> Console:
        # Streams are swapped by test runners; rebind whenever they change.
        console = self._consoles.get(name)
        if console is None or console.file is not stream:
            from rich.console import Console

            console = Console(file=stream, **options)
            self._consoles[name] = console
        return console

    @property
    def console(self) -> Console:
        """Console writing rendered output to stdout."""
        return self._bound("stdout", sys.stdout)

    @property
    def err_console(self) -> Console:
        """Console writing diagnostics to stderr."""
        return self._bound("stderr", sys.stderr, highlight=False)

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events[name].append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return and forget the events recorded under ``name``."""
        return self.events.pop(name, [])


_CURRENT: ContextVar[CLIState | None] = ContextVar("annotext_cli_state", default=None)


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state of the running command, creating it on first use."""
    ctx = ctx or click.get_current_context(silent=True)
    state = ctx.find_object(CLIState) if ctx is not None else None
    if state is None:
        state = _CURRENT.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised.")
        state = CLIState()
    if ctx is not None and ctx.find_root().obj is None:
        ctx.find_root().obj = state
    _CURRENT.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    """Apply the global ``--verbose`` / ``--debug`` flags."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def configure_logging(state: CLIState) -> None:
    """Route the ``annotext`` logger hierarchy to the stderr console."""
    from rich.logging import RichHandler

    package_logger = logging.getLogger("annotext")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    levels = (logging.WARNING, logging.INFO, logging.DEBUG)
    package_logger.setLevel(levels[min(state.verbosity, len(levels) - 1)])
    package_logger.addHandler(
        RichHandler(
            console=state.err_console,
            show_time=False,
            show_path=state.verbosity >= 2,
            rich_tracebacks=state.show_tracebacks,
        )
    )


def _detail_lines(exception: BaseException, message: str, verbosity: int) -> list[str]:
    lines: list[str] = []
    detail = str(exception).strip()
    if detail and detail not in message:
        lines.append(detail)
    lines.append(f"type: {type(exception).__name__}")
    lines.extend(str(note) for note in getattr(exception, "__notes__", ()))
    if verbosity < 2:
        return lines

    seen = {id(exception)}
    cause = exception.__cause__ or exception.__context__
    if cause is not None:
        lines.append("caused by:")
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"  {type(cause).__name__}: {cause}")
        cause = cause.__cause__ or cause.__context__
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print a diagnostic on stderr.

    ``info`` messages only appear with ``--verbose``. Warnings and errors are
    always shown; with ``--verbose`` the exception type and notes follow, and
    ``-vv`` adds the cause chain.
    """
    state = get_cli_state()
    if level == "info":
        if state.verbosity >= 1:
            state.err_console.log(message)
        return

    from rich.text import Text

    style = _LEVEL_STYLES.get(level, "yellow")
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        text.append("\n")
        text.append("\n".join(_detail_lines(exception, message, state.verbosity)), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether ``--debug`` asked for full tracebacks."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False


__all__ = [
    "CLIState",
    "configure_logging",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]
