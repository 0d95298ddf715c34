"""Bridge between the annotator's diagnostic events and the CLI consoles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from annotext.core.diagnostics import DiagnosticEmitter, format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


# Events not listed here are informational and only shown with --verbose.
_EVENT_LEVELS = {"span_rejected": "warning"}


class CliEmitter(DiagnosticEmitter):
    """Emitter printing through :func:`render_message` and recording every event."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._state.record_event(name, payload)
        message = format_event_message(name, payload)
        if message:
            render_message(_EVENT_LEVELS.get(name, "info"), message)


__all__ = ["CliEmitter"]
