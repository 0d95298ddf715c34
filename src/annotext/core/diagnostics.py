"""Diagnostic channel between the annotator and whoever drives it.

The engine never prints. It reports problems and structured events to a
:class:`DiagnosticEmitter`; the library default discards them, the CLI renders
them with Rich, and :class:`LoggingEmitter` hands them to :mod:`logging`.

Events

`render_complete`
: ``spans``, ``length`` and ``max_depth`` of a finished render.

`span_rejected`
: ``start``, ``end``, ``kind`` and ``reason`` of a document span skipped
  because its offsets were invalid.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver for warnings, errors and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Forward diagnostics to a :class:`logging.Logger`.

    Events with a known summary are logged at INFO, anything else at DEBUG with
    its raw payload.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def _log(self, level: int, message: str, exc: BaseException | None) -> None:
        self._logger.log(level, message, exc_info=exc)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.WARNING, message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.ERROR, message, exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            self._logger.debug("diagnostic event %s: %s", name, dict(payload))
        else:
            self._logger.info(message)


def _render_complete(data: Mapping[str, Any]) -> str:
    spans = data.get("spans", 0)
    noun = "span" if spans == 1 else "spans"
    return (
        f"Rendered {spans} {noun} over {data.get('length', 0)} characters "
        f"(nesting depth {data.get('max_depth', 0)})"
    )


def _span_rejected(data: Mapping[str, Any]) -> str:
    kind = data.get("kind") or "<unknown>"
    reason = data.get("reason")
    suffix = f": {reason}" if reason else ""
    return f"Skipped {kind} span [{data.get('start', '?')}, {data.get('end', '?')}){suffix}"


_EVENT_FORMATTERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "render_complete": _render_complete,
    "span_rejected": _span_rejected,
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary of a known event, ``None`` otherwise."""
    formatter = _EVENT_FORMATTERS.get(name)
    return formatter(payload) if formatter else None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
