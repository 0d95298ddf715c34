"""High-level entry point tying the store, the catalog and the renderer together."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from .config import RenderConfig, SpanEntry
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import RangeError
from .intervals import IntervalRenderer
from .sink import MarkupSink, StyleLookup
from .store import AnnotationRequest, AnnotationStore
from .styles import DEFAULT_CATALOG, StyleHandle, StyleKind


logger = logging.getLogger(__name__)


class TextAnnotator:
    """Annotate an immutable text and render it as nested markup.

    Producers call :meth:`add` (safely from several threads) and, once all of
    them are done, :meth:`render` turns the current snapshot into a markup
    string. Rendering never mutates the annotator, so repeated renders of the
    same requests are byte-identical.
    """

    def __init__(
        self,
        text: str,
        *,
        catalog: StyleLookup | None = None,
        config: RenderConfig | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        if text is None:
            raise TypeError("text cannot be None.")
        self._text = text
        self._lookup: StyleLookup = catalog or DEFAULT_CATALOG
        self.config = config or RenderConfig()
        self.emitter: DiagnosticEmitter = emitter or NullEmitter()
        self._store = AnnotationStore(len(text))

    @property
    def text(self) -> str:
        return self._text

    def add(self, start: int, end: int, style: StyleHandle) -> AnnotationRequest:
        """Request ``style`` over ``text[start:end]``."""
        return self._store.add(start, end, style)

    def extend(self, entries: Iterable[SpanEntry]) -> int:
        """Add document span entries, returning how many were accepted.

        With ``config.skip_invalid`` enabled, entries with invalid offsets are
        reported through the emitter and skipped; otherwise the first
        :class:`RangeError` propagates.
        """
        accepted = 0
        for entry in entries:
            try:
                self.add(entry.start, entry.end, entry.handle())
            except RangeError as exc:
                if not self.config.skip_invalid:
                    raise
                self.emitter.event(
                    "span_rejected",
                    {
                        "start": entry.start,
                        "end": entry.end,
                        "kind": entry.kind.value,
                        "reason": str(exc),
                    },
                )
                continue
            accepted += 1
        return accepted

    def snapshot(self) -> tuple[AnnotationRequest, ...]:
        return self._store.snapshot()

    def count(self, *kinds: StyleKind) -> int:
        """Number of requests, optionally restricted to ``kinds``."""
        return self._store.count(*kinds)

    def __len__(self) -> int:
        return len(self._store)

    def render(self) -> str:
        """Return the text with every annotation rendered as nested elements."""
        spans = self._store.snapshot()
        sink = MarkupSink(self._lookup, element_tag=self.config.element_tag)
        IntervalRenderer(self._text, sink).render(0, len(self._text), spans)
        markup = sink.getvalue()

        logger.debug(
            "Rendered %d annotation(s) over %d characters (max depth %d).",
            len(spans),
            len(self._text),
            sink.max_depth,
        )
        self.emitter.event(
            "render_complete",
            {"spans": len(spans), "length": len(self._text), "max_depth": sink.max_depth},
        )
        return markup


__all__ = ["TextAnnotator"]
