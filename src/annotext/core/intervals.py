"""Interval partitioning and overlap splitting.

Overlapping annotations cannot be written as plain start/end tag pairs, so the
renderer resolves them step by step:

`Partitioner` (:meth:`IntervalRenderer.render`)
: walks spans in storage order, writes uncovered gaps verbatim and hands every
  maximal overlap cluster to the splitter.

`Splitter` (:meth:`IntervalRenderer.split`)
: picks the dominant (longest) span of a cluster, cuts every other member at
  the dominant's boundaries and renders the left remainder, the embedded middle
  (wrapped in the dominant's markers) and the right remainder through the
  partitioner again.

Both steps only schedule work: they return the tasks to run next in output
order, and a single loop pops them from an explicit stack. Nesting depth is
bounded by memory, never by the interpreter's recursion limit, and every
element is still closed before the element enclosing it.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from .exceptions import InternalInvariantViolation
from .sink import MarkupSink
from .store import AnnotationRequest, sort_key


class _Step(Enum):
    TEXT = "text"
    RENDER = "render"
    SPLIT = "split"
    OPEN = "open"
    CLOSE = "close"


_Task = tuple[Any, ...]


def _dominance_key(request: AnnotationRequest) -> tuple[int, int, int, int]:
    # Longest first, then storage order.
    return (-request.length, *request.sort_key)


class IntervalRenderer:
    """Render annotation requests over ``text`` into ``sink``."""

    def __init__(self, text: str, sink: MarkupSink) -> None:
        self.text = text
        self.sink = sink

    def render(self, lo: int, hi: int, spans: Sequence[AnnotationRequest]) -> None:
        """Write ``text[lo:hi]`` with ``spans`` (in storage order) applied."""
        self._run((_Step.RENDER, lo, hi, spans))

    def split(self, lo: int, hi: int, cluster: Sequence[AnnotationRequest]) -> None:
        """Resolve one overlap cluster spanning ``[lo, hi)`` into nested markup."""
        self._run((_Step.SPLIT, lo, hi, cluster))

    def _run(self, task: _Task) -> None:
        pending: list[_Task] = [task]
        while pending:
            step, *args = pending.pop()
            if step is _Step.TEXT:
                lo, hi = args
                self.sink.write_text(self.text[lo:hi])
            elif step is _Step.OPEN:
                self.sink.open_element(args[0])
            elif step is _Step.CLOSE:
                self.sink.close_element(args[0])
            elif step is _Step.RENDER:
                pending.extend(reversed(self._partition(*args)))
            else:
                pending.extend(reversed(self._split(*args)))

    def _partition(
        self, lo: int, hi: int, spans: Sequence[AnnotationRequest]
    ) -> list[_Task]:
        if not spans:
            return [(_Step.TEXT, lo, hi)]

        clusters: list[tuple[int, int, list[AnnotationRequest]]] = []
        for span in spans:
            if clusters and span.start < clusters[-1][1]:
                start, end, members = clusters[-1]
                members.append(span)
                clusters[-1] = (start, max(end, span.end), members)
            else:
                clusters.append((span.start, span.end, [span]))

        tasks: list[_Task] = []
        cursor = lo
        for start, end, members in clusters:
            if cursor < start:
                tasks.append((_Step.TEXT, cursor, start))
            tasks.append((_Step.SPLIT, start, end, members))
            cursor = end
        if cursor < hi:
            tasks.append((_Step.TEXT, cursor, hi))
        return tasks

    def _split(
        self, lo: int, hi: int, cluster: Sequence[AnnotationRequest]
    ) -> list[_Task]:
        if not cluster:
            raise InternalInvariantViolation(
                f"Cannot split an empty cluster over [{lo}, {hi})."
            )

        dominant = min(cluster, key=_dominance_key)
        d_start, d_end = dominant.start, dominant.end

        left: list[AnnotationRequest] = []
        embedded: list[AnnotationRequest] = []
        right: list[AnnotationRequest] = []
        for span in cluster:
            if span is dominant:
                continue
            if span.end <= d_start:
                left.append(span)
            elif span.start >= d_end:
                right.append(span)
            elif span.start >= d_start and span.end <= d_end:
                embedded.append(span)
            elif span.start < d_start:
                left.append(span.narrowed(span.start, d_start))
                embedded.append(span.narrowed(d_start, span.end))
            else:
                embedded.append(span.narrowed(span.start, d_end))
                right.append(span.narrowed(d_end, span.end))

        left.sort(key=sort_key)
        embedded.sort(key=sort_key)
        right.sort(key=sort_key)

        return [
            (_Step.RENDER, lo, d_start, left),
            (_Step.OPEN, dominant.style),
            (_Step.RENDER, d_start, d_end, embedded),
            (_Step.CLOSE, dominant.style),
            (_Step.RENDER, d_end, hi, right),
        ]


__all__ = ["IntervalRenderer"]
