"""Ordered, thread-safe storage for annotation requests."""

from __future__ import annotations

from bisect import insort
from collections.abc import Iterator
from dataclasses import dataclass
import itertools
import threading

from .exceptions import RangeError
from .styles import StyleHandle, StyleKind


@dataclass(frozen=True, slots=True)
class AnnotationRequest:
    """Half-open character range ``[start, end)`` rendered with ``style``.

    ``sequence`` is the insertion counter assigned by the store. Fragments
    produced while splitting overlaps keep the sequence of their parent so
    the tie-break stays stable across nesting levels.
    """

    start: int
    end: int
    style: StyleHandle
    sequence: int = 0

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Storage order: start ascending, then shorter first, then oldest first."""
        return (self.start, self.end, self.sequence)

    def narrowed(self, start: int, end: int) -> AnnotationRequest:
        """Return a fragment of this request covering ``[start, end)``."""
        return AnnotationRequest(start, end, self.style, self.sequence)


def sort_key(request: AnnotationRequest) -> tuple[int, int, int]:
    return request.sort_key


class AnnotationStore:
    """Collection of annotation requests for one text buffer.

    Requests are kept in a total order (see :attr:`AnnotationRequest.sort_key`)
    so identical coordinates never collapse into a single entry.
    """

    def __init__(self, text_length: int) -> None:
        if text_length < 0:
            raise ValueError("text_length cannot be negative.")
        self._length = text_length
        self._requests: list[AnnotationRequest] = []
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    @property
    def text_length(self) -> int:
        return self._length

    def validate(self, start: int, end: int) -> None:
        """Raise :class:`RangeError` unless ``[start, end)`` is a valid span."""
        if start < 0 or start > self._length:
            raise RangeError(f"start offset {start} out of range [0, {self._length}].")
        if end <= start or end > self._length:
            raise RangeError(
                f"end offset {end} out of range ({start}, {self._length}] for start {start}."
            )

    def add(self, start: int, end: int, style: StyleHandle) -> AnnotationRequest:
        """Insert a new request, keeping the storage order."""
        if not isinstance(style, StyleHandle):
            raise TypeError(f"style must be a StyleHandle, got {type(style).__name__}.")
        self.validate(start, end)
        with self._lock:
            request = AnnotationRequest(start, end, style, next(self._sequence))
            insort(self._requests, request, key=sort_key)
        return request

    def snapshot(self) -> tuple[AnnotationRequest, ...]:
        """Return the ordered requests without mutating the store."""
        with self._lock:
            return tuple(self._requests)

    def count(self, *kinds: StyleKind) -> int:
        """Count stored requests, restricted to ``kinds`` when given."""
        requests = self.snapshot()
        if not kinds:
            return len(requests)
        wanted = {StyleKind(kind) for kind in kinds}
        return sum(1 for request in requests if request.style.kind in wanted)

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)

    def __iter__(self) -> Iterator[AnnotationRequest]:
        return iter(self.snapshot())


__all__ = ["AnnotationRequest", "AnnotationStore", "sort_key"]
