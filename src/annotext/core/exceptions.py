"""Custom exception hierarchy for the annotation renderer."""

from __future__ import annotations


class AnnotationError(Exception):
    """Base exception for annotation rendering failures."""


class RangeError(AnnotationError, ValueError):
    """Raised when an annotation request has out-of-bounds or empty offsets."""


class InternalInvariantViolation(AnnotationError, RuntimeError):
    """Raised when the renderer detects a logic defect, never a user error."""


class UnknownStyleError(AnnotationError, KeyError):
    """Raised when a style handle cannot be resolved by the catalog."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class DocumentError(AnnotationError):
    """Raised when an annotation document cannot be loaded or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "AnnotationError",
    "DocumentError",
    "InternalInvariantViolation",
    "RangeError",
    "UnknownStyleError",
    "exception_hint",
    "exception_messages",
]
