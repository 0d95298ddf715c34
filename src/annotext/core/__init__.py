"""Core annotation rendering primitives."""

from __future__ import annotations

from .annotator import TextAnnotator
from .config import AnnotationDocument, RenderConfig, SpanEntry, load_annotation_document
from .css import CssDeclarations, css_identifier
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import (
    AnnotationError,
    DocumentError,
    InternalInvariantViolation,
    RangeError,
    UnknownStyleError,
)
from .intervals import IntervalRenderer
from .sink import MarkupSink, StyleLookup, extract_text
from .store import AnnotationRequest, AnnotationStore
from .styles import (
    DEFAULT_CATALOG,
    BackgroundTemplate,
    ForegroundTemplate,
    LabeledBoxTemplate,
    MonospaceTemplate,
    NullTemplate,
    RenderTemplate,
    StyleCatalog,
    StyleHandle,
    StyleKind,
    UnderlineTemplate,
    style,
)


__all__ = [
    "DEFAULT_CATALOG",
    "AnnotationDocument",
    "AnnotationError",
    "AnnotationRequest",
    "AnnotationStore",
    "BackgroundTemplate",
    "CssDeclarations",
    "DiagnosticEmitter",
    "DocumentError",
    "ForegroundTemplate",
    "InternalInvariantViolation",
    "IntervalRenderer",
    "LabeledBoxTemplate",
    "LoggingEmitter",
    "MarkupSink",
    "MonospaceTemplate",
    "NullEmitter",
    "NullTemplate",
    "RangeError",
    "RenderConfig",
    "RenderTemplate",
    "SpanEntry",
    "StyleCatalog",
    "StyleHandle",
    "StyleKind",
    "StyleLookup",
    "TextAnnotator",
    "UnderlineTemplate",
    "UnknownStyleError",
    "css_identifier",
    "extract_text",
    "load_annotation_document",
    "style",
]
