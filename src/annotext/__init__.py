"""Primary public API for annotext."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from annotext.core.annotator import TextAnnotator
from annotext.core.config import (
    AnnotationDocument,
    RenderConfig,
    SpanEntry,
    load_annotation_document,
)
from annotext.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from annotext.core.exceptions import (
    AnnotationError,
    DocumentError,
    InternalInvariantViolation,
    RangeError,
    UnknownStyleError,
)
from annotext.core.sink import MarkupSink, extract_text
from annotext.core.store import AnnotationRequest
from annotext.core.styles import (
    DEFAULT_CATALOG,
    NullTemplate,
    RenderTemplate,
    StyleCatalog,
    StyleHandle,
    StyleKind,
    style,
)


try:
    __version__ = _pkg_version("annotext")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "DEFAULT_CATALOG",
    "AnnotationDocument",
    "AnnotationError",
    "AnnotationRequest",
    "DiagnosticEmitter",
    "DocumentError",
    "InternalInvariantViolation",
    "LoggingEmitter",
    "MarkupSink",
    "NullEmitter",
    "NullTemplate",
    "RangeError",
    "RenderConfig",
    "RenderTemplate",
    "SpanEntry",
    "StyleCatalog",
    "StyleHandle",
    "StyleKind",
    "TextAnnotator",
    "UnknownStyleError",
    "__version__",
    "extract_text",
    "load_annotation_document",
    "style",
]
