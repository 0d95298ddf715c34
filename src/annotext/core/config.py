"""Configuration models for rendering and for annotation documents.

RenderConfig

`element_tag` (`str`)
: Tag name used for every emitted element. Defaults to ``span``. Void
  elements and elements with raw-text content (``script``, ``br``, ...) are
  rejected since their markup cannot be stripped back to the source text.

`skip_invalid` (`bool`)
: Report spans with invalid offsets as warnings and keep rendering instead of
  aborting on the first :class:`~annotext.core.exceptions.RangeError`.

SpanEntry

`start` / `end` (`int`)
: Half-open character range of the annotation.

`kind` (`StyleKind`)
: Catalog kind, written in kebab case (``definition-term``).

`label` (`str | None`)
: Runtime label for ``named-entity`` and ``low-importance`` spans.

AnnotationDocument

`text` (`str | None`)
: Inline source text.

`text_file` (`Path | None`)
: Path to the source text, relative to the document file.

`render` (`RenderConfig`)
: Render options applied when the document is rendered.

`spans` (`list[SpanEntry]`)
: Annotation requests, in any order.
"""

from __future__ import annotations

import json
from pathlib import Path
import tomllib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import DocumentError
from .sink import check_element_tag
from .styles import StyleHandle, StyleKind


class RenderConfig(BaseModel):
    """Options controlling how annotations are rendered."""

    model_config = ConfigDict(extra="forbid")

    element_tag: str = "span"
    skip_invalid: bool = False

    @field_validator("element_tag")
    @classmethod
    def check_tag(cls, value: str) -> str:
        return check_element_tag(value)


class SpanEntry(BaseModel):
    """A single annotation request as written in a document."""

    model_config = ConfigDict(extra="forbid")

    start: int
    end: int
    kind: StyleKind
    label: str | None = None

    def handle(self) -> StyleHandle:
        return StyleHandle(self.kind, self.label)


class AnnotationDocument(BaseModel):
    """Text plus the annotations to render over it."""

    model_config = ConfigDict(extra="forbid")

    text: str | None = None
    text_file: Path | None = None
    render: RenderConfig = Field(default_factory=RenderConfig)
    spans: list[SpanEntry] = Field(default_factory=list)

    def resolve_text(self, base_dir: Path | None = None) -> str:
        """Return the source text, reading ``text_file`` when needed."""
        if self.text is not None and self.text_file is not None:
            raise DocumentError("Specify either 'text' or 'text_file', not both.")
        if self.text is not None:
            return self.text
        if self.text_file is None:
            raise DocumentError("Annotation document does not provide any text.")
        path = self.text_file
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentError(f"Unable to read text file '{path}'.") from exc


def _parse_payload(path: Path, raw: str) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return json.loads(raw)
    if suffix == ".toml":
        return tomllib.loads(raw)
    return yaml.safe_load(raw)


def load_annotation_document(path: Path) -> AnnotationDocument:
    """Load and validate an annotation document from YAML, JSON or TOML."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"Unable to read annotation document '{path}'.") from exc

    try:
        payload = _parse_payload(path, raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise DocumentError(f"Annotation document '{path}' is not well formed.") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise DocumentError(f"Annotation document '{path}' must contain a mapping.")

    try:
        return AnnotationDocument.model_validate(payload)
    except ValidationError as exc:
        raise DocumentError(f"Annotation document '{path}' is invalid: {exc}") from exc


__all__ = [
    "AnnotationDocument",
    "RenderConfig",
    "SpanEntry",
    "load_annotation_document",
]
