"""Write-only markup emitter used by the interval renderer."""

from __future__ import annotations

from collections.abc import Callable
from html import escape
import re

from bs4 import BeautifulSoup

from .css import CssDeclarations
from .exceptions import InternalInvariantViolation
from .styles import BADGE_SUFFIX, DEFAULT_CATALOG, RenderTemplate, StyleHandle


StyleLookup = Callable[[StyleHandle], RenderTemplate]

_TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

# Elements whose content is not parsed as markup (raw text, RCDATA) or that
# cannot hold content at all (void). Wrapping annotations in them loses text
# when the markup is read back.
UNSUPPORTED_ELEMENT_TAGS = frozenset(
    {
        # raw text and RCDATA
        "iframe", "noembed", "noframes", "noscript", "plaintext", "script",
        "style", "textarea", "title", "xmp",
        # void
        "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


def check_element_tag(tag: str) -> str:
    """Return ``tag`` if annotations can be written as ``<tag>`` elements."""
    if not _TAG_NAME.match(tag):
        raise ValueError(f"Invalid element tag '{tag}'.")
    if tag.lower() in UNSUPPORTED_ELEMENT_TAGS:
        raise ValueError(
            f"Element tag '{tag}' cannot wrap annotated text; use an ordinary element."
        )
    return tag


class MarkupSink:
    """Append-only writer producing nested inline elements.

    Text is escaped on the way in, so the sink can never emit markup through
    :meth:`write_text`. Elements are opened and closed in strict stack order;
    the sink keeps the stack to catch unbalanced templates early.
    """

    def __init__(self, lookup: StyleLookup | None = None, *, element_tag: str = "span") -> None:
        check_element_tag(element_tag)
        self._lookup: StyleLookup = lookup or DEFAULT_CATALOG
        self._tag = element_tag
        self._parts: list[str] = []
        self._elements = 0
        self._handles: list[StyleHandle] = []
        self._max_depth = 0

    @property
    def element_tag(self) -> str:
        return self._tag

    @property
    def depth(self) -> int:
        """Number of annotations currently open."""
        return len(self._handles)

    @property
    def max_depth(self) -> int:
        """Deepest annotation nesting seen so far."""
        return self._max_depth

    def write_text(self, text: str) -> None:
        if text:
            self._parts.append(escape(text, quote=True))

    def start_element(
        self,
        class_name: str | None = None,
        style: CssDeclarations | str | None = None,
    ) -> None:
        attributes = ""
        if class_name:
            attributes += f' class="{escape(class_name, quote=True)}"'
        if style:
            attributes += f' style="{escape(str(style), quote=True)}"'
        self._parts.append(f"<{self._tag}{attributes}>")
        self._elements += 1

    def end_element(self) -> None:
        if self._elements == 0:
            raise InternalInvariantViolation(
                "Attempting to close an element which was never opened."
            )
        self._parts.append(f"</{self._tag}>")
        self._elements -= 1

    def open_element(self, handle: StyleHandle) -> None:
        """Write the start marker of ``handle``'s template."""
        self._lookup(handle).write_start(self)
        self._handles.append(handle)
        self._max_depth = max(self._max_depth, len(self._handles))

    def close_element(self, handle: StyleHandle) -> None:
        """Write the end marker matching the innermost :meth:`open_element`."""
        if not self._handles or self._handles[-1] != handle:
            current = self._handles[-1].kind.value if self._handles else "<none>"
            raise InternalInvariantViolation(
                f"Closing style '{handle.kind.value}' while '{current}' is innermost."
            )
        self._lookup(handle).write_end(self)
        self._handles.pop()

    def getvalue(self) -> str:
        """Return the markup written so far; every element must be closed."""
        if self._handles or self._elements:
            raise InternalInvariantViolation(
                f"Markup is unbalanced: {self._elements} element(s) still open."
            )
        return "".join(self._parts)


def extract_text(markup: str, *, badge_suffix: str = BADGE_SUFFIX) -> str:
    """Strip every annotation marker from ``markup`` and return the source text.

    Badge elements (class ending in ``badge_suffix``) are removed together with
    their content since they never belong to the annotated text.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for badge in soup.find_all(class_=lambda value: bool(value) and value.endswith(badge_suffix)):
        badge.decompose()
    return soup.get_text()


__all__ = [
    "UNSUPPORTED_ELEMENT_TAGS",
    "MarkupSink",
    "StyleLookup",
    "check_element_tag",
    "extract_text",
]
