"""Closed catalog of annotation styles and their rendering templates.

Every annotation refers to a :class:`StyleHandle`, a small immutable value made
of a :class:`StyleKind` and an optional caller-supplied label. The
:class:`StyleCatalog` maps each kind through an immutable table to a template
factory; resolving a handle calls that factory with the handle's label and
returns a :class:`RenderTemplate` value object.

Templates

`BackgroundTemplate`
: solid background colour, optionally bold.

`UnderlineTemplate`
: coloured bottom border.

`LabeledBoxTemplate`
: bordered box followed by a coloured badge carrying the upper-cased label.

`MonospaceTemplate`
: italic monospaced run.

`ForegroundTemplate`
: dimmed foreground colour.

`NullTemplate`
: writes nothing; useful as a neutral style.

Templates only talk to the sink through ``start_element``, ``end_element`` and
``write_text``; they know nothing about the interval algorithm.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .css import CssDeclarations, css_identifier
from .exceptions import UnknownStyleError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .sink import MarkupSink


BADGE_SUFFIX = "_annotation"
"""Class-name suffix marking badge elements that do not belong to the source text."""

CONTENT_CLASS = "content"


class StyleKind(str, Enum):
    """Visual treatments known to the catalog."""

    LEGAL_OBLIGATION = "legal-obligation"
    LEGAL_OBLIGATION_UNKNOWN = "legal-obligation-unknown"
    PREDICATE_ROOT_VERB = "predicate-root-verb"
    PREDICATE_ROOT_ADJECTIVE = "predicate-root-adjective"
    HEADPHRASE = "headphrase"
    WEAK_WORD = "weak-word"
    CONDITION = "condition"
    LOOP_MARKER = "loop-marker"
    REPETITION_MARKER = "repetition-marker"
    TIME_MARKER = "time-marker"
    NAMED_ENTITY = "named-entity"
    EXTERNAL_ENTITY = "external-entity"
    SELF_REFERENCE = "self-reference"
    LINKED_PHRASE = "linked-phrase"
    DEFINITION_TERM = "definition-term"
    DEFINITION_DOMAIN = "definition-domain"
    DEFINITION_EXPLANATION = "definition-explanation"
    LOW_IMPORTANCE = "low-importance"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StyleHandle:
    """Reference into the style catalog.

    ``label`` is only consulted by kinds that accept a runtime label
    (:attr:`StyleKind.NAMED_ENTITY` and :attr:`StyleKind.LOW_IMPORTANCE`).
    """

    kind: StyleKind
    label: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, StyleKind):
            object.__setattr__(self, "kind", StyleKind(self.kind))


@runtime_checkable
class RenderTemplate(Protocol):
    """Strategy writing the start and end markers of one annotation."""

    def write_start(self, sink: MarkupSink) -> None: ...

    def write_end(self, sink: MarkupSink) -> None: ...


def _class_name(label: str | None) -> str | None:
    return css_identifier(label) if label else None


@dataclass(frozen=True, slots=True)
class NullTemplate:
    """Template that emits no markup at all."""

    def write_start(self, sink: MarkupSink) -> None:
        return

    def write_end(self, sink: MarkupSink) -> None:
        return


@dataclass(frozen=True, slots=True)
class BackgroundTemplate:
    label: str | None
    color: str
    bold: bool = False

    @property
    def css(self) -> CssDeclarations:
        css = CssDeclarations(
            {
                "background-color": self.color,
                "padding-left": "0.1em",
                "padding-right": "0.1em",
            }
        )
        if self.bold:
            css.put("font-weight", "bold")
        return css

    def write_start(self, sink: MarkupSink) -> None:
        sink.start_element(_class_name(self.label), self.css)

    def write_end(self, sink: MarkupSink) -> None:
        sink.end_element()


@dataclass(frozen=True, slots=True)
class ForegroundTemplate:
    label: str | None
    color: str

    @property
    def css(self) -> CssDeclarations:
        return CssDeclarations({"color": self.color})

    def write_start(self, sink: MarkupSink) -> None:
        sink.start_element(_class_name(self.label), self.css)

    def write_end(self, sink: MarkupSink) -> None:
        sink.end_element()


@dataclass(frozen=True, slots=True)
class UnderlineTemplate:
    label: str | None
    color: str

    @property
    def css(self) -> CssDeclarations:
        return CssDeclarations(
            {"border-bottom": f"1px solid {self.color}", "display": "inline-block"}
        )

    def write_start(self, sink: MarkupSink) -> None:
        sink.start_element(_class_name(self.label), self.css)

    def write_end(self, sink: MarkupSink) -> None:
        sink.end_element()


@dataclass(frozen=True, slots=True)
class MonospaceTemplate:
    label: str | None

    @property
    def css(self) -> CssDeclarations:
        return CssDeclarations({"font-family": "monospace", "font-style": "italic"})

    def write_start(self, sink: MarkupSink) -> None:
        sink.start_element(_class_name(self.label), self.css)

    def write_end(self, sink: MarkupSink) -> None:
        sink.end_element()


_CONTENT_CSS = CssDeclarations({"padding-left": "0.2em", "padding-right": "0.1em"})


@dataclass(frozen=True, slots=True)
class LabeledBoxTemplate:
    """Bordered box whose closing marker carries a visible ``[LABEL]`` badge.

    The start marker opens the box and an inner ``content`` element; the end
    marker closes the content, writes the badge element (class
    ``<label>_annotation``) and closes the box.
    """

    label: str
    color: str
    class_name: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("Labeled boxes require a non-empty label.")
        object.__setattr__(self, "class_name", css_identifier(self.label))

    @property
    def box_css(self) -> CssDeclarations:
        return CssDeclarations(
            {
                "border": f"1px solid {self.color}",
                "margin": "0.1em",
                "display": "inline-table",
            }
        )

    @property
    def badge_css(self) -> CssDeclarations:
        return CssDeclarations(
            {
                "font-size": "x-small",
                "font-family": "sans-serif",
                "font-style": "normal",
                "color": "white",
                "padding-left": "1em",
                "padding-right": "0.2em",
                "background-color": self.color,
                "display": "table-cell",
            }
        )

    @property
    def badge_text(self) -> str:
        return f"[{self.label.upper()}]"

    def write_start(self, sink: MarkupSink) -> None:
        sink.start_element(self.class_name, self.box_css)
        sink.start_element(CONTENT_CLASS, _CONTENT_CSS)

    def write_end(self, sink: MarkupSink) -> None:
        sink.end_element()
        sink.start_element(f"{self.class_name}{BADGE_SUFFIX}", self.badge_css)
        sink.write_text(self.badge_text)
        sink.end_element()
        sink.end_element()


TemplateFactory = Callable[[str | None], RenderTemplate]
"""Builds a template from the (optional) runtime label of a handle."""


def _fixed(template: RenderTemplate) -> TemplateFactory:
    def factory(_label: str | None) -> RenderTemplate:
        return template

    return factory


_DEFAULT_ENTRIES: dict[StyleKind, TemplateFactory] = {
    StyleKind.LEGAL_OBLIGATION: _fixed(
        BackgroundTemplate("Legal Obligation", "#D3D3D3", bold=True)
    ),
    StyleKind.LEGAL_OBLIGATION_UNKNOWN: _fixed(
        BackgroundTemplate("Legal Obligation Unknown", "#D3D3D3")
    ),
    StyleKind.PREDICATE_ROOT_VERB: _fixed(UnderlineTemplate("Predicate", "black")),
    StyleKind.PREDICATE_ROOT_ADJECTIVE: _fixed(UnderlineTemplate("Predicate", "#C0C0C0")),
    StyleKind.HEADPHRASE: _fixed(BackgroundTemplate("Headphrase", "#FFE4B5")),
    StyleKind.WEAK_WORD: _fixed(LabeledBoxTemplate("weak", "#FF8C00")),
    StyleKind.CONDITION: _fixed(LabeledBoxTemplate("Condition", "#97B4D4")),
    StyleKind.LOOP_MARKER: _fixed(LabeledBoxTemplate("Loop", "#C1CC7C")),
    StyleKind.REPETITION_MARKER: _fixed(LabeledBoxTemplate("Again", "#858C55")),
    StyleKind.TIME_MARKER: _fixed(LabeledBoxTemplate("Time", "#D79BFF")),
    StyleKind.NAMED_ENTITY: MonospaceTemplate,
    StyleKind.EXTERNAL_ENTITY: _fixed(LabeledBoxTemplate("External", "#D9766E")),
    StyleKind.SELF_REFERENCE: _fixed(LabeledBoxTemplate("Self", "#A66844")),
    StyleKind.LINKED_PHRASE: _fixed(LabeledBoxTemplate("Linked_Phrase", "#40D440")),
    StyleKind.DEFINITION_TERM: _fixed(LabeledBoxTemplate("Term", "#00CC00")),
    StyleKind.DEFINITION_DOMAIN: _fixed(LabeledBoxTemplate("Domain", "#006600")),
    StyleKind.DEFINITION_EXPLANATION: _fixed(LabeledBoxTemplate("Explanation", "#008000")),
    StyleKind.LOW_IMPORTANCE: lambda label: ForegroundTemplate(label, "#C0C0C0"),
}

RUNTIME_LABELLED_KINDS = frozenset({StyleKind.NAMED_ENTITY, StyleKind.LOW_IMPORTANCE})


class StyleCatalog:
    """Immutable lookup from style handles to render templates.

    The default table uses five templates rather than four: low-importance
    spans get a dimmed foreground colour (:class:`ForegroundTemplate`) instead
    of borrowing the background, underline, box or monospace treatment.

    The catalog is itself callable, so it can be handed to the sink as the
    style lookup.
    """

    def __init__(self, entries: Mapping[StyleKind, TemplateFactory] | None = None) -> None:
        table = dict(_DEFAULT_ENTRIES if entries is None else entries)
        self._entries: Mapping[StyleKind, TemplateFactory] = MappingProxyType(table)

    @classmethod
    def uniform(cls, template: RenderTemplate) -> StyleCatalog:
        """Return a catalog resolving every kind to the same template."""
        return cls(dict.fromkeys(StyleKind, _fixed(template)))

    def resolve(self, handle: StyleHandle) -> RenderTemplate:
        """Return the template for ``handle``."""
        try:
            factory = self._entries[handle.kind]
        except KeyError as exc:
            raise UnknownStyleError(f"No template registered for style '{handle.kind}'.") from exc
        return factory(handle.label)

    __call__ = resolve

    def kinds(self) -> tuple[StyleKind, ...]:
        """Return the kinds known to this catalog in declaration order."""
        return tuple(kind for kind in StyleKind if kind in self._entries)

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def describe(self, kinds: Iterable[StyleKind] | None = None) -> list[dict[str, str]]:
        """Return a serialisable snapshot of the catalog entries."""
        entries: list[dict[str, str]] = []
        for kind in kinds if kinds is not None else self.kinds():
            runtime = kind in RUNTIME_LABELLED_KINDS
            template = self.resolve(StyleHandle(kind, "<label>" if runtime else None))
            entries.append(
                {
                    "kind": kind.value,
                    "template": _template_name(template),
                    "label": "(caller supplied)" if runtime else (_template_label(template) or "-"),
                    "color": getattr(template, "color", None) or "-",
                }
            )
        return entries


_TEMPLATE_NAMES: dict[type, str] = {
    BackgroundTemplate: "background-span",
    UnderlineTemplate: "underline-span",
    LabeledBoxTemplate: "labeled-box-span",
    MonospaceTemplate: "monospace-span",
    ForegroundTemplate: "foreground-span",
    NullTemplate: "null",
}


def _template_name(template: RenderTemplate) -> str:
    return _TEMPLATE_NAMES.get(type(template), type(template).__name__)


def _template_label(template: RenderTemplate) -> str | None:
    return getattr(template, "label", None)


DEFAULT_CATALOG = StyleCatalog()


def style(kind: StyleKind | str, label: str | None = None) -> StyleHandle:
    """Shorthand for building a :class:`StyleHandle`."""
    return StyleHandle(StyleKind(kind), label)


__all__ = [
    "BADGE_SUFFIX",
    "CONTENT_CLASS",
    "DEFAULT_CATALOG",
    "RUNTIME_LABELLED_KINDS",
    "BackgroundTemplate",
    "ForegroundTemplate",
    "LabeledBoxTemplate",
    "MonospaceTemplate",
    "NullTemplate",
    "RenderTemplate",
    "StyleCatalog",
    "StyleHandle",
    "StyleKind",
    "TemplateFactory",
    "UnderlineTemplate",
    "style",
]
