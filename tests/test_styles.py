import pytest

from annotext.core.css import CssDeclarations, css_identifier
from annotext.core.exceptions import UnknownStyleError
from annotext.core.sink import MarkupSink
from annotext.core.styles import (
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


def _markers(template: RenderTemplate) -> tuple[str, str]:
    sink = MarkupSink()
    template.write_start(sink)
    start = "".join(sink._parts)
    template.write_end(sink)
    return start, "".join(sink._parts)[len(start) :]


def test_every_kind_resolves_to_a_template() -> None:
    for kind in StyleKind:
        template = DEFAULT_CATALOG.resolve(StyleHandle(kind, "Label"))
        assert isinstance(template, RenderTemplate)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (StyleKind.LEGAL_OBLIGATION, BackgroundTemplate("Legal Obligation", "#D3D3D3", True)),
        (
            StyleKind.LEGAL_OBLIGATION_UNKNOWN,
            BackgroundTemplate("Legal Obligation Unknown", "#D3D3D3"),
        ),
        (StyleKind.PREDICATE_ROOT_VERB, UnderlineTemplate("Predicate", "black")),
        (StyleKind.PREDICATE_ROOT_ADJECTIVE, UnderlineTemplate("Predicate", "#C0C0C0")),
        (StyleKind.HEADPHRASE, BackgroundTemplate("Headphrase", "#FFE4B5")),
        (StyleKind.WEAK_WORD, LabeledBoxTemplate("weak", "#FF8C00")),
        (StyleKind.REPETITION_MARKER, LabeledBoxTemplate("Again", "#858C55")),
        (StyleKind.LINKED_PHRASE, LabeledBoxTemplate("Linked_Phrase", "#40D440")),
    ],
)
def test_fixed_catalog_entries(kind: StyleKind, expected: RenderTemplate) -> None:
    assert DEFAULT_CATALOG.resolve(style(kind)) == expected


def test_fixed_kinds_ignore_runtime_label() -> None:
    assert DEFAULT_CATALOG.resolve(style(StyleKind.TIME_MARKER, "ignored")) == LabeledBoxTemplate(
        "Time", "#D79BFF"
    )


def test_runtime_labelled_kinds_use_caller_label() -> None:
    assert DEFAULT_CATALOG.resolve(style("named-entity", "RBC")) == MonospaceTemplate("RBC")
    assert DEFAULT_CATALOG.resolve(style("low-importance", "Note")) == ForegroundTemplate(
        "Note", "#C0C0C0"
    )


def test_runtime_labels_do_not_leak_between_handles() -> None:
    first = DEFAULT_CATALOG.resolve(style(StyleKind.NAMED_ENTITY, "first"))
    second = DEFAULT_CATALOG.resolve(style(StyleKind.NAMED_ENTITY, "second"))
    assert first.label == "first"
    assert second.label == "second"


def test_handle_accepts_kind_values() -> None:
    assert StyleHandle("definition-term") == StyleHandle(StyleKind.DEFINITION_TERM)
    with pytest.raises(ValueError):
        StyleHandle("no-such-kind")


def test_unknown_kind_in_custom_catalog() -> None:
    catalog = StyleCatalog({StyleKind.WEAK_WORD: lambda label: NullTemplate()})
    assert catalog.kinds() == (StyleKind.WEAK_WORD,)
    assert StyleKind.CONDITION not in catalog
    with pytest.raises(UnknownStyleError, match="condition"):
        catalog.resolve(style(StyleKind.CONDITION))


def test_catalog_is_callable_lookup() -> None:
    handle = style(StyleKind.CONDITION)
    assert DEFAULT_CATALOG(handle) == DEFAULT_CATALOG.resolve(handle)


def test_describe_lists_every_kind() -> None:
    entries = {entry["kind"]: entry for entry in DEFAULT_CATALOG.describe()}
    assert set(entries) == {kind.value for kind in StyleKind}
    assert entries["definition-term"] == {
        "kind": "definition-term",
        "template": "labeled-box-span",
        "label": "Term",
        "color": "#00CC00",
    }
    assert entries["named-entity"]["label"] == "(caller supplied)"
    assert entries["named-entity"]["color"] == "-"
    assert entries["low-importance"]["template"] == "foreground-span"


def test_background_markers() -> None:
    start, end = _markers(BackgroundTemplate("Headphrase", "#FFE4B5"))
    assert start == (
        '<span class="Headphrase" style="background-color:#FFE4B5; '
        'padding-left:0.1em; padding-right:0.1em;">'
    )
    assert end == "</span>"


def test_underline_markers() -> None:
    start, _ = _markers(UnderlineTemplate("Predicate", "#C0C0C0"))
    assert start == (
        '<span class="Predicate" style="border-bottom:1px solid #C0C0C0; display:inline-block;">'
    )


def test_unlabelled_template_omits_class() -> None:
    start, end = _markers(MonospaceTemplate(None))
    assert start == '<span style="font-family:monospace; font-style:italic;">'
    assert end == "</span>"


def test_labeled_box_badge() -> None:
    start, end = _markers(LabeledBoxTemplate("Linked_Phrase", "#40D440"))
    assert start.startswith('<span class="Linked_Phrase" style="border:1px solid #40D440;')
    assert start.endswith('<span class="content" style="padding-left:0.2em; padding-right:0.1em;">')
    assert end.startswith('</span><span class="Linked_Phrase_annotation"')
    assert end.endswith(">[LINKED_PHRASE]</span></span>")


def test_labeled_box_requires_label() -> None:
    with pytest.raises(ValueError):
        LabeledBoxTemplate("", "#000000")


def test_null_template_writes_nothing() -> None:
    assert _markers(NullTemplate()) == ("", "")


def test_css_declarations_sorted() -> None:
    css = CssDeclarations({"padding-left": "1em", "color": "white"})
    css.put("background-color", "red")
    assert str(css) == "background-color:red; color:white; padding-left:1em;"
    assert list(css) == ["background-color", "color", "padding-left"]
    assert css["color"] == "white"


def test_css_declarations_replace_and_reject_colons() -> None:
    css = CssDeclarations()
    assert not css
    css.put("color", "red")
    css.put("color", "blue")
    assert str(css) == "color:blue;"
    with pytest.raises(ValueError):
        css.put("color:red", "x")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Legal Obligation", "LegalObligation"),
        ("Linked_Phrase", "Linked_Phrase"),
        ("1st place", "_1stplace"),
        ("-2d", "_-2d"),
        ("a.b/c", "abc"),
        ("7", "7"),
    ],
)
def test_css_identifier(value: str, expected: str) -> None:
    assert css_identifier(value) == expected


def test_css_identifier_rejects_empty() -> None:
    with pytest.raises(ValueError):
        css_identifier("")


def test_default_catalog_uses_five_templates() -> None:
    names = {entry["template"] for entry in DEFAULT_CATALOG.describe()}
    assert names == {
        "background-span",
        "underline-span",
        "labeled-box-span",
        "monospace-span",
        "foreground-span",
    }
