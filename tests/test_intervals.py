import random
import sys

from bs4 import BeautifulSoup, NavigableString, Tag
from conftest import ALPHABET, Bracket, tag
import pytest

from annotext.core.annotator import TextAnnotator
from annotext.core.exceptions import InternalInvariantViolation
from annotext.core.intervals import IntervalRenderer
from annotext.core.sink import MarkupSink, extract_text
from annotext.core.store import AnnotationRequest, AnnotationStore
from annotext.core.styles import StyleCatalog, StyleKind, style


def _render(text: str, spans: list[tuple[int, int, str]], catalog: StyleCatalog) -> str:
    store = AnnotationStore(len(text))
    for start, end, name in spans:
        store.add(start, end, tag(name))
    sink = MarkupSink(catalog)
    IntervalRenderer(text, sink).render(0, len(text), store.snapshot())
    return sink.getvalue()


def _element_ranges(markup: str) -> dict[str, list[tuple[int, int]]]:
    """Map each element class to the source ranges its elements cover."""
    soup = BeautifulSoup(markup, "html.parser")
    offset = 0
    ranges: dict[str, list[tuple[int, int]]] = {}
    for node in soup.descendants:
        if isinstance(node, Tag):
            length = len(node.get_text())
            for name in node.get("class", []):
                ranges.setdefault(name, []).append((offset, offset + length))
        elif isinstance(node, NavigableString):
            offset += len(node)
    return ranges


def test_no_spans_writes_text_verbatim(bracket_catalog: StyleCatalog) -> None:
    assert _render(ALPHABET, [], bracket_catalog) == ALPHABET


def test_disjoint_spans_wrapped_once_in_order(bracket_catalog: StyleCatalog) -> None:
    markup = _render("abcdefghij", [(6, 8, "B"), (1, 3, "A")], bracket_catalog)
    assert markup == 'a<span class="A">bc</span>def<span class="B">gh</span>ij'


def test_touching_spans_stay_separate(bracket_catalog: StyleCatalog) -> None:
    markup = _render("abcdefghij", [(0, 3, "A"), (3, 6, "B")], bracket_catalog)
    assert markup == '<span class="A">abc</span><span class="B">def</span>ghij'


def test_full_cover_wraps_everything_once(bracket_catalog: StyleCatalog) -> None:
    markup = _render("hello", [(0, 5, "A")], bracket_catalog)
    assert markup == '<span class="A">hello</span>'


def test_embedded_span_nested_inside_longer_span(bracket_catalog: StyleCatalog) -> None:
    markup = _render(ALPHABET, [(5, 28, "A"), (8, 15, "B")], bracket_catalog)
    assert markup == (
        'abcde<span class="A">fgh<span class="B">ijklmno</span>pqrstuvwxyzAB</span>'
        "CDEFGHIJKLMNOPQRSTUVWXYZ"
    )


def test_right_overlap_split_at_dominant_end(bracket_catalog: StyleCatalog) -> None:
    markup = _render("abcdefghij", [(0, 6, "A"), (4, 10, "B")], bracket_catalog)
    assert markup == (
        '<span class="A">abcd<span class="B">ef</span></span><span class="B">ghij</span>'
    )


def test_left_overlap_split_at_dominant_start(bracket_catalog: StyleCatalog) -> None:
    markup = _render("abcdefghij", [(2, 5, "A"), (3, 9, "B")], bracket_catalog)
    assert markup == (
        'ab<span class="A">c</span><span class="B"><span class="A">de</span>fghi</span>j'
    )


def test_identical_coordinates_are_both_kept(bracket_catalog: StyleCatalog) -> None:
    markup = _render("abcdefghij", [(2, 5, "A"), (2, 5, "B")], bracket_catalog)
    assert markup == 'ab<span class="A"><span class="B">cde</span></span>fghij'


def test_heavy_overlap_is_lossless_and_keeps_every_span(bracket_catalog: StyleCatalog) -> None:
    spans = [(5, 28), (8, 15), (8, 9), (18, 39), (23, 46), (25, 30), (44, 47)]
    named = [(start, end, f"s{index}") for index, (start, end) in enumerate(spans)]

    markup = _render(ALPHABET, named, bracket_catalog)

    assert extract_text(markup) == ALPHABET
    ranges = _element_ranges(markup)
    for start, end, name in named:
        fragments = sorted(ranges[name])
        assert fragments[0][0] == start
        assert fragments[-1][1] == end
        for (_, left_end), (right_start, _) in zip(fragments, fragments[1:], strict=False):
            assert left_end == right_start


def test_longest_span_becomes_outer_element(bracket_catalog: StyleCatalog) -> None:
    markup = _render(ALPHABET, [(5, 28, "A"), (18, 39, "B"), (23, 46, "C")], bracket_catalog)
    soup = BeautifulSoup(markup, "html.parser")
    outer = [element["class"][0] for element in soup.find_all(recursive=False)]
    # (5, 28) and (23, 46) tie on length; the earlier one dominates.
    assert outer[0] == "A"


@pytest.mark.parametrize("seed", range(12))
def test_random_spans_preserve_text_and_coverage(
    seed: int, bracket_catalog: StyleCatalog
) -> None:
    rng = random.Random(seed)
    text = "".join(rng.choice("ab <>&'\"xy") for _ in range(60))
    spans = []
    for index in range(rng.randint(1, 25)):
        start = rng.randrange(0, len(text))
        end = rng.randint(start + 1, len(text))
        spans.append((start, end, f"s{index}"))

    markup = _render(text, spans, bracket_catalog)

    assert extract_text(markup) == text
    ranges = _element_ranges(markup)
    for start, end, name in spans:
        covered = sorted(ranges[name])
        assert covered[0][0] == start
        assert covered[-1][1] == end
        assert sum(stop - begin for begin, stop in covered) == end - start


DEEP_LAYOUTS = {
    "nested": lambda index, size: (index, 2 * size - index),
    "staggered": lambda index, size: (index, index + size),
}


@pytest.mark.parametrize(("layout", "size"), [("nested", 2000), ("staggered", 1200)])
def test_deep_overlap_renders_past_recursion_limit(layout: str, size: int) -> None:
    assert size > sys.getrecursionlimit() // 2
    text = "abcdefghij" * (2 * size // 10)
    store = AnnotationStore(len(text))
    for offset in range(size):
        start, end = DEEP_LAYOUTS[layout](offset, size)
        store.add(start, end, tag(f"s{offset}"))
    sink = MarkupSink(StyleCatalog({StyleKind.NAMED_ENTITY: Bracket}))

    IntervalRenderer(text, sink).render(0, len(text), store.snapshot())

    markup = sink.getvalue()
    assert sink.depth == 0
    assert sink.max_depth == size
    assert extract_text(markup) == text


def test_deep_nesting_with_labeled_boxes() -> None:
    size = 800
    text = "x" * (2 * size)
    annotator = TextAnnotator(text)
    for offset in range(size):
        annotator.add(offset, 2 * size - offset, style(StyleKind.WEAK_WORD))

    markup = annotator.render()

    assert markup.count("[WEAK]") == size
    assert extract_text(markup) == text


def test_split_rejects_empty_cluster() -> None:
    renderer = IntervalRenderer("abc", MarkupSink())
    with pytest.raises(InternalInvariantViolation):
        renderer.split(0, 3, [])


def test_render_sub_range_only_touches_requested_slice(bracket_catalog: StyleCatalog) -> None:
    sink = MarkupSink(bracket_catalog)
    span = AnnotationRequest(4, 6, tag("A"), 0)
    IntervalRenderer("abcdefghij", sink).render(2, 8, [span])
    assert sink.getvalue() == 'cd<span class="A">ef</span>gh'
