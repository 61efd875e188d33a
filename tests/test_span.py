"""Tests for span bookkeeping while rewriting references in place."""

from babelvault.models import Span
from babelvault.vault.loader import build_item
from babelvault.vault.parser import find_wikilinks


def _page(make_file, text: str):
    file = make_file("page.md", text=text)
    return build_item(file, [file])


def test_span_update_text_returns_edited_buffer_and_delta() -> None:
    contents = "abc [[x]] def"
    span = Span(4, 9, "[[x]]")

    edited, delta = span.update_text("[[longer]]", contents)

    assert edited == "abc [[longer]] def"
    assert delta == 5
    assert span.range == (4, 14)
    assert edited[span.start : span.end] == span.text == "[[longer]]"


def test_span_shift_range() -> None:
    span = Span(10, 15, "[[a]]")
    span.shift_range(-3)
    assert span.range == (7, 12)


def test_manual_cumulative_shift_keeps_later_spans_valid() -> None:
    contents = "see [[alpha]] then [[beta]] end"
    first, second = find_wikilinks(contents)

    shift = 0
    first.shift_range(shift)
    contents, delta = first.update_text("[[a]]", contents)
    shift += delta
    second.shift_range(shift)
    contents, delta = second.update_text("[[beta-longer]]", contents)
    shift += delta

    assert contents == "see [[a]] then [[beta-longer]] end"
    assert shift == (5 - 9) + (15 - 8)


def test_find_and_replace_shrinks_then_grows(make_file) -> None:
    original = "see [[alpha]] then [[beta]] end"
    page = _page(make_file, original)
    replacements = {"[[alpha]]": "[[a]]", "[[beta]]": "[[beta-longer]]"}

    page.find_and_replace_text_for_references(lambda r: replacements[r.text])

    assert page.contents == "see [[a]] then [[beta-longer]] end"
    assert len(page.contents) - len(original) == (5 - 9) + (15 - 8)

    rescanned = find_wikilinks(page.contents)
    assert [s.range for s in rescanned] == [r.range for r in page.references]
    assert [r.link_text for r in page.references] == ["a", "beta-longer"]


def test_find_and_replace_identity_is_a_no_op(make_file) -> None:
    original = "![[a.png]] x [[b]] y [[c]]"
    page = _page(make_file, original)
    ranges = [r.range for r in page.references]

    page.find_and_replace_text_for_references(lambda r: r.text)

    assert page.contents == original
    assert [r.range for r in page.references] == ranges


def test_replace_reference_text_shifts_following_references(make_file) -> None:
    page = _page(make_file, "[[one]] [[two]] [[three]]")
    first, second, third = page.references

    page.replace_reference_text(first, "[[1]]")

    assert page.contents == "[[1]] [[two]] [[three]]"
    for reference in page.references:
        start, end = reference.range
        assert page.contents[start:end] == reference.text
    assert second.range == (6, 13)

    page.replace_reference_text(third, "![[3.png]]")
    assert page.contents == "[[1]] [[two]] ![[3.png]]"
    assert third.is_embed is True
    assert third.link_text == "3.png"


def test_find_reference_by_link_text(make_file) -> None:
    page = _page(make_file, "[[a]] [[b]]")

    assert page.find_reference_by_link_text("b") is page.references[1]
    assert page.find_reference_by_link_text("c") is None
