"""Tests for wikilink parsing, link resolution and tags."""

from babelvault.vault.parser import (
    find_closest_matching_file,
    find_wikilinks,
    is_wikilink,
    parse_references,
    parse_tags,
    resolve_link_text,
)


def test_parse_references_finds_links_and_embeds(make_file) -> None:
    text = "See [[Richard Feynman]] and ![[photo.png]]."
    references = parse_references(text, [])

    assert [r.text for r in references] == ["[[Richard Feynman]]", "![[photo.png]]"]
    assert [r.is_embed for r in references] == [False, True]
    assert [r.link_text for r in references] == ["Richard Feynman", "photo.png"]
    for reference in references:
        start, end = reference.range
        assert text[start:end] == reference.text


def test_parse_references_is_non_greedy_and_single_line() -> None:
    references = parse_references("[[a]] [[b]]\n[[c\n]]", [])

    assert [r.link_text for r in references] == ["a", "b"]


def test_link_text_drops_brackets_and_bangs_anywhere() -> None:
    (reference,) = parse_references("[[wow!] [x]]", [])

    assert reference.link_text == "wow x"
    assert reference.is_embed is False


def test_unresolved_reference_has_no_target(make_file) -> None:
    files = [make_file("note.md", text="")]
    (reference,) = parse_references("[[nothing here]]", files)

    assert reference.vault_item_id is None


def test_resolution_prefers_most_specific_key(make_file) -> None:
    # Older file whose *name* is "b.md", newer file whose *path* is "b.md".
    files = [
        make_file("x/b.md", created_at=1),
        make_file("b.md", created_at=2),
    ]

    assert resolve_link_text("b.md", files) == "b.md"
    assert resolve_link_text("x/b", files) == "x/b.md"


def test_resolution_by_stem_prefers_root_path_match(make_file) -> None:
    files = [make_file("note.md", created_at=1), make_file("a/note.md", created_at=2)]

    assert resolve_link_text("note", files) == "note.md"
    assert resolve_link_text("note", list(reversed(files))) == "note.md"


def test_resolution_tie_goes_to_oldest_file(make_file) -> None:
    older = make_file("b/note.md", created_at=1)
    newer = make_file("a/note.md", created_at=2)

    assert find_closest_matching_file("note", [older, newer]) is older
    assert find_closest_matching_file("note.md", [older, newer]) is older
    assert find_closest_matching_file("note", [newer, older]) is newer


def test_references_resolve_against_files(make_file) -> None:
    files = [make_file("people/Ada.md", text=""), make_file("img/photo.png")]
    references = parse_references("[[Ada]] ![[photo.png]] [[people/Ada.md]]", files)

    assert [r.vault_item_id for r in references] == ["people/Ada.md", "img/photo.png", "people/Ada.md"]


def test_is_wikilink() -> None:
    assert is_wikilink("[[2024.01.01]]")
    assert not is_wikilink("![[x]]")
    assert not is_wikilink("[[x]")


def test_find_wikilinks_spans() -> None:
    text = "a [[b]] c ![[d]]"
    spans = find_wikilinks(text)

    assert [(s.start, s.end, s.text) for s in spans] == [(2, 7, "[[b]]"), (10, 16, "![[d]]")]


def test_parse_tags() -> None:
    assert parse_tags("#one two #three-four\n#five, end #") == ["one", "three-four", "five,"]


def test_parse_tags_takes_everything_up_to_whitespace() -> None:
    assert parse_tags("issue#12 and ##double") == ["12", "#double"]
