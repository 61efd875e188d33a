"""Wikilink and tag parsing, and link resolution against vault files."""

import re
from typing import Callable, Sequence

from ..models import File, Reference, Span, VaultItemId, extract_link_text

# Optional `!`, then `[[`, anything (lazily), `]]`.
_WIKILINK_PATTERN = re.compile(r"!?\[\[.+?\]\]")

_TAG_PATTERN = re.compile(r"#(\S+)")

# Tried in order; the first key that matches any file wins.
_MOST_SPECIFIC_TO_LEAST_SPECIFIC: tuple[Callable[[File], str], ...] = (
    lambda file: file.path_from_vault_root,
    lambda file: file.path_from_vault_root_without_extension,
    lambda file: file.file_name,
    lambda file: file.file_name_without_extension,
)


def is_wikilink(text: str) -> bool:
    """Whether `text` as a whole is shaped like `[[...]]`."""
    return text.startswith("[[") and text.endswith("]]")


def find_closest_matching_file(link_text: str, files: Sequence[File]) -> File | None:
    """Find the file a link points at.

    `files` must be sorted oldest first: when several files match at the
    same level of specificity, the oldest one wins.
    """
    for key in _MOST_SPECIFIC_TO_LEAST_SPECIFIC:
        for file in files:
            if key(file) == link_text:
                return file
    return None


def resolve_link_text(link_text: str, files: Sequence[File]) -> VaultItemId | None:
    match = find_closest_matching_file(link_text, files)
    return match.id if match else None


def matching_key_index(link_text: str, file: File) -> int | None:
    """Position in the specificity order of the first key of `file` equal to `link_text`."""
    for index, key in enumerate(_MOST_SPECIFIC_TO_LEAST_SPECIFIC):
        if key(file) == link_text:
            return index
    return None


def link_text_for(file: File, key_index: int) -> str:
    return _MOST_SPECIFIC_TO_LEAST_SPECIFIC[key_index](file)


def parse_references(text: str, files: Sequence[File]) -> list[Reference]:
    """Find every wikilink in `text` and resolve it against `files`.

    Returns references in the order they appear in `text`.
    """
    references = []
    for match in _WIKILINK_PATTERN.finditer(text):
        matched_text = match.group(0)
        link_text = extract_link_text(matched_text)
        references.append(
            Reference(
                is_embed=matched_text.startswith("![["),
                link_text=link_text,
                span=Span(match.start(), match.end(), matched_text),
                vault_item_id=resolve_link_text(link_text, files),
            )
        )
    return references


def find_wikilinks(text: str) -> list[Span]:
    """Spans of every wikilink in `text`, without resolving them."""
    return [Span(m.start(), m.end(), m.group(0)) for m in _WIKILINK_PATTERN.finditer(text)]


def parse_tags(text: str) -> list[str]:
    """Return every `#tag` in `text`, without the `#`, in order of appearance."""
    return _TAG_PATTERN.findall(text)
