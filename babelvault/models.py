"""Data models for vault files, references and pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, NewType

import frontmatter

from .dates import parse_yyyy_mm_dd

# Path from the vault root, with extension, using forward slashes.
VaultItemId = NewType("VaultItemId", str)

_BRACKETS = str.maketrans("", "", "![]")


def make_vault_item_id(path_from_vault_root: str) -> VaultItemId:
    """Normalize a vault-relative path into an id (`./a\\b.md` -> `a/b.md`)."""
    normalized = PurePosixPath(path_from_vault_root.replace("\\", "/")).as_posix()
    return VaultItemId(normalized.lstrip("/"))


def extract_link_text(wikilink: str) -> str:
    """`![[people/Richard Feynman]]` -> `people/Richard Feynman`.

    Every `!`, `[` and `]` is dropped, wherever it appears.
    """
    return wikilink.translate(_BRACKETS)


class ContentType(Enum):
    MARKDOWN = "markdown"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    PDF = "pdf"
    UNKNOWN = "unknown"


EXTENSION_CONTENT_TYPES: dict[str, ContentType] = {
    # Images
    "png": ContentType.IMAGE,
    "jpg": ContentType.IMAGE,
    "jpeg": ContentType.IMAGE,
    "gif": ContentType.IMAGE,
    "bmp": ContentType.IMAGE,
    "svg": ContentType.IMAGE,
    # Audio
    "mp3": ContentType.AUDIO,
    "wav": ContentType.AUDIO,
    "m4a": ContentType.AUDIO,
    "ogg": ContentType.AUDIO,
    "3gp": ContentType.AUDIO,
    "flac": ContentType.AUDIO,
    # Video
    "mp4": ContentType.VIDEO,
    "webm": ContentType.VIDEO,
    "ogv": ContentType.VIDEO,
    "mov": ContentType.VIDEO,
    "mkv": ContentType.VIDEO,
    # Text
    "md": ContentType.MARKDOWN,
    "txt": ContentType.MARKDOWN,
    # Other
    "pdf": ContentType.PDF,
}


def classify(path: Path | str) -> ContentType:
    """Content type implied by a file's extension. Matching is case-sensitive."""
    extension = PurePosixPath(str(path)).suffix.removeprefix(".")
    return EXTENSION_CONTENT_TYPES.get(extension, ContentType.UNKNOWN)


@dataclass(frozen=True)
class File:
    """One file in the vault.

    Immutable: moving a file produces a new File with the same contents
    and creation time.
    """

    vault_path: Path
    absolute_path: Path
    file_name: str  # richard feynman.md
    file_name_without_extension: str  # richard feynman
    path_from_vault_root: str  # people/richard feynman.md
    path_from_vault_root_without_extension: str  # people/richard feynman
    content_type: ContentType
    created_at: float
    text: str | None = None  # only set for markdown

    @classmethod
    def new(
        cls,
        vault_path: Path,
        absolute_path: Path,
        created_at: float,
        text: str | None = None,
        content_type: ContentType | None = None,
    ) -> File:
        path_from_vault_root = make_vault_item_id(absolute_path.relative_to(vault_path).as_posix())
        suffix = absolute_path.suffix
        without_extension = path_from_vault_root.removesuffix(suffix) if suffix else path_from_vault_root

        return cls(
            vault_path=vault_path,
            absolute_path=absolute_path,
            file_name=absolute_path.name,
            file_name_without_extension=absolute_path.stem,
            path_from_vault_root=path_from_vault_root,
            path_from_vault_root_without_extension=without_extension,
            content_type=content_type or classify(absolute_path),
            created_at=created_at,
            text=text,
        )

    @property
    def id(self) -> VaultItemId:
        return VaultItemId(self.path_from_vault_root)

    @property
    def is_markdown(self) -> bool:
        return self.content_type is ContentType.MARKDOWN


@dataclass
class Span:
    """A range of a text buffer together with the text it covers.

    Ranges are half-open string offsets: `contents[start:end] == text`.
    They count code points, not bytes; encode the prefix
    (`len(contents[:start].encode("utf-8"))`) to get a byte offset.
    """

    start: int
    end: int
    text: str

    @property
    def range(self) -> tuple[int, int]:
        return (self.start, self.end)

    def shift_range(self, offset: int) -> None:
        """Move the range by `offset`, to account for edits earlier in the buffer."""
        self.start += offset
        self.end += offset

    def update_text(self, new_text: str, contents: str) -> tuple[str, int]:
        """Splice `new_text` into `contents` over this span.

        Returns the edited buffer and the change in length, which callers
        carry forward to every span after this one.
        """
        edited = contents[: self.start] + new_text + contents[self.end :]
        delta = len(new_text) - len(self.text)

        self.end = self.start + len(new_text)
        self.text = new_text
        return edited, delta


@dataclass
class Reference:
    """A `[[wikilink]]` or `![[embed]]` found in a page."""

    is_embed: bool
    link_text: str  # text between the double brackets
    span: Span
    vault_item_id: VaultItemId | None = None  # None when nothing in the vault matches

    @property
    def text(self) -> str:
        return self.span.text

    @property
    def range(self) -> tuple[int, int]:
        return self.span.range

    def shift_range(self, offset: int) -> None:
        self.span.shift_range(offset)

    def update_text(self, new_text: str, contents: str) -> tuple[str, int]:
        edited, delta = self.span.update_text(new_text, contents)
        self.is_embed = new_text.startswith("![[")
        self.link_text = extract_link_text(new_text)
        return edited, delta

    def refers_to(self, target_id: VaultItemId) -> bool:
        return self.vault_item_id is not None and self.vault_item_id == target_id

    def try_as_date(self) -> date | None:
        """Read the link text as a `yyyy.mm.dd` date, e.g. `[[2024.03.09]]`."""
        return parse_yyyy_mm_dd(self.link_text)


@dataclass
class Page:
    """A markdown note, with the references and tags parsed from it.

    `contents` and `references` must only be changed together, through
    the replace methods below.
    """

    id: VaultItemId
    file: File
    contents: str
    references: list[Reference] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    @property
    def frontmatter(self) -> dict:
        """YAML frontmatter of the note, or an empty dict."""
        try:
            return frontmatter.loads(self.contents).metadata
        except Exception:
            return {}

    def find_and_replace_text_for_references(
        self, get_new_reference_text: Callable[[Reference], str]
    ) -> None:
        """Rewrite every reference in order, keeping all ranges valid."""
        cumulative_range_shift = 0
        for reference in self.references:
            new_text = get_new_reference_text(reference)
            reference.shift_range(cumulative_range_shift)
            self.contents, shift = reference.update_text(new_text, self.contents)
            cumulative_range_shift += shift

    def replace_reference_text(self, reference_to_update: Reference, new_text: str) -> None:
        """Rewrite a single reference and shift the ones after it."""
        cumulative_range_shift = 0
        for reference in self.references:
            reference.shift_range(cumulative_range_shift)
            if reference is reference_to_update:
                self.contents, shift = reference.update_text(new_text, self.contents)
                cumulative_range_shift += shift

    def find_reference_by_link_text(self, link_text: str) -> Reference | None:
        for reference in self.references:
            if reference.link_text == link_text:
                return reference
        return None

    def has_a_reference_to(self, target_id: VaultItemId) -> bool:
        return any(reference.refers_to(target_id) for reference in self.references)


@dataclass
class NonPage:
    """Anything that isn't markdown: images, audio, video, pdfs and unknown files."""

    id: VaultItemId
    file: File


VaultItem = Page | NonPage
