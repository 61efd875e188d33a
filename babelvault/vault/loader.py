"""Vault loading and the in-memory index of vault items."""

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Sequence

from ..models import File, NonPage, Page, Reference, VaultItem, VaultItemId, make_vault_item_id
from .files import create_file, files_in_vault, move_file, write_file
from .parser import (
    find_closest_matching_file,
    link_text_for,
    matching_key_index,
    parse_references,
    parse_tags,
    resolve_link_text,
)

logger = logging.getLogger(__name__)


def build_item(file: File, files: Sequence[File]) -> VaultItem:
    """Wrap a File as a Page (parsing its references and tags) or a NonPage.

    `files` must be sorted oldest first.
    """
    if file.is_markdown:
        contents = file.text or ""
        return Page(
            id=file.id,
            file=file,
            contents=contents,
            references=parse_references(contents, files),
            tags=parse_tags(contents),
        )
    return NonPage(id=file.id, file=file)


@dataclass
class Vault:
    """Every item in a vault, keyed by its path from the vault root.

    A snapshot taken at load time. Changes made through this object are
    written to disk; changes made on disk by anything else are not seen.
    """

    path: Path
    _items_by_id: dict[VaultItemId, VaultItem] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._items_by_id)

    def __contains__(self, id: str) -> bool:
        return make_vault_item_id(id) in self._items_by_id

    def item(self, id: str) -> VaultItem | None:
        return self._items_by_id.get(make_vault_item_id(id))

    def item_at_path(self, path_from_vault_root: str) -> VaultItem | None:
        return self.item(path_from_vault_root)

    def items(self) -> Iterator[VaultItem]:
        return iter(list(self._items_by_id.values()))

    def pages(self) -> Iterator[Page]:
        return (item for item in self.items() if isinstance(item, Page))

    def files(self) -> list[File]:
        """All files, oldest first."""
        return sorted((item.file for item in self._items_by_id.values()), key=lambda f: f.created_at)

    def resolve(self, link_text: str) -> VaultItemId | None:
        """Resolve link text the same way references in pages are resolved."""
        return resolve_link_text(link_text, self.files())

    def referenced_item(self, reference: Reference) -> VaultItem | None:
        if reference.vault_item_id is None:
            return None
        return self.item(reference.vault_item_id)

    def pages_referring_to(self, id: str) -> list[Page]:
        target = make_vault_item_id(id)
        return [page for page in self.pages() if page.has_a_reference_to(target)]

    def absolute_path_to_item(self, id: str) -> Path:
        return self.path / make_vault_item_id(id)

    def create_page(self, id: str, contents: str) -> VaultItem:
        """Write a new note to disk and add it to the vault."""
        id = make_vault_item_id(id)
        if id in self._items_by_id:
            raise FileExistsError(f"Vault already contains {id}")

        file = create_file(self.path, self.absolute_path_to_item(id), contents)
        item = build_item(file, [*self.files(), file])
        self._items_by_id[id] = item
        logger.debug("Created %s", id)
        return item

    def find_or_create_page(self, id: str, make_contents: Callable[[], str]) -> VaultItem:
        """Return the item at `id`, creating a note from `make_contents()` if there is none."""
        existing = self.item(id)
        if existing is not None:
            return existing
        return self.create_page(id, make_contents())

    def save_page(self, page: Page) -> None:
        """Write a page's current contents back to its file."""
        page.file = write_file(page.file, page.contents)

    def move_item(self, id: str, new_path_from_vault_root: str) -> VaultItem:
        """Move an item to a new path and fix every reference to it.

        References that resolved to the item are rewritten to point at the
        new path, using the same form (full path, path without extension,
        file name or bare name) as before, or a more specific one when that
        form would resolve to another file. Changed pages are saved, and
        every reference in the vault is resolved again.
        """
        old_id = make_vault_item_id(id)
        new_id = make_vault_item_id(new_path_from_vault_root)

        item = self._items_by_id.get(old_id)
        if item is None:
            raise KeyError(old_id)
        if new_id in self._items_by_id:
            raise FileExistsError(f"Vault already contains {new_id}")

        old_file = item.file
        new_file = move_file(old_file, new_id)
        moved = dataclasses.replace(item, id=new_id, file=new_file)

        # Replace by key, keeping the original ordering.
        self._items_by_id = {
            (new_id if key == old_id else key): (moved if key == old_id else value)
            for key, value in self._items_by_id.items()
        }

        for page in self.pages_referring_to(old_id):
            self._relink(page, old_id, old_file, moved.file)
            self.save_page(page)

        # The move can change what other links resolve to, not only links to this item.
        self._resolve_references()

        logger.info("Moved %s to %s", old_id, new_id)
        return moved

    def _relink(self, page: Page, old_id: VaultItemId, old_file: File, new_file: File) -> None:
        files = self.files()

        def new_text(reference: Reference) -> str:
            if not reference.refers_to(old_id):
                return reference.text
            key_index = matching_key_index(reference.link_text, old_file)
            if key_index is None:
                key_index = 0
            prefix = "!" if reference.is_embed else ""
            return f"{prefix}[[{_link_text_resolving_to(new_file, key_index, files)}]]"

        page.find_and_replace_text_for_references(new_text)

    def _resolve_references(self) -> None:
        files = self.files()
        for page in self.pages():
            for reference in page.references:
                reference.vault_item_id = resolve_link_text(reference.link_text, files)


def _link_text_resolving_to(file: File, key_index: int, files: Sequence[File]) -> str:
    """Link text for `file` in the form at `key_index`, or a more specific one.

    Falls back toward the full path until the text resolves to `file` itself.
    """
    for index in range(key_index, -1, -1):
        candidate = link_text_for(file, index)
        match = find_closest_matching_file(candidate, files)
        if match is not None and match.id == file.id:
            return candidate
    return file.path_from_vault_root


def load_vault(vault_path: Path) -> Vault:
    """Load every file under `vault_path`.

    Files are sorted by creation time (oldest first) before any reference
    is resolved, so that name collisions resolve to the oldest note.

    Raises:
        VaultLoadError: if any file or folder can't be read.
    """
    vault_path = Path(vault_path).resolve()
    files = list(files_in_vault(vault_path))
    files.sort(key=lambda file: file.created_at)

    vault = Vault(path=vault_path)
    for file in files:
        item = build_item(file, files)
        vault._items_by_id[item.id] = item

    logger.debug(
        "Loaded %d items (%d pages) from %s",
        len(vault),
        sum(1 for _ in vault.pages()),
        vault_path,
    )
    return vault
