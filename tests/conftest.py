"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

from babelvault.models import File
from babelvault.vault.loader import Vault, load_vault


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., File]:
    """Build File values directly, with an explicit creation time."""

    def _make(path_from_vault_root: str, created_at: float = 0.0, text: str | None = None) -> File:
        return File.new(tmp_path, tmp_path / path_from_vault_root, created_at, text=text)

    return _make


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    """A small vault on disk."""
    vault = tmp_path / "vault"
    _write(vault / "People.md", "# People\n")
    _write(vault / "ada.md", "Ada Lovelace. [[People]] #person #math\n")
    _write(vault / "index.md", "Friends: [[ada]] and [[ada.md]] and ![[photo.png]] and [[missing]]\n")
    (vault / "photo.png").write_bytes(b"\x89PNG\r\n")
    _write(vault / ".obsidian" / "app.json", "{}")
    _write(vault / ".trash" / "old.md", "[[ada]]")
    return vault


@pytest.fixture
def vault(vault_path: Path) -> Vault:
    return load_vault(vault_path)
