"""Reading, creating and moving vault files on disk."""

import os
from pathlib import Path
from typing import Iterator

from ..models import ContentType, File, classify


class VaultLoadError(RuntimeError):
    """The vault could not be read. Loading never returns a partial vault."""


def _raise(error: OSError) -> None:
    raise error


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def created_at(path: Path) -> float:
    """Creation time of a file, where the platform records one.

    Falls back to st_ctime on platforms without st_birthtime.
    """
    stat = path.stat()
    birthtime = getattr(stat, "st_birthtime", None)
    return birthtime if birthtime is not None else stat.st_ctime


def read_file(vault_path: Path, absolute_path: Path) -> File:
    """Build a File from disk. Markdown contents are read eagerly."""
    text = None
    if classify(absolute_path) is ContentType.MARKDOWN:
        text = absolute_path.read_text(encoding="utf-8")
    return File.new(vault_path, absolute_path, created_at(absolute_path), text=text)


def files_in_vault(vault_path: Path) -> Iterator[File]:
    """Walk the vault, skipping hidden files and folders.

    Any filesystem error aborts the walk with VaultLoadError.
    """
    try:
        for folder, dirnames, filenames in os.walk(vault_path, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if not _is_hidden(d))
            for filename in sorted(filenames):
                if _is_hidden(filename):
                    continue
                # Undecodable names come back surrogate-escaped; this raises UnicodeEncodeError.
                os.path.join(folder, filename).encode("utf-8")
                yield read_file(vault_path, Path(folder) / filename)
    except (OSError, UnicodeError) as e:
        raise VaultLoadError(f"Failed to load vault at {vault_path}: {e}") from e


def create_file(vault_path: Path, absolute_path: Path, contents: str) -> File:
    """Write a new markdown file, creating any missing folders."""
    absolute_path.parent.mkdir(parents=True, exist_ok=True)
    absolute_path.write_text(contents, encoding="utf-8")
    return File.new(vault_path, absolute_path, created_at(absolute_path), text=contents)


def move_file(file: File, new_path_from_vault_root: str) -> File:
    """Rename a file on disk and return its replacement File."""
    new_absolute_path = file.vault_path / new_path_from_vault_root
    if new_absolute_path.exists():
        raise FileExistsError(f"Cannot move {file.path_from_vault_root}: {new_path_from_vault_root} exists")

    new_absolute_path.parent.mkdir(parents=True, exist_ok=True)
    file.absolute_path.rename(new_absolute_path)

    return File.new(
        file.vault_path,
        new_absolute_path,
        file.created_at,
        text=file.text,
        content_type=file.content_type,
    )


def write_file(file: File, contents: str) -> File:
    """Overwrite a markdown file and return a File carrying the new contents."""
    file.absolute_path.write_text(contents, encoding="utf-8")
    return File.new(file.vault_path, file.absolute_path, file.created_at, text=contents)
