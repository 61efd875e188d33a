"""Move and date-scaffolding command implementations."""

from pathlib import Path, PurePosixPath

from rich.console import Console

from ..dates import create_dates_for_year
from ..models import Page
from .links import load_vault_or_report


def run_move(vault_path: Path, source: str, destination: str) -> int:
    """Move one item and rewrite every link to it."""
    console = Console(stderr=True)
    vault = load_vault_or_report(console, vault_path)
    if vault is None:
        return 1

    if source not in vault:
        console.print(f"No item at {source!r}", style="bold red")
        return 1

    referring = len(vault.pages_referring_to(source))
    try:
        moved = vault.move_item(source, destination)
    except FileExistsError as e:
        console.print(str(e), style="bold red")
        return 1

    console.print(f"Moved {source} -> {moved.id} ({referring} page(s) updated)", style="green")
    return 0


def run_move_tagged(vault_path: Path, topic: str, folder: str) -> int:
    """Move every page that links to `topic` into `folder`.

    Pages already under `folder` are left where they are.
    """
    console = Console(stderr=True)
    vault = load_vault_or_report(console, vault_path)
    if vault is None:
        return 1

    topic_item = vault.item(topic)
    if not isinstance(topic_item, Page):
        console.print(f"{topic!r} is not a page in the vault", style="bold red")
        return 1

    prefix = folder.strip("/") + "/"
    to_move = [
        page.id
        for page in vault.pages_referring_to(topic_item.id)
        if not page.id.startswith(prefix) and page.id != topic_item.id
    ]

    moved = 0
    for page_id in to_move:
        destination = str(PurePosixPath(prefix) / page_id)
        try:
            vault.move_item(page_id, destination)
        except FileExistsError as e:
            console.print(str(e), style="yellow")
            continue
        console.print(f"  {page_id} -> {destination}", style="dim")
        moved += 1

    console.print(f"Moved {moved} page(s) into {prefix}", style="green")
    return 0


def run_dates(vault_path: Path, year: int) -> int:
    """Create year, month and day notes for `year`."""
    console = Console(stderr=True)
    vault = load_vault_or_report(console, vault_path)
    if vault is None:
        return 1

    created = create_dates_for_year(vault, year)
    console.print(f"Created {created} note(s) for {year}", style="green")
    return 0
