"""Links and tags command implementations."""

import json
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..vault.loader import Vault, load_vault
from ..vault.files import VaultLoadError


def load_vault_or_report(console: Console, vault_path: Path) -> Vault | None:
    console.print(f"Loading vault from {vault_path}...", style="dim")
    try:
        return load_vault(vault_path)
    except VaultLoadError as e:
        console.print(str(e), style="bold red")
        return None


def run_links(vault_path: Path, unresolved_only: bool = False, output_json: bool = False) -> int:
    """List every reference in every page.

    Args:
        vault_path: Path to vault directory
        unresolved_only: Only show references that match no file
        output_json: Output rows as JSON instead of a table

    Returns:
        Exit code (0 = success, 1 = vault could not be loaded)
    """
    console = Console(stderr=True)
    vault = load_vault_or_report(console, vault_path)
    if vault is None:
        return 1

    rows = []
    for page in sorted(vault.pages(), key=lambda p: p.id):
        for reference in page.references:
            if unresolved_only and reference.vault_item_id is not None:
                continue
            rows.append(
                {
                    "page": page.id,
                    "start": reference.range[0],
                    "text": reference.text,
                    "embed": reference.is_embed,
                    "target": reference.vault_item_id,
                }
            )

    if output_json:
        print(json.dumps(rows, indent=2))
        return 0

    table = Table(title="References")
    table.add_column("Page")
    table.add_column("Offset", justify="right")
    table.add_column("Link")
    table.add_column("Target")
    for row in rows:
        target = escape(row["target"]) if row["target"] else "[red]unresolved[/]"
        link = ("[cyan]embed[/] " if row["embed"] else "") + escape(row["text"])
        table.add_row(escape(row["page"]), str(row["start"]), link, target)

    Console().print(table)
    unresolved = sum(1 for row in rows if row["target"] is None)
    console.print(f"{len(rows)} reference(s), {unresolved} unresolved", style="dim")
    return 0


def run_tags(vault_path: Path, output_json: bool = False) -> int:
    """Count tags across all pages."""
    console = Console(stderr=True)
    vault = load_vault_or_report(console, vault_path)
    if vault is None:
        return 1

    counts = Counter(tag for page in vault.pages() for tag in page.tags)
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))

    if output_json:
        print(json.dumps(dict(ordered), indent=2))
        return 0

    table = Table(title="Tags")
    table.add_column("Tag")
    table.add_column("Count", justify="right")
    for tag, count in ordered:
        table.add_row(escape(f"#{tag}"), str(count))
    Console().print(table)
    return 0
