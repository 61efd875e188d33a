"""Leaflet command implementation."""

import json
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..leaflet import Document, LeafletParseError, WikiLink
from ..leaflet.metadata import FieldValue
from ..models import Page
from .links import load_vault_or_report


def _value_to_json(value: FieldValue) -> object:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, WikiLink):
        return {"text": value.text, "link_text": value.link_text, "target": value.vault_item_id}
    return value


def _value_to_str(value: FieldValue) -> str:
    if isinstance(value, date):
        return value.strftime("%Y.%m.%d")
    if isinstance(value, WikiLink):
        return f"{value.text} -> {value.vault_item_id or 'unresolved'}"
    return str(value)


def document_to_dict(document: Document) -> dict:
    return {
        "schema": [
            {"name": f.name, "type": f.expected_type.value, "required": f.required}
            for f in document.schema.expected_fields
        ],
        "sections": [
            [
                {
                    "metadata": {k: _value_to_json(v) for k, v in paragraph.metadata.fields.items()},
                    "start_line": paragraph.lines[0].number + 1,
                    "text": paragraph.text,
                }
                for paragraph in section.paragraphs
            ]
            for section in document.sections
        ],
    }


def run_leaflet(vault_path: Path, page_path: str, output_json: bool = False) -> int:
    """Parse one page of the vault as a Leaflet document.

    Args:
        vault_path: Path to vault directory
        page_path: Page path from the vault root, or link text that resolves to it
        output_json: Output the parsed document as JSON

    Returns:
        Exit code (0 = parsed, 1 = missing page or parse error)
    """
    console = Console(stderr=True)
    vault = load_vault_or_report(console, vault_path)
    if vault is None:
        return 1

    item = vault.item(page_path)
    if item is None:
        resolved = vault.resolve(page_path)
        item = vault.item(resolved) if resolved else None
    if not isinstance(item, Page):
        console.print(f"No page found for {page_path!r}", style="bold red")
        return 1

    try:
        document = Document.parse(item.contents, vault)
    except LeafletParseError as e:
        console.print(f"{item.id}: {e}", style="bold red", markup=False)
        return 1

    if output_json:
        print(json.dumps(document_to_dict(document), indent=2))
        return 0

    out = Console()
    schema_table = Table(title=f"Schema: {item.id}")
    schema_table.add_column("Field")
    schema_table.add_column("Type")
    schema_table.add_column("Required")
    for definition in document.schema.expected_fields:
        schema_table.add_row(definition.name, definition.expected_type.value, "yes" if definition.required else "no")
    out.print(schema_table)

    for number, section in enumerate(document.sections, start=1):
        out.print(f"\nSection {number}", style="bold")
        for paragraph in section.paragraphs:
            fields = ", ".join(f"{k}={_value_to_str(v)}" for k, v in paragraph.metadata.fields.items())
            out.print(f"  [{fields}]", style="dim", markup=False)
            for line in paragraph.lines:
                out.print(f"    {line.text}", markup=False)

    paragraphs = sum(len(s.paragraphs) for s in document.sections)
    console.print(f"{len(document.sections)} section(s), {paragraphs} paragraph(s)", style="dim")
    return 0
