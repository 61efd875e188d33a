"""Leaflet documents: a schema followed by sections of paragraphs.

A document is split into sections on `---` lines. The first section is
the schema; each later section is read line by line:

- `key: value` lines that match a schema field update the running metadata,
- blank lines end the current paragraph,
- anything else is paragraph text, allowed only once every required
  field has a value.

Each paragraph keeps its own copy of the metadata in effect when it ended.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import MissingRequiredFields, NoLeafletSections
from .lines import Line, RawSection, split_raw_sections
from .metadata import LineKind, Metadata
from .schema import Schema

if TYPE_CHECKING:
    from ..vault.loader import Vault


@dataclass
class Paragraph:
    metadata: Metadata
    lines: list[Line] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


@dataclass
class Section:
    paragraphs: list[Paragraph] = field(default_factory=list)

    @classmethod
    def from_raw_section(cls, schema: Schema, raw_section: RawSection, vault: Vault | None = None) -> Section:
        metadata = Metadata()
        paragraph_lines: list[Line] = []
        paragraphs: list[Paragraph] = []

        def save_paragraph() -> None:
            if paragraph_lines:
                paragraphs.append(Paragraph(metadata.copy(), list(paragraph_lines)))
                paragraph_lines.clear()

        for line in raw_section.lines:
            kind = metadata.try_add_field(line, schema, vault)
            if kind is LineKind.VALID_METADATA_FIELD:
                continue
            if kind is LineKind.EMPTY:
                save_paragraph()
                continue

            missing = metadata.missing_fields(schema)
            if missing:
                raise MissingRequiredFields(line, missing)
            paragraph_lines.append(line)

        save_paragraph()
        return cls(paragraphs=paragraphs)


@dataclass
class Document:
    schema: Schema
    sections: list[Section] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str, vault: Vault | None = None) -> Document:
        """Parse a Leaflet document.

        Args:
            text: Full note contents
            vault: Used to resolve `link` fields; without it they stay unresolved

        Raises:
            LeafletParseError: the first problem found; later sections are not parsed.
        """
        raw_sections = [s for s in split_raw_sections(text) if s.is_a_leaflet_section()]
        if not raw_sections:
            raise NoLeafletSections()

        schema_section, *content_sections = raw_sections
        schema = Schema.from_raw_section(schema_section)

        sections = [Section.from_raw_section(schema, raw, vault) for raw in content_sections]
        return cls(schema=schema, sections=sections)
