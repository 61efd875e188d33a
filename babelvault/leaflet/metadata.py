"""Typed metadata fields set by `key: value` lines inside a section."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

from ..dates import parse_yyyy_mm_dd
from ..models import VaultItemId, extract_link_text
from ..vault.parser import is_wikilink
from .lines import Line
from .schema import ExpectedType, FieldDefinition, Schema, normalize_field_name

if TYPE_CHECKING:
    from ..vault.loader import Vault

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class WikiLink:
    text: str  # including the double brackets
    link_text: str
    vault_item_id: VaultItemId | None = None  # None if no note matches


FieldValue = Union[date, str, int, WikiLink]


class LineKind(Enum):
    VALID_METADATA_FIELD = auto()
    EMPTY = auto()
    OTHER_TEXT = auto()


def parse_u64(value: str) -> int | None:
    if not _UNSIGNED.fullmatch(value):
        return None
    number = int(value)
    return number if number <= _U64_MAX else None


def parse_date(value: str) -> date | None:
    """`2024.03.09` or `[[2024.03.09]]`."""
    return parse_yyyy_mm_dd(value.removeprefix("[[").removesuffix("]]"))


def parse_link(value: str, vault: Vault | None) -> WikiLink | None:
    if not is_wikilink(value):
        return None
    link_text = extract_link_text(value)
    vault_item_id = vault.resolve(link_text) if vault is not None else None
    return WikiLink(text=value, link_text=link_text, vault_item_id=vault_item_id)


def parse_field_value(expected_type: ExpectedType, value: str, vault: Vault | None = None) -> FieldValue | None:
    """Parse a trimmed value as `expected_type`, or return None if it doesn't fit."""
    if expected_type is ExpectedType.STRING:
        return value
    if expected_type is ExpectedType.U64:
        return parse_u64(value)
    if expected_type is ExpectedType.DATE:
        return parse_date(value)
    if expected_type is ExpectedType.LINK:
        return parse_link(value, vault)
    raise ValueError(f"Unknown field type: {expected_type}")


@dataclass
class Metadata:
    """Field values by normalized field name."""

    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[normalize_field_name(name)]

    def get(self, name: str, default: FieldValue | None = None) -> FieldValue | None:
        return self.fields.get(normalize_field_name(name), default)

    def copy(self) -> Metadata:
        return Metadata(dict(self.fields))

    def try_add_field(self, line: Line, schema: Schema, vault: Vault | None = None) -> LineKind:
        """Classify a line, recording it as a field if it is a valid one."""
        text = line.text_without_comments
        if not text:
            return LineKind.EMPTY

        key, colon, value = text.partition(":")
        if not colon:
            return LineKind.OTHER_TEXT

        definition = schema.field_definition(key)
        if definition is None:
            return LineKind.OTHER_TEXT

        parsed = parse_field_value(definition.expected_type, value.strip(), vault)
        if parsed is None:
            return LineKind.OTHER_TEXT

        self.fields[definition.name] = parsed
        return LineKind.VALID_METADATA_FIELD

    def missing_fields(self, schema: Schema) -> list[FieldDefinition]:
        return [f for f in schema.required_fields() if f.name not in self.fields]
