"""Leaflet schemas: the typed fields a document's sections may set."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .errors import (
    FieldDefinitionMissingName,
    FieldDefinitionMissingType,
    FirstSectionIsNotSchema,
    UnexpectedFieldType,
)
from .lines import SCHEMA_MARKER, Line, RawSection

OPTIONAL = "optional"


def normalize_field_name(name: str) -> str:
    return name.strip().lower()


class ExpectedType(Enum):
    DATE = "yyyy.mm.dd"
    STRING = "string"
    U64 = "u64"
    LINK = "link"


@dataclass(frozen=True)
class FieldDefinition:
    name: str  # normalized
    expected_type: ExpectedType
    required: bool = True

    @classmethod
    def from_line(cls, line: Line) -> "FieldDefinition":
        """Parse `name: [optional ]type`."""
        name, colon, type_text = line.text_without_comments.partition(":")

        name = normalize_field_name(name)
        if not name:
            raise FieldDefinitionMissingName(line)

        type_text = type_text.strip()
        if not colon or not type_text:
            raise FieldDefinitionMissingType(line)

        required = True
        first_word, _, rest = type_text.partition(" ")
        if first_word == OPTIONAL:
            type_text = rest.strip()
            required = False
            if not type_text:
                raise FieldDefinitionMissingType(line)

        try:
            expected_type = ExpectedType(type_text)
        except ValueError:
            raise UnexpectedFieldType(line, type_text) from None

        return cls(name=name, expected_type=expected_type, required=required)


@dataclass
class Schema:
    expected_fields: list[FieldDefinition] = field(default_factory=list)

    @classmethod
    def from_raw_section(cls, raw_section: RawSection) -> "Schema":
        """Parse the schema section of a document.

        Every non-empty line, other than the one carrying the schema
        marker, must be a field definition.
        """
        if not raw_section.is_a_schema():
            raise FirstSectionIsNotSchema()

        expected_fields = [
            FieldDefinition.from_line(line)
            for line in raw_section.lines
            if line.text_without_comments and SCHEMA_MARKER not in line.text_without_comments.lower()
        ]
        return cls(expected_fields=expected_fields)

    def required_fields(self) -> Iterator[FieldDefinition]:
        return (f for f in self.expected_fields if f.required)

    def field_definition(self, name: str) -> FieldDefinition | None:
        normalized = normalize_field_name(name)
        for definition in self.expected_fields:
            if definition.name == normalized:
                return definition
        return None
