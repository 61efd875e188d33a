"""Errors raised while parsing a Leaflet document."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lines import Line
    from .schema import FieldDefinition


class LeafletParseError(Exception):
    """Base class for every Leaflet parse failure."""


class NoLeafletSections(LeafletParseError):
    """The document was only separators and sections marked "this isn't leaflet"."""

    def __init__(self) -> None:
        super().__init__("Document has no Leaflet sections")


class FirstSectionIsNotSchema(LeafletParseError):
    def __init__(self) -> None:
        super().__init__('First Leaflet section must contain "This is a Leaflet schema"')


class _LineError(LeafletParseError):
    reason = "Invalid line"

    def __init__(self, line: Line) -> None:
        self.line = line
        super().__init__(f"{self.reason} (line {line.number + 1}): {line.text!r}")


class FieldDefinitionMissingName(_LineError):
    reason = "Field definition is missing a name"


class FieldDefinitionMissingType(_LineError):
    reason = "Field definition is missing a type"


class UnexpectedFieldType(_LineError):
    def __init__(self, line: Line, type_text: str) -> None:
        self.type_text = type_text
        self.reason = f"Unexpected field type {type_text!r}"
        super().__init__(line)


class MissingRequiredFields(_LineError):
    """Text appeared in a section before every required field was set."""

    def __init__(self, line: Line, missing_fields: list[FieldDefinition]) -> None:
        self.missing_fields = missing_fields
        names = ", ".join(f.name for f in missing_fields)
        self.reason = f"Missing required fields: {names}"
        super().__init__(line)
