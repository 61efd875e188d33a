"""Leaflet: schema-validated documents of metadata-tagged paragraphs."""

from .document import Document, Paragraph, Section
from .errors import (
    FieldDefinitionMissingName,
    FieldDefinitionMissingType,
    FirstSectionIsNotSchema,
    LeafletParseError,
    MissingRequiredFields,
    NoLeafletSections,
    UnexpectedFieldType,
)
from .lines import Line, RawSection, split_raw_sections
from .metadata import FieldValue, LineKind, Metadata, WikiLink
from .schema import ExpectedType, FieldDefinition, Schema

__all__ = [
    "Document",
    "Section",
    "Paragraph",
    "Schema",
    "FieldDefinition",
    "ExpectedType",
    "Metadata",
    "FieldValue",
    "WikiLink",
    "LineKind",
    "Line",
    "RawSection",
    "split_raw_sections",
    "LeafletParseError",
    "NoLeafletSections",
    "FirstSectionIsNotSchema",
    "FieldDefinitionMissingName",
    "FieldDefinitionMissingType",
    "UnexpectedFieldType",
    "MissingRequiredFields",
]
