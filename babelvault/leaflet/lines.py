"""Numbered lines and the `---` separated sections of a Leaflet document."""

from dataclasses import dataclass, field

SECTION_SEPARATOR = "---"
OPT_OUT_MARKER = "this isn't leaflet"
SCHEMA_MARKER = "this is a leaflet schema"


@dataclass
class Line:
    number: int  # zero-based, counted from the top of the document
    text: str
    text_without_comments: str = field(init=False)  # trimmed, everything from `//` dropped

    def __post_init__(self) -> None:
        self.text_without_comments = self.text.split("//", 1)[0].strip()

    def is_section_separator(self) -> bool:
        return self.text.strip() == SECTION_SEPARATOR


@dataclass
class RawSection:
    """A run of lines between separators, not yet interpreted."""

    lines: list[Line]
    starting_line_number: int = field(init=False)
    text: str = field(init=False)

    def __post_init__(self) -> None:
        self.starting_line_number = self.lines[0].number
        self.text = "\n".join(line.text for line in self.lines)

    def is_a_leaflet_section(self) -> bool:
        return OPT_OUT_MARKER not in self.text.lower()

    def is_a_schema(self) -> bool:
        return SCHEMA_MARKER in self.text.lower()


def split_lines(text: str) -> list[Line]:
    """Number the lines of `text`. A trailing newline doesn't start a new line."""
    raw_lines = text.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    return [Line(number, raw.removesuffix("\r")) for number, raw in enumerate(raw_lines)]


def split_raw_sections(text: str) -> list[RawSection]:
    """Split a document on `---` lines. Empty runs between separators are dropped."""
    sections = []
    current: list[Line] = []

    for line in split_lines(text):
        if line.is_section_separator():
            if current:
                sections.append(RawSection(current))
            current = []
        else:
            current.append(line)

    if current:
        sections.append(RawSection(current))

    return sections
