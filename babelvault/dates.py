"""Calendar helpers and daily-note scaffolding."""

from __future__ import annotations

import calendar
import logging
import re
from datetime import date
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .vault.loader import Vault

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[0-9]+")


def parse_yyyy_mm_dd(text: str) -> date | None:
    """Parse `2024.02.29` style text into a date.

    Returns None unless the text has exactly three dot-separated numeric
    components that form a real calendar date.
    """
    parts = text.split(".")
    if len(parts) != 3:
        return None
    if not all(_NUMBER.fullmatch(part) for part in parts):
        return None

    year, month, day = (int(part) for part in parts)
    try:
        return date(year, month, day)
    except ValueError:
        return None


def current_year() -> int:
    return date.today().year


def months() -> Iterator[int]:
    return iter(range(1, 13))


def days_in_month(year: int, month: int) -> Iterator[int]:
    _, last_day = calendar.monthrange(year, month)
    return iter(range(1, last_day + 1))


def date_page_path(year: int, month: int | None = None, day: int | None = None) -> str:
    """Vault-relative path of the note for a year, month or day.

    Notes for the current year live under `YYYY/`; every other year is
    filed under `years/YYYY/`.
    """
    if month is None:
        file_name = f"{year}.md"
    elif day is None:
        file_name = f"{year}.{month:02}.md"
    else:
        file_name = f"{year}.{month:02}.{day:02}.md"

    path = f"{year}/{file_name}"
    if year != current_year():
        path = f"years/{path}"
    return path


def create_dates_for_year(vault: Vault, year: int) -> int:
    """Create any missing year, month and day notes for `year`.

    Existing notes are left untouched. Returns the number of notes created.
    """
    before = len(vault)

    vault.find_or_create_page(
        date_page_path(year),
        lambda: "[[Years]]\n\nTheme:\n\nImportant events\n- ",
    )

    for month in months():
        vault.find_or_create_page(
            date_page_path(year, month),
            lambda: f"[[{year}]], [[Months]]",
        )

        for day in days_in_month(year, month):
            vault.find_or_create_page(
                date_page_path(year, month, day),
                lambda: f"[[{year}]], [[{year}.{month:02}]], [[Days]]",
            )

    created = len(vault) - before
    logger.info("Created %d date notes for %d", created, year)
    return created
