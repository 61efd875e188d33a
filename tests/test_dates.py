"""Tests for date parsing and daily-note scaffolding."""

from datetime import date
from pathlib import Path

import pytest

from babelvault import dates
from babelvault.dates import create_dates_for_year, date_page_path, days_in_month, parse_yyyy_mm_dd
from babelvault.vault.loader import load_vault
from babelvault.vault.parser import parse_references


@pytest.fixture
def this_year(monkeypatch: pytest.MonkeyPatch) -> int:
    monkeypatch.setattr(dates, "current_year", lambda: 2023)
    return 2023


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024.02.29", date(2024, 2, 29)),
        ("2024.3.9", date(2024, 3, 9)),
        ("2023.02.29", None),
        ("2024.13.01", None),
        ("2024.01", None),
        ("2024.01.01.01", None),
        ("2024-01-01", None),
        ("2024.o1.01", None),
        ("", None),
    ],
)
def test_parse_yyyy_mm_dd(text: str, expected: date | None) -> None:
    assert parse_yyyy_mm_dd(text) == expected


def test_days_in_month_handles_leap_years() -> None:
    assert list(days_in_month(2024, 2))[-1] == 29
    assert list(days_in_month(2023, 2))[-1] == 28
    assert len(list(days_in_month(2023, 12))) == 31


def test_date_page_path(this_year: int) -> None:
    assert date_page_path(2023) == "2023/2023.md"
    assert date_page_path(2023, 3) == "2023/2023.03.md"
    assert date_page_path(2023, 3, 9) == "2023/2023.03.09.md"
    assert date_page_path(1999, 12, 31) == "years/1999/1999.12.31.md"


def test_create_dates_for_year(tmp_path: Path, this_year: int) -> None:
    (tmp_path / "2023").mkdir()
    (tmp_path / "2023" / "2023.01.01.md").write_text("hangover", encoding="utf-8")
    vault = load_vault(tmp_path)

    created = create_dates_for_year(vault, 2023)

    assert created == 1 + 12 + 365 - 1
    assert vault.item("2023/2023.01.01.md").contents == "hangover"

    day = vault.item("2023/2023.06.15.md")
    assert day.contents == "[[2023]], [[2023.06]], [[Days]]"
    assert [r.vault_item_id for r in day.references] == ["2023/2023.md", "2023/2023.06.md", None]
    assert (tmp_path / "2023" / "2023.06.15.md").read_text(encoding="utf-8") == day.contents

    assert vault.item("2023/2023.md").contents.startswith("[[Years]]")
    assert vault.item("2023/2023.12.md").contents == "[[2023]], [[Months]]"

    assert create_dates_for_year(vault, 2023) == 0


def test_other_years_go_under_years_folder(tmp_path: Path, this_year: int) -> None:
    vault = load_vault(tmp_path)

    assert create_dates_for_year(vault, 2024) == 1 + 12 + 366
    assert vault.item("years/2024/2024.02.29.md") is not None


def test_reference_try_as_date() -> None:
    day, month, name = parse_references("[[2024.03.09]] [[2024.03]] [[Days]]", [])

    assert day.try_as_date() == date(2024, 3, 9)
    assert month.try_as_date() is None
    assert name.try_as_date() is None
