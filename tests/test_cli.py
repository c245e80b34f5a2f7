from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from govuk_bank_holidays import BankHolidayCalendar, DataSource, Division
from govuk_bank_holidays.cli import main, render_month, render_year

from conftest import make_source


def _run(*args: str):
    return CliRunner().invoke(main, ["--cached", *args])


# ============================================================
# Rendering
# ============================================================
def test_render_month(calendar: BankHolidayCalendar) -> None:
    out = render_month(calendar, 2017, 12, print_year=True)
    lines = out.splitlines()
    assert lines[0].strip() == "December 2017"
    assert lines[1] == " Mo  Tu  We  Th  Fr  Sa  Su"
    assert lines[2] == " " * 16 + "  1 [ 2][ 3]"
    assert "[25][26] 27  28  29 [30][31]" in out


def test_render_month_for_division(calendar: BankHolidayCalendar) -> None:
    assert "[ 4]" not in render_month(calendar, 2016, 1)
    assert "[ 4]" in render_month(calendar, 2016, 1, Division.SCOTLAND)


def test_render_year(calendar: BankHolidayCalendar) -> None:
    out = render_year(calendar, 2026)
    assert out.splitlines()[0].strip() == "2026"
    for month in ("January", "June", "December"):
        assert month in out


# ============================================================
# Commands
# ============================================================
def test_next() -> None:
    result = _run("next", "--date", "2016-01-02")
    assert result.exit_code == 0
    assert "The next bank holiday across the UK is Good Friday (2016-03-25)" in result.output


def test_next_in_division() -> None:
    result = _run("next", "--date", "2016-01-02", "--division", "scotland")
    assert result.exit_code == 0
    assert "in Scotland is 2nd January (2016-01-04)" in result.output


def test_previous() -> None:
    result = _run("previous", "--date", "2016-01-05")
    assert result.exit_code == 0
    assert "was New Year’s Day (2016-01-01)" in result.output


def test_next_beyond_known_data() -> None:
    result = _run("next", "--date", "2099-01-01")
    assert result.exit_code == 2
    assert "cannot be determined" in result.output


def test_unknown_division() -> None:
    result = _run("next", "-d", "wales")
    assert result.exit_code == 2
    assert "is not a division" in result.output


def test_today() -> None:
    result = _run("today", "-d", "northern-ireland")
    assert result.exit_code == 0
    assert f"Today ({date.today().isoformat()})" in result.output
    assert "in Northern Ireland" in result.output


def test_work_days() -> None:
    result = _run("work-days", "--date", "2017-12-19", "-n", "4")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "2017-12-20 Wednesday",
        "2017-12-21 Thursday",
        "2017-12-22 Friday",
        "2017-12-27 Wednesday",
    ]


def test_work_days_before() -> None:
    result = _run("work-days", "--date", "2018-01-03", "-n", "2", "--before", "-d", "Scotland")
    assert result.exit_code == 0
    assert result.output.splitlines() == ["2017-12-29 Friday", "2017-12-28 Thursday"]


def test_show_month_lists_holidays() -> None:
    result = _run("show", "2016", "3", "-d", "northern-ireland")
    assert result.exit_code == 0
    assert "March 2016" in result.output
    assert "2016-03-17 - St Patrick’s Day" in result.output
    assert "2016-03-28 - Easter Monday" in result.output


def test_show_rejects_bad_month() -> None:
    result = _run("show", "2016", "13")
    assert result.exit_code == 2


# ============================================================
# download
# ============================================================
def test_download_merges_into_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "bank-holidays.json"
    existing = make_source({Division.SCOTLAND: [(date(2010, 1, 1), "New Year’s Day"), (date(2026, 1, 1), "Old")]})
    target.write_text(existing.to_json(), encoding="utf-8")

    downloaded = make_source({Division.SCOTLAND: [(date(2026, 1, 1), "New Year’s Day"), (date(2026, 1, 2), "2nd January")]})
    downloaded.add_missing_divisions()

    with patch("govuk_bank_holidays.cli.UrlDataSource") as mock_source:
        mock_source.return_value.load_data_source.return_value = downloaded
        result = CliRunner().invoke(main, ["--url", "https://example.com/bh.json", "download", str(target)])

    assert result.exit_code == 0, result.output
    mock_source.assert_called_once_with("https://example.com/bh.json")
    saved = DataSource.from_json(target.read_bytes())
    assert saved.divisions() == list(Division.all())
    assert [(h.date, h.title) for h in saved[Division.SCOTLAND]] == [
        (date(2010, 1, 1), "New Year’s Day"),
        (date(2026, 1, 1), "New Year’s Day"),
        (date(2026, 1, 2), "2nd January"),
    ]
    assert "Saved 3 bank holidays" in result.output


def test_download_new_file(tmp_path: Path) -> None:
    target = tmp_path / "new.json"
    downloaded = make_source({division: [(date(2026, 12, 25), "Christmas Day")] for division in Division.all()})
    with patch("govuk_bank_holidays.cli.UrlDataSource") as mock_source:
        mock_source.return_value.load_data_source.return_value = downloaded
        result = CliRunner().invoke(main, ["download", str(target)])
    assert result.exit_code == 0, result.output
    assert list(json.loads(target.read_text(encoding="utf-8"))) == [d.value for d in Division.all()]


def test_download_failure(tmp_path: Path) -> None:
    from govuk_bank_holidays import FetchError

    with patch("govuk_bank_holidays.cli.UrlDataSource") as mock_source:
        mock_source.return_value.load_data_source.side_effect = FetchError("offline")
        result = CliRunner().invoke(main, ["download", str(tmp_path / "x.json")])
    assert result.exit_code == 1
    assert "Error: offline" in result.output
    assert not (tmp_path / "x.json").exists()


def test_download_url_from_environment(tmp_path: Path) -> None:
    downloaded = make_source({Division.SCOTLAND: [(date(2026, 1, 2), "2nd January")]})
    with patch("govuk_bank_holidays.cli.UrlDataSource") as mock_source:
        mock_source.return_value.load_data_source.return_value = downloaded
        result = CliRunner().invoke(
            main, ["download", str(tmp_path / "bh.json")],
            env={"GOVUK_BANK_HOLIDAYS_URL": "https://mirror.example.com/bh.json"},
        )
    assert result.exit_code == 0, result.output
    mock_source.assert_called_once_with("https://mirror.example.com/bh.json")
