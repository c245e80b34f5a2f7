"""
Command line tool for UK bank holidays.

Inspired by the GOV.UK bank holidays page: check today, find the next or previous
bank holiday, list upcoming work days, show a calendar and refresh the bundled data.
"""

from __future__ import annotations

import sys
import logging
from calendar import monthrange
from datetime import date
from pathlib import Path
from typing import List, Optional

import click

from . import BankHolidayCalendar, DataSource, Division, UrlDataSource
from .data_source import SOURCE_URL
from .errors import BankHolidayError


MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]

WEEKDAYS = ['Mo', 'Tu', 'We', 'Th', 'Fr', 'Sa', 'Su']


class DivisionType(click.ParamType):
    name = "division"

    def convert(self, value, param, ctx):
        if isinstance(value, Division):
            return value
        try:
            return Division.parse(value)
        except ValueError:
            choices = ", ".join(division.value for division in Division.all())
            self.fail(f"{value!r} is not a division, choose from: {choices}", param, ctx)


DIVISION = DivisionType()
ISO_DATE = click.DateTime(formats=['%Y-%m-%d'])


def _where(division: Optional[Division]) -> str:
    return f"in {division.label}" if division is not None else "across the UK"


def render_month(calendar: BankHolidayCalendar, year: int, month: int,
                 division: Optional[Division] = None, print_year: bool = False) -> str:
    """
    Render a single month calendar.

    Args:
        calendar: Bank holiday calendar to use
        year: Year to render
        month: Month to render (1-12)
        division: Division to consider, None for bank holidays common to all divisions
        print_year: Whether to include year in title

    Returns:
        String representation of the month, non-work days in brackets
    """
    lines = []

    title = MONTHS[month - 1]
    if print_year:
        title += f' {year}'
    lines.append(f'{title:^28}'.rstrip())

    # each day column is 4 characters wide
    lines.append(''.join(f' {day} ' for day in WEEKDAYS).rstrip())

    first_date = date(year, month, 1)
    current_line = ' ' * (4 * first_date.weekday())

    for day in range(1, monthrange(year, month)[1] + 1):
        d = date(year, month, day)
        if calendar.is_work_day(d, division):
            current_line += f' {day:2} '
        else:
            current_line += f'[{day:2}]'

        if d.weekday() == 6:
            lines.append(current_line)
            current_line = ''

    if current_line:
        lines.append(current_line)

    return '\n'.join(line.rstrip() for line in lines)


def concat_months(month_strings: List[str], width: int = 28) -> str:
    """
    Concatenate multiple month strings horizontally.

    Args:
        month_strings: List of month string representations
        width: Width of each month column

    Returns:
        Horizontally concatenated months
    """
    as_lines = [s.splitlines() for s in month_strings]
    max_lines = max(len(lines) for lines in as_lines)

    for lines in as_lines:
        lines.extend([''] * (max_lines - len(lines)))

    rows = []
    for row_parts in zip(*as_lines):
        rows.append('   '.join(part.ljust(width) for part in row_parts))

    return '\n'.join(row.rstrip() for row in rows)


def render_year(calendar: BankHolidayCalendar, year: int, division: Optional[Division] = None) -> str:
    """Render a full year calendar (3 months per row)."""
    rows = []
    for row in range(4):
        months = [render_month(calendar, year, row * 3 + col + 1, division) for col in range(3)]
        rows.append(concat_months(months, 28))

    return '\n'.join([f'{year:^88}'.rstrip(), '\n\n'.join(rows)])


def _calendar(ctx: click.Context) -> BankHolidayCalendar:
    """Build the calendar once per invocation, from GOV.UK unless --cached was given."""
    obj = ctx.ensure_object(dict)
    if 'calendar' not in obj:
        if obj.get('cached'):
            obj['calendar'] = BankHolidayCalendar.cached()
        else:
            obj['calendar'] = BankHolidayCalendar.load(url=obj.get('url', SOURCE_URL), merge_cached=True)
    return obj['calendar']


@click.group()
@click.option('--url', envvar='GOVUK_BANK_HOLIDAYS_URL', default=SOURCE_URL, show_default=True,
              help='Where to load bank holidays from')
@click.option('--cached', is_flag=True, help='Only use the bundled bank holidays, no network access')
@click.option('-v', '--verbose', is_flag=True, help='Log debug information to stderr')
@click.pass_context
def main(ctx: click.Context, url: str, cached: bool, verbose: bool):
    """
    Bank holiday information from GOV.UK data.

    Examples:

        # Is today a bank holiday across the UK?
        govuk-bank-holidays today

        # Next bank holiday in Scotland
        govuk-bank-holidays next --division scotland

        # Next 5 work days in Northern Ireland after a date
        govuk-bank-holidays work-days -d northern-ireland --date 2026-07-10 -n 5

        # Show July 2026 for Northern Ireland
        govuk-bank-holidays show 2026 7 -d "Northern Ireland"

        # Refresh a JSON file with the latest GOV.UK data
        govuk-bank-holidays download bank-holidays.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
    obj = ctx.ensure_object(dict)
    obj['url'] = url
    obj['cached'] = cached


@main.command()
@click.option('-d', '--division', type=DIVISION, default=None, help='Division, all divisions if omitted')
@click.pass_context
def today(ctx: click.Context, division: Optional[Division]):
    """Print whether today is a bank holiday."""
    calendar = _calendar(ctx)
    now = date.today()
    holiday = calendar.holiday_on(now, division)
    if holiday is not None:
        click.echo(f"Today ({now.isoformat()}) is a bank holiday {_where(division)}: {holiday.title}")
    else:
        click.echo(f"Today ({now.isoformat()}) is not a bank holiday {_where(division)}")


@main.command(name='next')
@click.option('-d', '--division', type=DIVISION, default=None, help='Division, all divisions if omitted')
@click.option('--date', 'on', type=ISO_DATE, default=None, help='Start from this date (YYYY-MM-DD), today if omitted')
@click.pass_context
def next_(ctx: click.Context, division: Optional[Division], on):
    """Print the next bank holiday."""
    calendar = _calendar(ctx)
    start = on.date() if on is not None else date.today()
    holiday = calendar.next_holiday(start, division)
    if holiday is None:
        click.echo("Next bank holiday cannot be determined", err=True)
        sys.exit(2)
    click.echo(f"The next bank holiday {_where(division)} is {holiday.title} ({holiday.date.isoformat()})")


@main.command()
@click.option('-d', '--division', type=DIVISION, default=None, help='Division, all divisions if omitted')
@click.option('--date', 'on', type=ISO_DATE, default=None, help='Start from this date (YYYY-MM-DD), today if omitted')
@click.pass_context
def previous(ctx: click.Context, division: Optional[Division], on):
    """Print the previous bank holiday."""
    calendar = _calendar(ctx)
    start = on.date() if on is not None else date.today()
    holiday = calendar.previous_holiday(start, division)
    if holiday is None:
        click.echo("Previous bank holiday cannot be determined", err=True)
        sys.exit(2)
    click.echo(f"The previous bank holiday {_where(division)} was {holiday.title} ({holiday.date.isoformat()})")


@main.command(name='work-days')
@click.option('-d', '--division', type=DIVISION, default=None, help='Division, all divisions if omitted')
@click.option('--date', 'on', type=ISO_DATE, default=None, help='Start from this date (YYYY-MM-DD), today if omitted')
@click.option('-n', '--count', type=click.IntRange(min=1), default=5, show_default=True,
              help='Number of work days to list')
@click.option('--before', is_flag=True, help='List work days before the date instead of after')
@click.pass_context
def work_days(ctx: click.Context, division: Optional[Division], on, count: int, before: bool):
    """List work days after (or before) a date, skipping bank holidays."""
    calendar = _calendar(ctx)
    start = on.date() if on is not None else date.today()
    if before:
        days = calendar.iter_work_days_before(start, division).take(count)
    else:
        days = calendar.iter_work_days_after(start, division).take(count)
    for d in days:
        click.echo(f"{d.isoformat()} {d.strftime('%A')}")


@main.command()
@click.argument('year', type=int, required=False)
@click.argument('month', type=click.IntRange(1, 12), required=False)
@click.option('-d', '--division', type=DIVISION, default=None, help='Division, all divisions if omitted')
@click.pass_context
def show(ctx: click.Context, year: Optional[int], month: Optional[int], division: Optional[Division]):
    """
    Display a calendar showing work days and bank holidays.

    Work days are shown as regular numbers.
    Bank holidays and weekends are shown in brackets [like this].
    """
    calendar = _calendar(ctx)
    if year is None:
        year = date.today().year

    if month is not None:
        click.echo(render_month(calendar, year, month, division, print_year=True))
        start, end = date(year, month, 1), date(year, month, monthrange(year, month)[1])
    else:
        click.echo(render_year(calendar, year, division))
        start, end = date(year, 1, 1), date(year, 12, 31)

    holidays = [h for h in calendar.holidays(division) if start <= h.date <= end]
    if holidays:
        click.echo('')
        for holiday in holidays:
            click.echo(str(holiday))


@main.command()
@click.argument('path', type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def download(ctx: click.Context, path: Path):
    """
    Download bank holidays from GOV.UK into a JSON file.

    If the file already exists, downloaded bank holidays are merged into it,
    replacing those on the same dates, so older years are kept.
    """
    url = ctx.ensure_object(dict).get('url', SOURCE_URL)
    try:
        data = UrlDataSource(url).load_data_source()
        if path.is_file():
            existing = DataSource.from_json(path.read_bytes())
            existing.sort()
            existing.merge(data)
            data = existing
        data.sort()
        data.add_missing_divisions()
        path.write_text(data.to_json(), encoding='utf-8')
    except (BankHolidayError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Saved {sum(len(events) for _, events in data.items())} bank holidays to {path}")


if __name__ == '__main__':
    main()
