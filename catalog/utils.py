import string
import secrets
import re
from datetime import date, datetime, timedelta
from markupsafe import escape

def generate_random_id():
    digits = string.digits
    letters = string.ascii_uppercase
    letter_part = ''.join([secrets.choice(letters) for _ in range(2)])
    num_part = ''.join([secrets.choice(digits) for _ in range(8)])
    return f'{letter_part}-{num_part}'

def generate_copy_id():
    id = generate_random_id()
    return f'CP-{id}'

def sanitize_text(value: str | None) -> str:
    """Trim surrounding whitespace and escape HTML markup characters."""
    if value is None:
        return ''
    return str(escape(str(value).strip()))

REDUCED_DATE_RE = re.compile(r'^([0-9]{4})(?:-([0-9]{2}))?$')
ORDINAL_DATE_RE = re.compile(r'^([0-9]{4})-?([0-9]{3})$')
WEEK_DATE_RE = re.compile(r'^([0-9]{4})-?W([0-9]{2})(?:-?([1-7]))?$')

def parse_iso8601_date(value: str) -> date:
    """
    Parse an ISO-8601 date or datetime string and return the calendar date.

    Reduced precision forms (`2026`, `2026-10`) resolve to the first day of the
    year or month, ordinal (`2026-291`) and week (`2026-W42`) dates are supported.
    Raises ValueError when `value` is not ISO-8601.
    """
    value = value.strip()
    match = REDUCED_DATE_RE.match(value)
    if match:
        year, month = match.groups()
        return date(int(year), int(month or 1), 1)
    match = ORDINAL_DATE_RE.match(value)
    if match:
        year, day = int(match.group(1)), int(match.group(2))
        if day < 1:
            raise ValueError(f'Invalid ordinal date: {value}')
        ordinal = date(year, 1, 1) + timedelta(days=day - 1)
        if ordinal.year != year:
            raise ValueError(f'Invalid ordinal date: {value}')
        return ordinal
    match = WEEK_DATE_RE.match(value)
    if match:
        year, week, weekday = match.groups()
        return date.fromisocalendar(int(year), int(week), int(weekday or 1))
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    # full timestamps such as 2026-10-18T09:30:00Z are accepted, only the date is kept
    return datetime.fromisoformat(value).date()

def format_date(value: date | None) -> str:
    if value is None:
        return ''
    return value.strftime('%b %d, %Y')
