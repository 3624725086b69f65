"""Date handling for note file names - no I/O dependencies."""

from datetime import date, datetime
from pathlib import Path


def parse_file_name(file_name: str, time_format: str) -> datetime:
    """
    Parse the date encoded in a note file name.

    The extension is stripped and the basename parsed with `time_format`.
    Raises ValueError if the basename does not match, or is not exactly how
    `time_format` writes that date (strptime accepts "2024-4-5" for "%Y-%m-%d").
    """
    stem = Path(file_name).stem
    parsed = datetime.strptime(stem, time_format)
    if parsed.strftime(time_format) != stem:
        raise ValueError(f"file name {stem!r} is not in canonical form {parsed.strftime(time_format)!r}")
    return parsed


def is_note_file(file_name: str, file_ext: str, time_format: str) -> bool:
    """Check if a file name looks like a daily note."""
    if Path(file_name).suffix != f".{file_ext}":
        return False
    try:
        parse_file_name(file_name, time_format)
    except ValueError:
        return False
    return True


def is_archivable(file_date: datetime, now: datetime, after_days: int) -> bool:
    """
    Old enough to archive: strictly more than after_days * 24 hours before now.

    Pure function - no I/O.
    """
    age_hours = (now - file_date).total_seconds() / 3600
    return age_hours > after_days * 24


def month_key(file_date: date, month_format: str) -> str:
    """Key identifying the monthly archive a date belongs to."""
    return file_date.strftime(month_format)


def month_start(file_date: date) -> date:
    """First day of the month containing file_date."""
    if isinstance(file_date, datetime):
        file_date = file_date.date()
    return file_date.replace(day=1)
