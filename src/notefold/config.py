"""Configuration management for notefold."""

import logging
import os
from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

NOTEFOLD_HOME = Path(os.environ.get("NOTEFOLD_HOME", Path.home() / "notefold"))
CONFIG_FILE = NOTEFOLD_HOME / "notefold.conf"
NOTE_DIR = NOTEFOLD_HOME / "notes"

_INT_KEYS = {
    "header_trailing_newlines",
    "section_trailing_newlines",
    "archive_after_days",
}


@dataclass
class Config:
    """notefold configuration."""

    note_dir: str = ""
    # Daily note files
    file_ext: str = "txt"
    file_time_format: str = "%Y-%m-%d"
    header_prefix: str = ""
    header_suffix: str = ""
    header_time_format: str = "[%a] %d %b %Y"
    header_trailing_newlines: int = 1
    # Sections, shared by daily notes and monthly archives
    section_prefix: str = "___"
    section_suffix: str = "___"
    section_trailing_newlines: int = 3
    section_names: list[str] = field(default_factory=lambda: ["TODO", "DONE", "NOTES"])
    # Monthly archives
    archive_after_days: int = 14
    archive_file_prefix: str = "archive-"
    archive_header_prefix: str = "ARCHIVE "
    archive_header_suffix: str = ""
    archive_section_content_prefix: str = "["
    archive_section_content_suffix: str = "]"
    archive_month_time_format: str = "%b%Y"

    @property
    def note_path(self) -> Path:
        """Directory holding daily notes and archives."""
        if self.note_dir:
            return Path(self.note_dir).expanduser()
        return NOTE_DIR

    def validate(self) -> None:
        """Raise ValueError if the configuration cannot be used."""
        if not self.section_names:
            raise ValueError("SECTION_NAMES must name at least one section")
        if len(set(self.section_names)) != len(self.section_names):
            raise ValueError(f"SECTION_NAMES contains duplicates: {self.section_names}")
        if self.archive_after_days < 0:
            raise ValueError(f"ARCHIVE_AFTER_DAYS must not be negative, got {self.archive_after_days}")
        if not self.file_time_format:
            raise ValueError("FILE_TIME_FORMAT must not be empty")
        if not self.archive_month_time_format:
            raise ValueError("ARCHIVE_MONTH_TIME_FORMAT must not be empty")
        # One file name per day, one archive per calendar month
        days = [date(2001, 1, 1), date(2001, 1, 2), date(2001, 2, 1), date(2002, 1, 1)]
        if not _distinguishes(self.file_time_format, days):
            raise ValueError(f"FILE_TIME_FORMAT {self.file_time_format!r} must identify a single day")
        month = self.archive_month_time_format
        if not _distinguishes(month, [date(2001, 1, 1), date(2001, 2, 1), date(2002, 1, 1)]):
            raise ValueError(f"ARCHIVE_MONTH_TIME_FORMAT {month!r} must identify a single month and year")
        if date(2001, 1, 1).strftime(month) != date(2001, 1, 28).strftime(month):
            raise ValueError(f"ARCHIVE_MONTH_TIME_FORMAT {month!r} must not depend on the day")

    def as_dict(self) -> dict:
        """Effective settings, keyed by config file key."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _distinguishes(time_format: str, days: list[date]) -> bool:
    """Check that time_format writes each of days differently."""
    return len({d.strftime(time_format) for d in days}) == len(days)


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            if end_quote != -1:
                return value[1:end_quote]
            return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def parse_config(text: str) -> Config:
    """Parse KEY = value lines into a Config."""
    config = Config()
    known = {f.name for f in fields(Config)}

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        if key not in known:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue

        match key:
            case "section_names":
                config.section_names = [s.strip() for s in value.split(",") if s.strip()]
            case _ if key in _INT_KEYS:
                try:
                    setattr(config, key, int(value))
                except ValueError:
                    logger.warning(f"Invalid integer for {key.upper()}: {value!r}, keeping default")
            case _:
                setattr(config, key, value)

    return config


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from notefold.conf file."""
    config_file = config_file or CONFIG_FILE
    if not config_file.exists():
        return Config()
    return parse_config(config_file.read_text())
