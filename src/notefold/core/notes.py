"""Daily note and monthly archive documents.

Both kinds share the same named sections. A daily note holds one text body
per section; a monthly archive holds, per section, an ordered list of entries,
one for each day that contributed text to it.

Archive section content is merged at entry granularity: an entry is the pair
(date, body) and is only appended when no equal entry is already present, so
merging the same notes twice leaves the archive unchanged.
"""

from dataclasses import dataclass
from datetime import date, datetime

from notefold.config import Config

from .dates import month_start
from .errors import SectionError


@dataclass(frozen=True)
class Entry:
    """One day's contribution to an archive section."""

    date: date
    text: str


def merge_entries(dest: list[Entry], src: list[Entry]) -> list[Entry]:
    """
    Append entries of src missing from dest, keeping both orders.

    Entries already in dest stay first; mutates and returns dest.
    """
    for entry in src:
        if entry not in dest:
            dest.append(entry)
    return dest


def _trim_blank_lines(lines: list[str]) -> str:
    """Join lines, dropping blank lines at either end."""
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(line.rstrip() for line in lines[start:end])


def normalize_text(text: str) -> str:
    """Canonical form of a section body, as it reads back from a file."""
    return _trim_blank_lines(text.splitlines())


def section_line(config: Config, name: str) -> str:
    return f"{config.section_prefix}{name}{config.section_suffix}"


def split_sections(config: Config, text: str) -> tuple[str, dict[str, str]]:
    """
    Split document text into its header and section bodies.

    A section starts at a line exactly matching a configured section header.
    Sections absent from the text come back empty.
    """
    headers = {section_line(config, name): name for name in config.section_names}
    header_lines: list[str] = []
    bodies: dict[str, list[str]] = {name: [] for name in config.section_names}

    current = header_lines
    for line in text.splitlines():
        name = headers.get(line.rstrip())
        if name is not None:
            current = bodies[name]
            continue
        current.append(line)

    return (
        _trim_blank_lines(header_lines),
        {name: _trim_blank_lines(lines) for name, lines in bodies.items()},
    )


def _render_sections(config: Config, bodies: dict[str, str]) -> str:
    parts = []
    for name in config.section_names:
        part = section_line(config, name) + "\n"
        if bodies.get(name):
            part += bodies[name] + "\n"
        parts.append(part + "\n" * config.section_trailing_newlines)
    return "".join(parts)


class NoteDocument:
    """A single day's note."""

    def __init__(self, config: Config, note_date: date):
        if isinstance(note_date, datetime):
            note_date = note_date.date()
        self.config = config
        self.date = note_date
        self.sections: dict[str, str] = {name: "" for name in config.section_names}

    def __repr__(self) -> str:
        return f"NoteDocument({self.date.isoformat()})"

    @property
    def path_name(self) -> str:
        """File name of this note, relative to the note directory."""
        return f"{self.date.strftime(self.config.file_time_format)}.{self.config.file_ext}"

    @property
    def header(self) -> str:
        c = self.config
        return f"{c.header_prefix}{self.date.strftime(c.header_time_format)}{c.header_suffix}"

    def get_section(self, name: str) -> str:
        if name not in self.sections:
            raise SectionError(f"unknown section [{name}]")
        return self.sections[name]

    def set_section(self, name: str, text: str) -> None:
        if name not in self.sections:
            raise SectionError(f"unknown section [{name}]")
        self.sections[name] = normalize_text(text)

    def load_text(self, text: str) -> None:
        """Populate sections from the note's file text."""
        _, bodies = split_sections(self.config, text)
        self.sections = bodies

    def render(self) -> str:
        """Serialize to the note's file text."""
        head = self.header + "\n" + "\n" * self.config.header_trailing_newlines
        return head + _render_sections(self.config, self.sections)


class MonthArchive:
    """A month of daily notes, merged section by section."""

    def __init__(self, config: Config, month_date: date):
        self.config = config
        self.date = month_start(month_date)
        self.sections: dict[str, list[Entry]] = {name: [] for name in config.section_names}

    def __repr__(self) -> str:
        return f"MonthArchive({self.date.strftime('%Y-%m')})"

    @property
    def path_name(self) -> str:
        """File name of this archive, relative to the note directory."""
        c = self.config
        return f"{c.archive_file_prefix}{self.date.strftime(c.archive_month_time_format)}.{c.file_ext}"

    @property
    def header(self) -> str:
        c = self.config
        return f"{c.archive_header_prefix}{self.date.strftime(c.archive_month_time_format)}{c.archive_header_suffix}"

    def get_section(self, name: str) -> list[Entry]:
        if name not in self.sections:
            raise SectionError(f"unknown section [{name}]")
        return self.sections[name]

    def is_empty(self) -> bool:
        return not any(self.sections.values())

    def archive_section(self, note: NoteDocument, name: str) -> None:
        """Merge one section of a daily note into this archive."""
        if month_start(note.date) != self.date:
            raise SectionError(
                f"note for {note.date.isoformat()} does not belong in archive {self.path_name}"
            )
        text = normalize_text(note.get_section(name))
        if not text:
            return
        merge_entries(self.get_section(name), [Entry(note.date, text)])

    def merge(self, other: "MonthArchive") -> None:
        """Merge every section of another archive of the same month."""
        if other.date != self.date:
            raise SectionError(f"cannot merge archive {other.path_name} into {self.path_name}")
        for name, entries in other.sections.items():
            merge_entries(self.get_section(name), entries)

    # ============== Serialization ==============

    # Body lines that would read back as structure are written with this prefix
    ESCAPE = "\\"

    def _stamp(self, entry_date: date) -> str:
        c = self.config
        return (
            f"{c.archive_section_content_prefix}"
            f"{entry_date.strftime(c.file_time_format)}"
            f"{c.archive_section_content_suffix}"
        )

    def _parse_stamp(self, line: str) -> date | None:
        """Date of a stamp line. Only unindented lines are stamps."""
        c = self.config
        line = line.rstrip()
        prefix, suffix = c.archive_section_content_prefix, c.archive_section_content_suffix
        if not (line.startswith(prefix) and line.endswith(suffix)):
            return None
        inner = line[len(prefix) : len(line) - len(suffix)]
        try:
            return datetime.strptime(inner, c.file_time_format).date()
        except ValueError:
            return None

    def _escape(self, line: str) -> str:
        headers = {section_line(self.config, name) for name in self.config.section_names}
        if line.startswith(self.ESCAPE) or line in headers or self._parse_stamp(line) is not None:
            return self.ESCAPE + line
        return line

    def _parse_entries(self, name: str, body: str) -> list[Entry]:
        entries: list[Entry] = []
        current_date = None
        current_lines: list[str] = []

        def flush() -> None:
            if current_date is None:
                return
            text = _trim_blank_lines(current_lines)
            if text:
                merge_entries(entries, [Entry(current_date, text)])

        for line in body.splitlines():
            stamp = None if line.startswith(self.ESCAPE) else self._parse_stamp(line)
            if stamp is not None:
                flush()
                current_date, current_lines = stamp, []
                continue
            if current_date is None:
                if line.strip():
                    raise SectionError(f"content without a date stamp in section [{name}]: {line!r}")
                continue
            if line.startswith(self.ESCAPE):
                line = line[len(self.ESCAPE) :]
            current_lines.append(line)
        flush()
        return entries

    def load_text(self, text: str) -> None:
        """Populate sections from the archive's file text."""
        _, bodies = split_sections(self.config, text)
        self.sections = {name: self._parse_entries(name, body) for name, body in bodies.items()}

    def _render_entry(self, entry: Entry) -> str:
        body = "\n".join(self._escape(line) for line in entry.text.splitlines())
        return f"{self._stamp(entry.date)}\n{body}"

    def render(self) -> str:
        """Serialize to the archive's file text."""
        bodies = {
            name: "\n\n".join(self._render_entry(e) for e in entries)
            for name, entries in self.sections.items()
        }
        head = self.header + "\n" + "\n" * self.config.header_trailing_newlines
        return head + _render_sections(self.config, bodies)
