"""Functional core - pure archiving logic with no I/O."""

from .dates import is_archivable, is_note_file, month_key, month_start, parse_file_name
from .errors import ArchiveError, SectionError
from .notes import Entry, MonthArchive, NoteDocument, merge_entries, normalize_text

__all__ = [
    # Dates
    "parse_file_name",
    "is_note_file",
    "is_archivable",
    "month_key",
    "month_start",
    # Documents
    "Entry",
    "NoteDocument",
    "MonthArchive",
    "merge_entries",
    "normalize_text",
    # Errors
    "ArchiveError",
    "SectionError",
]
