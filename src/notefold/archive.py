"""Monthly archiving of daily notes.

The Archiver collects old daily notes into one in-memory archive per month,
then merges each month with any archive already on disk and writes it out.
run_archive wires it to a note directory for the CLI.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .adapters.file_notes import FileNoteStore
from .config import Config
from .core.dates import is_archivable, month_key, parse_file_name
from .core.errors import ArchiveError, SectionError
from .core.notes import MonthArchive, NoteDocument
from .ports.note_store import NoteStore

logger = logging.getLogger(__name__)


class Archiver:
    """
    Consolidates daily notes into monthly archives.

    `now` is the reference time for deciding whether a note is old enough
    to archive. `months` maps month keys to the archive being built.
    """

    def __init__(self, config: Config, store: NoteStore, now: datetime):
        self.config = config
        self.store = store
        self.now = now
        self.months: dict[str, MonthArchive] = {}

    def get_or_create(self, file_date: datetime) -> MonthArchive:
        """Get the archive for a date's month, creating it if needed."""
        key = month_key(file_date, self.config.archive_month_time_format)
        archive = self.months.get(key)
        if archive is None:
            archive = MonthArchive(self.config, file_date)
            self.months[key] = archive
            logger.debug(f"Started archive [{archive.path_name}] for month {key}")
        return archive

    def add(self, file_name: str) -> bool:
        """
        Add a daily note to its month's archive.

        Returns False without doing anything if the note is too recent.
        Raises ArchiveError if the name does not parse, the note cannot be
        read, or its sections cannot be merged. Never writes to storage.
        """
        try:
            file_date = parse_file_name(file_name, self.config.file_time_format)
        except ValueError as e:
            raise ArchiveError(f"cannot add unparsable file name [{file_name}] to archive: {e}", file_name) from e

        # recent files are not archived
        if not is_archivable(file_date, self.now, self.config.archive_after_days):
            logger.debug(f"Not archiving recent file [{file_name}]")
            return False

        note = NoteDocument(self.config, file_date)
        if note.path_name != Path(file_name).name:
            raise ArchiveError(
                f"cannot add file [{file_name}] to archive: expected note file name [{note.path_name}]",
                file_name,
            )
        try:
            self.store.read(note)
        except (OSError, UnicodeDecodeError, SectionError) as e:
            raise ArchiveError(f"cannot add unreadable file [{file_name}] to archive: {e}", file_name) from e

        archive = self.get_or_create(file_date)
        for section in self.config.section_names:
            try:
                archive.archive_section(note, section)
            except SectionError as e:
                raise ArchiveError(f"cannot add contents from [{file_name}] to archive: {e}", file_name) from e
        return True

    def write(self) -> list[str]:
        """
        Merge each month with its existing archive and write it.

        Returns the written archive file names. Stops at the first failure;
        months written before it stay written.
        """
        written = []
        for archive in sorted(self.months.values(), key=lambda a: a.date):
            path_name = archive.path_name
            result = archive
            if self.store.exists(archive):
                existing = MonthArchive(self.config, archive.date)
                try:
                    self.store.read(existing)
                except (OSError, UnicodeDecodeError, SectionError) as e:
                    raise ArchiveError(f"unable to open existing archive file [{path_name}]: {e}", path_name) from e
                try:
                    existing.merge(archive)
                except SectionError as e:
                    raise ArchiveError(f"unable to merge existing archive file [{path_name}]: {e}", path_name) from e
                result = existing

            try:
                self.store.overwrite(result)
            except OSError as e:
                raise ArchiveError(f"failed to write archive file [{path_name}]: {e}", path_name) from e
            logger.info(f"Wrote archive file [{path_name}]")
            written.append(path_name)

        self.months.clear()
        return written


# ============== Archive Run ==============


@dataclass
class ArchiveResult:
    """What an archive run did."""

    archived: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def run_archive(
    config: Config,
    store: FileNoteStore,
    now: datetime,
    delete: bool = False,
    no_write: bool = False,
) -> ArchiveResult:
    """
    Archive every old enough note in the store.

    Unarchivable notes are logged and skipped. With no_write, nothing is
    written; with delete, archived notes are removed afterwards. Raises
    ValueError for an unusable config before touching any file.
    """
    config.validate()
    result = ArchiveResult()
    archiver = Archiver(config, store, now)

    for file_name in store.list_note_files():
        try:
            added = archiver.add(file_name)
        except ArchiveError as e:
            logger.warning(f"Skipping unarchivable file [{file_name}]: {e}")
            result.skipped.append(file_name)
            continue
        if added:
            result.archived.append(file_name)

    if not no_write:
        result.written = archiver.write()

    if not delete:
        return result

    for file_name in result.archived:
        try:
            store.delete(file_name)
        except OSError as e:
            logger.warning(f"Unable to remove file [{file_name}]: {e}")
            continue
        result.deleted.append(file_name)

    if result.deleted:
        logger.info(f"Deleted {len(result.deleted)} archived file(s)")
    return result
