"""File-based note storage adapter."""

import logging
from pathlib import Path

from notefold.config import Config
from notefold.core.dates import is_note_file, parse_file_name
from notefold.ports.note_store import Document

logger = logging.getLogger(__name__)


class FileNoteStore:
    """
    File-based note storage.

    Implements NoteStore protocol. Daily notes and monthly archives live
    side by side in one directory, one text file each.
    """

    def __init__(self, note_dir: Path | str, config: Config):
        self.note_dir = Path(note_dir).expanduser()
        self.note_dir.mkdir(parents=True, exist_ok=True)
        self.config = config

    def path_for(self, document: Document) -> Path:
        """Get the file path for a document."""
        return self.note_dir / document.path_name

    def read(self, document: Document) -> None:
        """Populate a document from its file. Raises FileNotFoundError if missing."""
        document.load_text(self.path_for(document).read_text(encoding="utf-8"))

    def overwrite(self, document: Document) -> None:
        """Write/overwrite a document's file."""
        path = self.path_for(document)
        # Write beside the target then rename, so the file is never half-written
        tmp = path.with_name(f".{path.name}.tmp")
        tmp.write_text(document.render(), encoding="utf-8")
        tmp.replace(path)

    def exists(self, document: Document) -> bool:
        """Check if a document's file exists."""
        return self.path_for(document).exists()

    def list_note_files(self) -> list[str]:
        """List daily note file names, oldest first."""
        fmt = self.config.file_time_format
        names = [
            path.name
            for path in self.note_dir.iterdir()
            if path.is_file() and is_note_file(path.name, self.config.file_ext, fmt)
        ]
        return sorted(names, key=lambda name: parse_file_name(name, fmt))

    def delete(self, file_name: str) -> None:
        """Remove a file from the note directory."""
        (self.note_dir / file_name).unlink()
        logger.debug(f"Deleted {file_name}")
