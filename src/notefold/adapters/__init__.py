"""Adapters - I/O implementations of ports."""

from .file_notes import FileNoteStore

__all__ = [
    "FileNoteStore",
]
