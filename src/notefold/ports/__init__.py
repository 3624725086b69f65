"""Ports - interfaces/protocols for external dependencies."""

from .note_store import Document, NoteStore

__all__ = [
    "Document",
    "NoteStore",
]
