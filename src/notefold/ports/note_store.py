"""Note storage interface."""

from typing import Protocol


class Document(Protocol):
    """A note or archive that knows its file name and text form."""

    @property
    def path_name(self) -> str:
        """File name relative to the note directory."""
        ...

    def load_text(self, text: str) -> None:
        ...

    def render(self) -> str:
        ...


class NoteStore(Protocol):
    """Interface for reading and writing notes and archives."""

    def read(self, document: Document) -> None:
        """Populate a document from storage. Fails if it does not exist or is malformed."""
        ...

    def overwrite(self, document: Document) -> None:
        """Write a document to storage, replacing any prior content."""
        ...

    def exists(self, document: Document) -> bool:
        """Check if a document exists in storage."""
        ...
