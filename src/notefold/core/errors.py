"""Exceptions raised by the archiving core."""


class SectionError(ValueError):
    """Raised when section content is missing, misplaced or malformed."""

    pass


class ArchiveError(Exception):
    """Raised when a daily note or a monthly archive cannot be processed.

    `path` names the daily file or archive file that failed.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
