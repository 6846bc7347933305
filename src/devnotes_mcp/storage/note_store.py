"""Flat-file storage for markdown notes.

One file per note, named ``<slug><extension>`` and stored directly in the
notes directory. File content is the note body verbatim; the last-modified
date comes from filesystem metadata.
"""
import datetime
import errno
import logging
from pathlib import Path
from typing import List, Union

from devnotes_mcp.exceptions import (
    ConfigurationError,
    ErrorCode,
    StorageError,
    ValidationError,
)
from devnotes_mcp.models.schema import NoteEntry, ReadResult
from devnotes_mcp.utils import slugify, title_from_filename

logger = logging.getLogger(__name__)


class NoteStore:
    """Create, read and list notes in a single directory.

    There is no locking: the last writer of a given slug wins, whether it is
    this process, another server process or an external editor.
    """

    def __init__(self, notes_dir: Union[str, Path], extension: str = ".md"):
        self.notes_dir = Path(notes_dir)
        self.extension = extension

    def ensure_directory(self) -> None:
        """Create the notes directory (with parents) if it does not exist."""
        if self.notes_dir.exists() and not self.notes_dir.is_dir():
            raise ConfigurationError(
                "Notes path exists but is not a directory",
                config_key="notes_dir",
            )
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                "Failed to create notes directory",
                operation="ensure_directory",
                path=str(self.notes_dir),
                code=ErrorCode.STORAGE_WRITE_FAILED,
                original_error=e,
            ) from e

    def filename_for(self, title: str) -> str:
        """Get the note filename for a title.

        Raises:
            ValidationError: If the title has no characters that survive
                slugification, which would otherwise produce a bare
                extension as the filename.
        """
        slug = slugify(title)
        if not slug.strip("-"):
            raise ValidationError(
                "Title must contain at least one letter or digit",
                field="title",
                value=title,
                code=ErrorCode.NOTE_TITLE_EMPTY_SLUG,
            )
        return f"{slug}{self.extension}"

    def path_for(self, title: str) -> Path:
        """Get the absolute path of the note file for a title."""
        return self.notes_dir / self.filename_for(title)

    def save(self, title: str, content: str) -> str:
        """Write a note, replacing any existing note with the same slug.

        Returns:
            The filename the note was written to.
        """
        filename = self.filename_for(title)
        self.ensure_directory()
        file_path = self.notes_dir / filename
        try:
            with open(file_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise StorageError(
                f"Failed to write note {filename}",
                operation="save",
                path=str(file_path),
                code=ErrorCode.STORAGE_WRITE_FAILED,
                original_error=e,
            ) from e
        logger.info(f"Saved note {filename} ({len(content)} chars)")
        return filename

    def list_notes(self) -> List[NoteEntry]:
        """List every note in the directory, sorted by filename.

        A missing directory lists as empty.
        """
        if not self.notes_dir.exists():
            logger.debug(f"Notes directory does not exist yet: {self.notes_dir}")
            return []

        entries: List[NoteEntry] = []
        try:
            for file_path in sorted(self.notes_dir.iterdir()):
                if not file_path.name.endswith(self.extension):
                    continue
                if not file_path.is_file():
                    continue
                mtime = file_path.stat().st_mtime
                entries.append(
                    NoteEntry(
                        title=title_from_filename(file_path.name, self.extension),
                        filename=file_path.name,
                        modified=datetime.datetime.fromtimestamp(
                            mtime, tz=datetime.timezone.utc
                        ).date(),
                    )
                )
        except OSError as e:
            raise StorageError(
                "Failed to list notes",
                operation="list_notes",
                path=str(self.notes_dir),
                code=ErrorCode.STORAGE_LIST_FAILED,
                original_error=e,
            ) from e

        if not entries:
            logger.debug(f"Notes directory is empty: {self.notes_dir}")
        return entries

    def read(self, title: str) -> ReadResult:
        """Read a note by title.

        A missing note gives ``ReadResult(found=False)`` rather than an error.
        """
        filename = self.filename_for(title)
        file_path = self.notes_dir / filename
        try:
            exists = file_path.is_file()
        except OSError as e:
            # A name longer than the filesystem allows cannot exist
            if e.errno != errno.ENAMETOOLONG:
                raise StorageError(
                    f"Failed to read note {filename}",
                    operation="read",
                    path=str(file_path),
                    code=ErrorCode.STORAGE_READ_FAILED,
                    original_error=e,
                ) from e
            exists = False
        if not exists:
            logger.debug(f"Note not found: {filename}")
            return ReadResult(found=False, filename=filename)

        try:
            with open(file_path, "r", encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(
                f"Failed to read note {filename}",
                operation="read",
                path=str(file_path),
                code=ErrorCode.STORAGE_READ_FAILED,
                original_error=e,
            ) from e
        return ReadResult(found=True, filename=filename, content=content)
