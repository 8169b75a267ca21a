"""
File Operations Tools

Single-file operations: read, write, move, delete, existence and metadata.

Each operation resolves its path(s) with :func:`resolve_path`, performs one
filesystem action and either returns its success value or raises one of the
errors in :mod:`fsgate.utils.exceptions`. The ``filesystem_*`` tool functions
at the bottom wrap them into the ``{"success", "result" | "error"}`` envelope.
Nothing is rolled back on failure: a parent directory created before a failed
write stays in place.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Optional

from fsgate.constants import SIZE_UNITS, WRITE_PERMISSION_BITS
from fsgate.utils.error_handling import tool_error_handler
from fsgate.utils.exceptions import (
    FsIOError,
    NotFoundError,
    WrongTypeError,
    describe_os_error,
)

from .path_resolution import resolve_path

logger = logging.getLogger(__name__)


def _ensure_parent_directory(path: str, message_prefix: str) -> None:
    """Create the missing parent directories of ``path``, if it names any."""
    parent = os.path.dirname(path)
    if not parent or os.path.exists(parent):
        return
    try:
        os.makedirs(parent, exist_ok=True)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"{message_prefix} '{parent}': {describe_os_error(e)}", path=parent, cause=e
        ) from e
    logger.info(f"Created directories: {parent}")


def format_size(size: int) -> str:
    """
    Scale a byte count by powers of 1024.

    Plain bytes are shown as an integer, larger units with two decimals,
    e.g. ``512 B``, ``1.50 KB``. TB is the largest unit.
    """
    scaled = float(size)
    unit_index = 0
    while scaled >= 1024.0 and unit_index < len(SIZE_UNITS) - 1:
        scaled /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size} {SIZE_UNITS[0]}"
    return f"{scaled:.2f} {SIZE_UNITS[unit_index]}"


@dataclass(frozen=True)
class FileInfo:
    """Metadata snapshot of one path, taken without following symlinks."""
    path: str
    file_type: str
    size_bytes: int
    read_only: bool
    modified_epoch: Optional[int]

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> "FileInfo":
        if stat.S_ISDIR(st.st_mode):
            file_type = "Directory"
        elif stat.S_ISREG(st.st_mode):
            file_type = "File"
        elif stat.S_ISLNK(st.st_mode):
            file_type = "Symlink"
        else:
            file_type = "Unknown"

        modified = int(st.st_mtime) if st.st_mtime >= 0 else None
        return cls(
            path=path,
            file_type=file_type,
            size_bytes=st.st_size,
            read_only=not (st.st_mode & WRITE_PERMISSION_BITS),
            modified_epoch=modified,
        )

    def render(self) -> str:
        if self.modified_epoch is None:
            modified = "Unknown"
        else:
            modified = f"{self.modified_epoch} seconds since epoch"
        return (
            f"Path: {self.path}\n"
            f"Type: {self.file_type}\n"
            f"Size: {format_size(self.size_bytes)} ({self.size_bytes} bytes)\n"
            f"Read-only: {'yes' if self.read_only else 'no'}\n"
            f"Modified: {modified}"
        )


def read_file(path: str) -> str:
    """
    Read a whole file as UTF-8 text.

    Line endings are returned exactly as stored.

    Raises:
        ResolutionError: ``~`` expansion failed
        FsIOError: The file is missing, unreadable or not valid UTF-8
    """
    resolved = resolve_path(path)
    try:
        with open(resolved, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to read file '{resolved}': {describe_os_error(e)}", path=resolved, cause=e
        ) from e

    logger.debug(f"Read file: {resolved} ({len(content)} characters)")
    return content


def write_file(path: str, content: str) -> str:
    """
    Create or overwrite a file, creating missing parent directories first.

    The content is encoded before anything on disk is touched, so text that
    cannot be encoded as UTF-8 leaves an existing file intact.

    Raises:
        ResolutionError: ``~`` expansion failed
        FsIOError: The content is not encodable, a parent directory could not
            be created or the write failed
    """
    resolved = resolve_path(path)
    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FsIOError(
            f"Failed to write to file '{resolved}': {describe_os_error(e)}", path=resolved, cause=e
        ) from e

    _ensure_parent_directory(resolved, "Failed to create parent directory")

    try:
        with open(resolved, "wb") as f:
            f.write(data)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to write to file '{resolved}': {describe_os_error(e)}", path=resolved, cause=e
        ) from e

    logger.info(f"Wrote file: {resolved} ({len(content)} characters)")
    return f"Successfully wrote to file '{resolved}'"


def move_path(source: str, destination: str) -> str:
    """
    Rename ``source`` to ``destination``.

    The destination's parent directories are created when missing. This is a
    plain rename, so it does not cross filesystems and an existing destination
    file is replaced where the platform allows it.

    Raises:
        ResolutionError: ``~`` expansion failed for either path
        NotFoundError: ``source`` does not exist
        FsIOError: Parent creation or the rename failed
    """
    source_path = resolve_path(source)
    dest_path = resolve_path(destination)

    if not os.path.exists(source_path):
        raise NotFoundError(f"Source path '{source_path}' does not exist", path=source_path)

    _ensure_parent_directory(dest_path, "Failed to create destination parent directory")

    try:
        os.rename(source_path, dest_path)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to move '{source_path}' to '{dest_path}': {describe_os_error(e)}",
            path=source_path,
            cause=e,
            destination=dest_path,
        ) from e

    logger.info(f"Moved {source_path} -> {dest_path}")
    return f"Successfully moved '{source_path}' to '{dest_path}'"


def delete_file(path: str) -> str:
    """
    Remove a single non-directory entry.

    Raises:
        ResolutionError: ``~`` expansion failed
        NotFoundError: Nothing exists at ``path``
        WrongTypeError: ``path`` is a directory
        FsIOError: The removal failed
    """
    resolved = resolve_path(path)

    if not os.path.exists(resolved):
        raise NotFoundError(f"File '{resolved}' does not exist", path=resolved)
    if os.path.isdir(resolved):
        raise WrongTypeError(
            f"'{resolved}' is a directory, use delete-directory instead", path=resolved
        )

    try:
        os.remove(resolved)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to delete file '{resolved}': {describe_os_error(e)}", path=resolved, cause=e
        ) from e

    logger.info(f"Deleted file: {resolved}")
    return f"Successfully deleted file '{resolved}'"


def file_exists(path: str) -> bool:
    """Whether anything exists at ``path`` (symlinks are followed)."""
    return os.path.exists(resolve_path(path))


def get_file_info(path: str) -> str:
    """
    Describe the metadata of ``path`` as a five-line block.

    Raises:
        ResolutionError: ``~`` expansion failed
        FsIOError: The metadata could not be read
    """
    resolved = resolve_path(path)
    try:
        st = os.lstat(resolved)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to get metadata for '{resolved}': {describe_os_error(e)}", path=resolved, cause=e
        ) from e

    return FileInfo.from_stat(resolved, st).render()


# ============================================================================
# Tool wrappers
# ============================================================================

@tool_error_handler("read-file")
def filesystem_read_file(path: str) -> str:
    """Read the entire file at ``path`` as text."""
    return read_file(path)


@tool_error_handler("write-file")
def filesystem_write_file(path: str, content: str) -> str:
    """Write ``content`` to ``path``, creating parent directories as needed."""
    return write_file(path, content)


@tool_error_handler("move-path")
def filesystem_move_path(source: str, destination: str) -> str:
    """Move or rename a file or directory."""
    return move_path(source, destination)


@tool_error_handler("delete-file")
def filesystem_delete_file(path: str) -> str:
    """Delete a file (not a directory)."""
    return delete_file(path)


@tool_error_handler("file-exists")
def filesystem_file_exists(path: str) -> bool:
    """Check whether a path exists."""
    return file_exists(path)


@tool_error_handler("get-file-info")
def filesystem_get_file_info(path: str) -> str:
    """Report type, size, read-only flag and modification time of a path."""
    return get_file_info(path)
