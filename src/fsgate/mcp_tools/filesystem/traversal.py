"""
Directory Traversal

Directory scanning shared by the listing, tree and search operations.

Both walkers are pre-order and keep an explicit stack of pending levels
instead of recursing, so a deep tree cannot hit the interpreter's recursion
limit. The tree walker sorts each level by name for display; the search walker
keeps the order the operating system enumerates entries in.
"""

import logging
import os
from typing import Iterator, List, Tuple, Union

from fsgate.constants import (
    TREE_BRANCH,
    TREE_DIR_MARKER,
    TREE_LAST_BRANCH,
    TREE_PIPE_EXTENSION,
    TREE_SPACE_EXTENSION,
    TREE_UNKNOWN_MARKER,
)
from fsgate.utils.exceptions import FsIOError, describe_os_error

logger = logging.getLogger(__name__)

# A scanned slot is either an entry or the error raised while reading it
ScannedEntry = Union[os.DirEntry, OSError]


def display_name(name: str) -> str:
    """Render a file name for output, replacing bytes that are not valid UTF-8."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def scan_directory(directory: str) -> List[ScannedEntry]:
    """
    Read every entry of ``directory``.

    Failing to open the directory raises; a failure while reading an
    individual entry is kept in the returned list as the ``OSError`` itself so
    each caller can decide whether to report, skip or abort on it.

    Raises:
        FsIOError: The directory cannot be opened
    """
    try:
        iterator = os.scandir(directory)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to read directory '{directory}': {describe_os_error(e)}",
            path=directory,
            cause=e,
        ) from e

    entries: List[ScannedEntry] = []
    with iterator:
        while True:
            try:
                entry = next(iterator)
            except StopIteration:
                break
            except OSError as e:
                # the iterator is closed after a read error, the next call stops
                entries.append(e)
                continue
            entries.append(entry)
    return entries


def _sort_key(scanned: ScannedEntry) -> Tuple[int, str]:
    if isinstance(scanned, OSError):
        return (0, "")
    try:
        scanned.name.encode("utf-8")
    except UnicodeEncodeError:
        return (0, "")
    return (1, scanned.name)


def _tree_level(directory: str) -> Iterator[Tuple[bool, ScannedEntry]]:
    entries = sorted(scan_directory(directory), key=_sort_key)
    last_index = len(entries) - 1
    for index, scanned in enumerate(entries):
        yield index == last_index, scanned


def _tree_marker(entry: os.DirEntry) -> str:
    try:
        is_dir = entry.is_dir(follow_symlinks=False)
    except OSError:
        return TREE_UNKNOWN_MARKER
    return TREE_DIR_MARKER if is_dir else ""


def render_tree(root: str, max_depth: int) -> str:
    """
    Render the subtree under ``root`` as connector-prefixed text.

    Entries directly under ``root`` are depth 0; a level is rendered while its
    depth does not exceed ``max_depth``. Each line reads
    ``<prefix><connector><marker><name>``, where the marker is ``[DIR] `` for
    directories and ``[?] `` when the entry type cannot be read. Entries that
    failed to read are skipped.

    Args:
        root: Directory to render (already resolved)
        max_depth: Deepest level to render, inclusive

    Returns:
        str: The rendered tree, one newline-terminated line per entry

    Raises:
        FsIOError: Any directory in the subtree cannot be opened
    """
    lines: List[str] = []
    if max_depth < 0:
        return ""

    stack = [(_tree_level(root), "", 0)]
    while stack:
        level, prefix, depth = stack[-1]
        item = next(level, None)
        if item is None:
            stack.pop()
            continue

        is_last, scanned = item
        if isinstance(scanned, OSError):
            continue

        connector = TREE_LAST_BRANCH if is_last else TREE_BRANCH
        extension = TREE_SPACE_EXTENSION if is_last else TREE_PIPE_EXTENSION
        lines.append(f"{prefix}{connector}{_tree_marker(scanned)}{display_name(scanned.name)}\n")

        if os.path.isdir(scanned.path) and depth + 1 <= max_depth:
            stack.append((_tree_level(scanned.path), prefix + extension, depth + 1))

    return "".join(lines)


def search_names(root: str, pattern: str) -> List[str]:
    """
    Collect every path under ``root`` whose file name contains ``pattern``.

    Matching is a case-insensitive substring test on the name only.
    Directories are searched whether or not they match themselves.

    Returns:
        List[str]: Matching paths in traversal order

    Raises:
        FsIOError: Any directory or entry in the subtree cannot be read
    """
    needle = pattern.lower()
    matches: List[str] = []

    stack = [iter(scan_directory(root))]
    while stack:
        scanned = next(stack[-1], None)
        if scanned is None:
            stack.pop()
            continue

        if isinstance(scanned, OSError):
            raise FsIOError(describe_os_error(scanned), path=root, cause=scanned)

        if needle in display_name(scanned.name).lower():
            matches.append(display_name(scanned.path))
        if os.path.isdir(scanned.path):
            stack.append(iter(scan_directory(scanned.path)))

    logger.debug(f"Name search for '{pattern}' under {root}: {len(matches)} matches")
    return matches
