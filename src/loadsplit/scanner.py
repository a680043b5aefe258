"""Directory scanning: discovers files to partition and reads their sizes."""

import fnmatch
import logging
import os

from loadsplit.errors import ScanError
from loadsplit.utils import DEFAULT_PATTERN
from loadsplit.worker import Item


logger = logging.getLogger(__name__)


def find_files(directory: str, pattern: str = DEFAULT_PATTERN, recursive: bool = False) -> list[str]:
    """List regular files under `directory` whose name matches `pattern`.

    Args:
        directory: Directory to scan
        pattern: Shell-style glob matched against the file name
        recursive: If True, descend into subdirectories

    Returns:
        Matching paths joined onto `directory`, sorted for a stable order
    """
    found: list[str] = []
    if recursive:
        for root, dirs, files in os.walk(directory):
            dirs.sort()
            for name in fnmatch.filter(files, pattern):
                found.append(os.path.join(root, name))
    else:
        for name in fnmatch.filter(os.listdir(directory), pattern):
            filepath = os.path.join(directory, name)
            if os.path.isfile(filepath):
                found.append(filepath)
    return sorted(found)


def collect_items(directory: str, pattern: str = DEFAULT_PATTERN, recursive: bool = False) -> list[Item]:
    """Build weighted items from the files in a directory.

    Each file is stat'ed once; its size in bytes becomes the item weight.
    Files that disappear or cannot be stat'ed between listing and stat are
    skipped with a warning.

    Raises:
        ScanError: If `directory` is not a directory, cannot be listed, or
            holds no file matching `pattern`
    """
    if not os.path.isdir(directory):
        raise ScanError(f'Not a directory: {directory}')

    try:
        paths = find_files(directory, pattern, recursive)
    except OSError as e:
        raise ScanError(f'Cannot list {directory}: {e}') from e

    items: list[Item] = []
    for filepath in paths:
        try:
            size = os.stat(filepath).st_size
        except OSError as e:
            logger.warning(f'Skipping unreadable file {filepath}: {e}')
            continue
        items.append(Item(filepath, size))

    if not items:
        raise ScanError(f'No files matching {pattern!r} in {directory}')

    logger.debug(f'[SCAN] {len(items)} files matching {pattern!r} in {directory}')
    return items
