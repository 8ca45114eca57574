"""Directory walker for learning libraries.

This module lists the immediate children of a directory, separating files from
subdirectories, and is the only place the traversal touches the filesystem
for listings. Every failure is contained: an unreadable or vanished directory
yields an empty listing and a ScanIssue instead of an exception, so one broken
subtree never aborts a library scan.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from learnshelf.core.classifier import classify
from learnshelf.models.core import FileEntry, ScanIssue
from learnshelf.models.scan import ScanOptions

# Logger for this module
logger = logging.getLogger(__name__)


def sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive name order, ties broken by the exact name."""
    return (name.casefold(), name)


def record_issue(
    issues: Optional[List[ScanIssue]], path: Path, message: str
) -> None:
    """Log a recovered filesystem problem and append it to *issues*.

    Args:
        issues: Collector to append to; None only logs
        path: Path that could not be read
        message: What went wrong
    """
    logger.warning("%s: %s", path, message)
    if issues is not None:
        issues.append(ScanIssue(path=path, message=message))


@dataclass
class DirectoryListing:
    """Immediate children of one directory.

    ``dirs`` holds subdirectory names and ``files`` holds FileEntry snapshots,
    both in case-insensitive name order. Consumers visit ``dirs`` before
    ``files``.
    """

    path: Path
    files: List[FileEntry] = field(default_factory=list)
    dirs: List[str] = field(default_factory=list)
    readable: bool = False
    modified: Optional[datetime] = None
    created: Optional[datetime] = None


def _file_entry(entry: os.DirEntry, issues: Optional[List[ScanIssue]]) -> FileEntry:
    """Snapshot one file; a failing stat keeps the file with no size or mtime."""
    path = Path(entry.path)
    category = classify(entry.name)
    try:
        stat = entry.stat()
    except OSError as e:
        record_issue(issues, path, f"Error reading file stats: {e}")
        return FileEntry(name=entry.name, path=path, category=category)
    return FileEntry(
        name=entry.name,
        path=path,
        category=category,
        size=stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime),
    )


def _stat_directory(listing: DirectoryListing, issues: Optional[List[ScanIssue]]) -> None:
    try:
        stat = listing.path.stat()
    except OSError as e:
        record_issue(issues, listing.path, f"Error reading directory stats: {e}")
        return
    listing.modified = datetime.fromtimestamp(stat.st_mtime)
    # st_birthtime is missing on most Linux filesystems; ctime is the closest.
    created = getattr(stat, "st_birthtime", None) or stat.st_ctime
    listing.created = datetime.fromtimestamp(created)


def list_children(
    path: Path, issues: Optional[List[ScanIssue]] = None
) -> DirectoryListing:
    """List the files and subdirectories directly inside *path*.

    Symlinks are followed. Entries that are neither a regular file nor a
    directory (broken symlinks, sockets, devices) are skipped.

    Args:
        path: Directory to list
        issues: Optional collector for recovered problems

    Returns:
        A DirectoryListing. ``readable`` is False, and the listing empty, when
        the directory does not exist or cannot be read.
    """
    path = Path(path).absolute()
    listing = DirectoryListing(path=path)

    try:
        with os.scandir(path) as it:
            entries = list(it)
    except FileNotFoundError:
        record_issue(issues, path, "Directory does not exist")
        return listing
    except NotADirectoryError:
        record_issue(issues, path, "Path is not a directory")
        return listing
    except OSError as e:
        record_issue(issues, path, f"Error accessing directory: {e}")
        return listing

    listing.readable = True
    _stat_directory(listing, issues)

    for entry in entries:
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError as e:
            record_issue(issues, Path(entry.path), f"Error accessing entry: {e}")
            continue
        if is_dir:
            listing.dirs.append(entry.name)
        elif is_file:
            listing.files.append(_file_entry(entry, issues))

    listing.dirs.sort(key=sort_key)
    listing.files.sort(key=lambda f: sort_key(f.name))
    return listing


@dataclass
class ScanContext:
    """Per-root traversal state: options, issue collector, cancellation."""

    options: ScanOptions = field(default_factory=ScanOptions)
    issues: List[ScanIssue] = field(default_factory=list)
    cancel_reported: bool = False

    def should_stop(self, path: Path) -> bool:
        """Return True once the scan has been cancelled.

        The first call after cancellation records a single issue.
        """
        if not self.options.cancelled:
            return False
        if not self.cancel_reported:
            self.cancel_reported = True
            record_issue(self.issues, path, "Scan cancelled")
        return True

    def visit(self, path: Path, depth: int, max_depth: int) -> Optional[DirectoryListing]:
        """List *path* for a traversal at *depth*.

        Returns:
            The listing, or None when the depth bound is exceeded, the scan was
            cancelled, or the directory could not be read.
        """
        if depth > max_depth:
            logger.debug("Depth limit %d reached at %s", max_depth, path)
            return None
        if self.should_stop(path):
            return None
        listing = list_children(path, self.issues)
        if not listing.readable:
            return None
        return listing
