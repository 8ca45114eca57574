"""Aggregation of per-folder statistics.

A FolderStats accumulates the documents and audio found directly in a folder
and folds in the statistics of its subfolders, bottom-up. Both the tree
builder and the flat set extractor use it, each deciding which subfolders to
fold.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from learnshelf.core.classifier import extension_of, is_description_file
from learnshelf.core.walker import record_issue
from learnshelf.models.core import Category, FileEntry, ScanIssue, TreeNode

DESCRIPTION_MAX_CHARS = 200


def read_excerpt(
    path: Path, issues: Optional[List[ScanIssue]] = None
) -> Optional[str]:
    """Read the first characters of a description file.

    Args:
        path: File to read (decoded as UTF-8, undecodable bytes replaced)
        issues: Optional collector for recovered problems

    Returns:
        Up to 200 characters with surrounding whitespace stripped, or None if
        the file could not be read.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read(DESCRIPTION_MAX_CHARS).strip()
    except OSError as e:
        record_issue(issues, path, f"Error reading description: {e}")
        return None


@dataclass
class FolderStats:
    """Counts, size and timestamps gathered for one folder."""

    docs: int = 0
    audio: int = 0
    size: int = 0
    updated_at: Optional[datetime] = None
    first_pdf: Optional[Path] = None
    description: str = ""
    count_all_sizes: bool = False
    """Add the size of every direct file, not only documents and audio."""

    @property
    def has_content(self: "FolderStats") -> bool:
        return self.docs > 0 or self.audio > 0

    def touch(self: "FolderStats", moment: Optional[datetime]) -> None:
        """Advance ``updated_at`` to *moment* if it is later."""
        if moment is not None and (self.updated_at is None or moment > self.updated_at):
            self.updated_at = moment

    def add_file(self: "FolderStats", entry: FileEntry) -> None:
        """Count one file found directly in the folder.

        Every file advances ``updated_at``. Only documents and audio count
        toward the totals, and toward ``size`` unless ``count_all_sizes`` is set.
        """
        self.touch(entry.modified)
        if entry.category is Category.DOCUMENT:
            self.docs += 1
            if self.first_pdf is None and extension_of(entry.name) == ".pdf":
                self.first_pdf = entry.path
        elif entry.category is Category.AUDIO:
            self.audio += 1
        elif not self.count_all_sizes:
            return
        self.size += entry.size

    def add_files(
        self: "FolderStats",
        files: Iterable[FileEntry],
        issues: Optional[List[ScanIssue]] = None,
        *,
        describe: bool = False,
    ) -> None:
        """Count *files* in listing order.

        With ``describe`` set, the last readme/intro file read successfully
        becomes the description.
        """
        for entry in files:
            self.add_file(entry)
            if describe and is_description_file(entry.name):
                excerpt = read_excerpt(entry.path, issues)
                if excerpt is not None:
                    self.description = excerpt

    def fold(self: "FolderStats", child: "FolderStats | TreeNode") -> None:
        """Fold a retained child's aggregated totals into this folder."""
        self.docs += child.docs
        self.audio += child.audio
        self.size += child.size
        self.touch(child.updated_at)
