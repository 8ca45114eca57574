"""Domain models for the learnshelf application."""

from learnshelf.models.core import (
    Category,
    FileEntry,
    FolderGroup,
    GroupedFile,
    GroupedListing,
    ScanIssue,
    SetSummary,
    SetType,
    Thumbnail,
    TreeNode,
)
from learnshelf.models.scan import ScanOptions

__all__ = [
    "Category",
    "FileEntry",
    "FolderGroup",
    "GroupedFile",
    "GroupedListing",
    "ScanIssue",
    "ScanOptions",
    "SetSummary",
    "SetType",
    "Thumbnail",
    "TreeNode",
]
