"""Core domain models for learnshelf.

This module defines the data structures produced by a library scan.
- Every model is a fresh, by-value snapshot of the filesystem at scan time;
  nothing here is cached or persisted between scans.
- All paths are absolute so projections from different roots never collide.
- Designed to be handed across a process boundary as JSON (see
  utils/json.py and cli/commands.py).

Design:
- Category and SetType enums give type-safe classification and labels.
- FileEntry is the atomic unit returned by the walker.
- SetSummary, TreeNode and GroupedListing are the three projections of the
  same filesystem state (flat, hierarchical and grouped-by-folder).
- ScanIssue is the soft-failure channel: traversal never raises for
  filesystem problems, it reports them.
"""

import base64
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Category(str, Enum):
    """Category of a file, derived from its extension."""

    DOCUMENT = "document"
    AUDIO = "audio"
    IMAGE = "image"
    OTHER = "other"


class SetType(str, Enum):
    """Label shown for a learning set in the flat view."""

    DOC_ONLY = "Doc Only"
    DOC_AUDIO = "Doc + Audio"


class ScanIssue(BaseModel):
    """A filesystem problem that was recovered from during a scan."""

    path: Path
    """Path of the directory or file that could not be read."""

    message: str
    """Human readable description of what went wrong."""


class FileEntry(BaseModel):
    """Immutable snapshot of one file seen during a scan."""

    name: str
    """Base name of the file, including its extension."""

    path: Path
    """Absolute path to the file."""

    category: Category
    """Extension-derived category (document, audio, image, other)."""

    size: int = 0
    """Size in bytes. Zero when the file could not be stat'ed."""

    modified: Optional[datetime] = None
    """Last modified time, or None when the file could not be stat'ed."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_path(self: "FileEntry") -> "FileEntry":
        """Ensure the path is absolute.

        Raises:
            ValueError: If the path is not absolute.
        """
        if not self.path.is_absolute():
            raise ValueError(f"Path must be absolute: {self.path}")
        return self


class SetSummary(BaseModel):
    """One learning set in the flat view.

    Emitted for a directory iff it directly contains at least one document.
    """

    id: str
    """One-way identifier derived from the absolute path (see utils/hash.py)."""

    path: Path
    """Absolute path of the set directory."""

    name: str
    """Display name (the directory's basename)."""

    docs: int
    """Number of documents directly inside the directory."""

    audio: int
    """Number of audio tracks in the directory or anywhere beneath it."""

    type: SetType
    """Either "Doc Only" or "Doc + Audio"."""

    size: int
    """Bytes of every file directly in the directory plus the credited audio."""

    thumbnail: Optional[Path] = None
    """First PDF found directly in the directory, if any."""

    description: str = ""
    """First 200 characters of a readme/intro file, stripped."""

    created_at: Optional[datetime] = None
    """Creation (birth) time of the directory where the platform reports it."""

    updated_at: Optional[datetime] = None
    """Latest of the directory's own mtime and its counted files' mtimes."""


class Thumbnail(BaseModel):
    """An image payload ready to be shown next to a set."""

    mime_type: str
    """MIME type derived from the image extension."""

    data: str
    """Base64 encoded image bytes."""

    source: Optional[Path] = None
    """Image file the payload was loaded from."""

    @property
    def data_uri(self: "Thumbnail") -> str:
        """Return the payload as a ``data:`` URI."""
        return f"data:{self.mime_type};base64,{self.data}"

    @property
    def content(self: "Thumbnail") -> bytes:
        """Return the decoded image bytes."""
        return base64.b64decode(self.data)


class TreeNode(BaseModel):
    """A folder in the hierarchical view.

    Counts and size are aggregated over the whole retained subtree. A node is
    kept as a child only when it (or something beneath it) holds documents or
    audio; scan roots are always kept.
    """

    id: str
    """One-way identifier derived from the absolute path."""

    name: str
    """Folder basename."""

    path: Path
    """Absolute folder path."""

    relative_path: str
    """Path from the scan root, starting with the root's own name."""

    children: List["TreeNode"] = Field(default_factory=list)
    """Retained subfolders, folders-first then case-insensitive name order."""

    docs: int = 0
    """Documents in this folder and all retained subfolders."""

    audio: int = 0
    """Audio tracks in this folder and all retained subfolders."""

    size: int = 0
    """Bytes of all counted documents and audio tracks."""

    updated_at: Optional[datetime] = None
    """Latest modification time seen in the retained subtree."""

    first_pdf: Optional[Path] = None
    """First PDF directly in this folder, a fallback thumbnail candidate."""

    thumbnail: Optional[Thumbnail] = None
    """Image payload, populated lazily via core.thumbnail.with_thumbnail."""

    @property
    def is_empty(self: "TreeNode") -> bool:
        """Return True when nothing beneath this node was retained."""
        return self.docs == 0 and self.audio == 0 and not self.children

    def walk(self: "TreeNode") -> List["TreeNode"]:
        """Return this node and all descendants in depth-first pre-order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


class GroupedFile(BaseModel):
    """A document or audio file as listed when a set is opened."""

    name: str
    path: Path
    relative_path: str
    """Path relative to the scanned set root."""

    folder: str
    """Relative path of the containing folder, ``/`` for the set root."""

    type: str
    """Extension token without the dot, e.g. ``pdf`` or ``mp3``."""


class FolderGroup(BaseModel):
    """Documents and audio that sit directly in one folder of a set."""

    folder: str
    """Relative folder label; the set root uses its own basename."""

    folder_path: Path
    docs: List[GroupedFile] = Field(default_factory=list)
    audio: List[GroupedFile] = Field(default_factory=list)


class GroupedListing(BaseModel):
    """All documents and audio of a set, flat and grouped by folder."""

    docs: List[GroupedFile] = Field(default_factory=list)
    audio: List[GroupedFile] = Field(default_factory=list)
    structure: List[FolderGroup] = Field(default_factory=list)
    """Folders with direct content; subfolder groups precede their parent's."""
