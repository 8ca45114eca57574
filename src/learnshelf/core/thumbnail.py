"""Thumbnail lookup for learning sets.

Looks for a cover-like image directly inside a set folder (never in
subfolders) and returns it as a base64 payload. The MIME type is derived from
the extension only: PNG files are ``image/png`` and every other recognised
image is reported as ``image/jpeg``.
"""

import base64
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from learnshelf.core.classifier import IMAGE_EXTENSIONS_ORDERED, extension_of
from learnshelf.core.walker import list_children, record_issue
from learnshelf.models.core import Category, FileEntry, ScanIssue, Thumbnail, TreeNode

# Logger for this module
logger = logging.getLogger(__name__)

# Name stems tried in order before falling back to any image.
COVER_STEMS = ("cover", "thumbnail", "thumb", "poster", "image")


def mime_type_for(file_name: str) -> str:
    """Return the MIME type reported for an image file name."""
    return "image/png" if extension_of(file_name) == ".png" else "image/jpeg"


def _matches_stem(file_name: str, stem: str, ext: str) -> bool:
    lower = file_name.lower()
    return lower == stem + ext or lower.startswith(stem)


def _candidates(images: Sequence[FileEntry]) -> Iterator[FileEntry]:
    """Yield images in preference order, each at most once.

    Stems are tried first (stem order, then extension order, then listing
    order), then every image in listing order.
    """
    seen: set[Path] = set()
    for stem in COVER_STEMS:
        for ext in IMAGE_EXTENSIONS_ORDERED:
            for entry in images:
                if entry.path not in seen and _matches_stem(entry.name, stem, ext):
                    seen.add(entry.path)
                    yield entry
    for entry in images:
        if entry.path not in seen:
            seen.add(entry.path)
            yield entry


def resolve_thumbnail(
    set_path: Path, issues: Optional[List[ScanIssue]] = None
) -> Optional[Thumbnail]:
    """Find and load the thumbnail image of a set folder.

    An image whose bytes cannot be read is skipped and the search continues
    with the next candidate.

    Args:
        set_path: Folder to search (non-recursive)
        issues: Optional collector for recovered problems

    Returns:
        The Thumbnail, or None if the folder has no readable image or cannot
        be listed.
    """
    listing = list_children(Path(set_path), issues)
    if not listing.readable:
        return None

    images = [entry for entry in listing.files if entry.category is Category.IMAGE]
    for entry in _candidates(images):
        try:
            content = entry.path.read_bytes()
        except OSError as e:
            record_issue(issues, entry.path, f"Error reading thumbnail: {e}")
            continue
        logger.debug("Thumbnail for %s: %s", listing.path, entry.name)
        return Thumbnail(
            mime_type=mime_type_for(entry.name),
            data=base64.b64encode(content).decode("ascii"),
            source=entry.path,
        )
    return None


def with_thumbnail(
    node: TreeNode,
    issues: Optional[List[ScanIssue]] = None,
    *,
    recursive: bool = False,
) -> TreeNode:
    """Return a copy of *node* with its thumbnail populated.

    Args:
        node: Tree node built without thumbnails
        issues: Optional collector for recovered problems
        recursive: Also populate every descendant

    Returns:
        A new TreeNode; *node* itself is left untouched.
    """
    update: dict[str, object] = {"thumbnail": resolve_thumbnail(node.path, issues)}
    if recursive:
        update["children"] = [
            with_thumbnail(child, issues, recursive=True) for child in node.children
        ]
    return node.model_copy(update=update)
