"""Flat projection of a learning library.

Every directory that directly contains at least one document becomes a
SetSummary, independently of its ancestors and descendants. The set size
counts every file directly in the directory. Audio tracks found in the
directory or below it are credited to the set, so a course folder with an
``audio/`` companion folder reads as "Doc + Audio".
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from learnshelf.core.aggregate import FolderStats
from learnshelf.core.tree import display_name
from learnshelf.core.walker import ScanContext
from learnshelf.models.core import Category, ScanIssue, SetSummary, SetType
from learnshelf.models.scan import ScanOptions
from learnshelf.utils.hash import path_id

# Logger for this module
logger = logging.getLogger(__name__)


def _scan_dir(
    path: Path, depth: int, context: ScanContext
) -> Tuple[List[SetSummary], FolderStats]:
    """Scan *path* and its subdirectories.

    Returns:
        Tuple of (
            sets found at or below *path*, descendants before *path*,
            audio statistics of the whole visited subtree
        )
    """
    tracks = FolderStats()
    listing = context.visit(path, depth, context.options.flat_max_depth)
    if listing is None:
        return [], tracks

    own = FolderStats(count_all_sizes=True)
    own.touch(listing.modified)
    own.add_files(
        (f for f in listing.files if f.category is not Category.AUDIO),
        context.issues,
        describe=True,
    )
    tracks.add_files(f for f in listing.files if f.category is Category.AUDIO)

    nested: List[SetSummary] = []
    for name in listing.dirs:
        child_sets, child_tracks = _scan_dir(path / name, depth + 1, context)
        nested.extend(child_sets)
        tracks.fold(child_tracks)

    if own.docs == 0:
        return nested, tracks

    own.fold(tracks)
    summary = SetSummary(
        id=path_id(path),
        path=path,
        name=display_name(path),
        docs=own.docs,
        audio=own.audio,
        type=SetType.DOC_AUDIO if own.audio > 0 else SetType.DOC_ONLY,
        size=own.size,
        thumbnail=own.first_pdf,
        description=own.description,
        created_at=listing.created,
        updated_at=own.updated_at,
    )
    return [*nested, summary], tracks


def scan_sets(
    root: Path,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> List[SetSummary]:
    """Collect the learning sets under one root.

    Args:
        root: Directory to scan
        options: Scan options; flat_max_depth bounds the recursion
        issues: Optional collector for recovered problems

    Returns:
        SetSummary entries in depth-first post-order (a set follows the sets
        found beneath it); empty if none qualify.
    """
    root = Path(root).absolute()
    context = ScanContext(
        options=options or ScanOptions(),
        issues=issues if issues is not None else [],
    )
    sets, _ = _scan_dir(root, 0, context)
    logger.debug("Found %d sets under %s", len(sets), root)
    return sets
