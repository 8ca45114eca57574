"""Grouped listing of one learning set.

When a set is opened, every document and audio file beneath it is listed,
both as two flat lists and grouped by the folder that directly holds them.
Folders are walked folders-first: the subfolders of a folder are listed before
its own files, so a folder's group follows the groups beneath it.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from learnshelf.core.classifier import extension_token
from learnshelf.core.tree import display_name
from learnshelf.core.walker import ScanContext
from learnshelf.models.core import (
    Category,
    FileEntry,
    FolderGroup,
    GroupedFile,
    GroupedListing,
    ScanIssue,
)
from learnshelf.models.scan import ScanOptions

# Logger for this module
logger = logging.getLogger(__name__)

ROOT_FOLDER_MARKER = "/"


def _grouped_file(entry: FileEntry, folder: str) -> GroupedFile:
    return GroupedFile(
        name=entry.name,
        path=entry.path,
        relative_path=os.path.join(folder, entry.name) if folder else entry.name,
        folder=folder or ROOT_FOLDER_MARKER,
        type=extension_token(entry.name),
    )


def _scan_folder(
    path: Path,
    depth: int,
    relative_path: str,
    context: ScanContext,
    result: GroupedListing,
) -> None:
    listing = context.visit(path, depth, context.options.tree_max_depth)
    if listing is None:
        return

    for name in listing.dirs:
        child_relative = os.path.join(relative_path, name) if relative_path else name
        _scan_folder(path / name, depth + 1, child_relative, context, result)

    group = FolderGroup(folder=relative_path or display_name(path), folder_path=path)
    for entry in listing.files:
        if entry.category is Category.DOCUMENT:
            group.docs.append(_grouped_file(entry, relative_path))
        elif entry.category is Category.AUDIO:
            group.audio.append(_grouped_file(entry, relative_path))

    if group.docs or group.audio:
        result.structure.append(group)
        result.docs.extend(group.docs)
        result.audio.extend(group.audio)


def list_grouped(
    set_path: Path,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> GroupedListing:
    """List a set's documents and audio, flat and grouped by folder.

    Args:
        set_path: Root folder of the set
        options: Scan options; tree_max_depth bounds the recursion
        issues: Optional collector for recovered problems

    Returns:
        A GroupedListing; empty when the folder cannot be read.
    """
    set_path = Path(set_path).absolute()
    context = ScanContext(
        options=options or ScanOptions(),
        issues=issues if issues is not None else [],
    )
    result = GroupedListing()
    _scan_folder(set_path, 0, "", context, result)
    logger.debug(
        "Listed %s: %d docs, %d audio in %d folders",
        set_path,
        len(result.docs),
        len(result.audio),
        len(result.structure),
    )
    return result


def _collect(
    path: Path, depth: int, category: Category, context: ScanContext
) -> List[FileEntry]:
    listing = context.visit(path, depth, context.options.tree_max_depth)
    if listing is None:
        return []
    found: List[FileEntry] = []
    for name in listing.dirs:
        found.extend(_collect(path / name, depth + 1, category, context))
    found.extend(entry for entry in listing.files if entry.category is category)
    return found


def list_files(
    set_path: Path,
    category: Category,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> List[FileEntry]:
    """List every file of *category* in a set folder and its subfolders.

    Files of subfolders precede the folder's own files.
    """
    context = ScanContext(
        options=options or ScanOptions(),
        issues=issues if issues is not None else [],
    )
    return _collect(Path(set_path).absolute(), 0, category, context)
