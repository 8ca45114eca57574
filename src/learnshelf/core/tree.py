"""Hierarchical projection of a learning library.

Builds one TreeNode per scan root. Each folder's totals are aggregated
bottom-up from its own files and its retained subfolders; subfolders with no
documents or audio anywhere beneath them are pruned.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from learnshelf.core.aggregate import FolderStats
from learnshelf.core.walker import ScanContext
from learnshelf.models.core import ScanIssue, TreeNode
from learnshelf.models.scan import ScanOptions
from learnshelf.utils.hash import path_id

# Logger for this module
logger = logging.getLogger(__name__)


def display_name(path: Path) -> str:
    """Return the basename of *path*, or the path itself for a filesystem root."""
    return path.name or str(path)


def is_retained(node: TreeNode) -> bool:
    """Check whether a child node survives pruning."""
    return node.docs > 0 or node.audio > 0 or len(node.children) > 0


def _build_node(
    path: Path, depth: int, relative_path: str, context: ScanContext
) -> Optional[TreeNode]:
    """Build the node for *path*, or None when it cannot be visited."""
    listing = context.visit(path, depth, context.options.tree_max_depth)
    if listing is None:
        return None

    stats = FolderStats()
    stats.touch(listing.modified)
    children: List[TreeNode] = []

    for name in listing.dirs:
        child = _build_node(
            path / name, depth + 1, os.path.join(relative_path, name), context
        )
        if child is not None and is_retained(child):
            children.append(child)
            stats.fold(child)

    stats.add_files(listing.files)

    return TreeNode(
        id=path_id(path),
        name=display_name(path),
        path=path,
        relative_path=relative_path,
        children=children,
        docs=stats.docs,
        audio=stats.audio,
        size=stats.size,
        updated_at=stats.updated_at,
        first_pdf=stats.first_pdf,
    )


def build_tree(
    root: Path,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> Optional[TreeNode]:
    """Build the hierarchical view of one scan root.

    The root node is returned even when it holds nothing; only its
    descendants are pruned.

    Args:
        root: Directory to scan
        options: Scan options; tree_max_depth bounds the recursion
        issues: Optional collector for recovered problems

    Returns:
        The root TreeNode, or None if the root could not be read.
    """
    root = Path(root).absolute()
    context = ScanContext(
        options=options or ScanOptions(),
        issues=issues if issues is not None else [],
    )
    node = _build_node(root, 0, display_name(root), context)
    if node is not None:
        logger.debug(
            "Built tree for %s: %d docs, %d audio", root, node.docs, node.audio
        )
    return node
