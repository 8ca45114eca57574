"""Library scanner entry points.

This module is the public surface of the indexer. It resolves the roots to
scan (explicit, or the stored library folders), skips roots that do not exist,
runs one projection per root, optionally in parallel, and joins the results
in the order the roots were given.

No entry point raises for filesystem problems. Pass an ``issues`` list to
receive the ScanIssue diagnostics collected along the way.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from learnshelf.core.flat import scan_sets
from learnshelf.core.grouped import list_files, list_grouped
from learnshelf.core.thumbnail import resolve_thumbnail
from learnshelf.core.tree import build_tree
from learnshelf.models.core import Category, FileEntry, ScanIssue, SetSummary, TreeNode
from learnshelf.models.scan import ScanOptions
from learnshelf.utils.config import get_scan_folders

# Logger for this module
logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "list_audio",
    "list_documents",
    "list_grouped",
    "resolve_roots",
    "resolve_thumbnail",
    "scan_flat",
    "scan_tree",
]


def resolve_roots(roots: Optional[Iterable[Path | str]] = None) -> List[Path]:
    """Return the absolute roots to scan, dropping those that do not exist.

    Args:
        roots: Explicit roots; None falls back to the stored library folders

    Returns:
        Existing roots in their original order.
    """
    if roots is None:
        roots = get_scan_folders()

    resolved: List[Path] = []
    for root in roots:
        path = Path(root).expanduser().absolute()
        if not path.exists():
            logger.debug("Skipping missing root %s", path)
            continue
        resolved.append(path)
    return resolved


def _run_per_root(
    scan: Callable[..., T],
    roots: List[Path],
    options: ScanOptions,
    issues: Optional[List[ScanIssue]],
) -> List[T]:
    """Run *scan* once per root and return results in root order.

    Each root gets its own issue list; the lists are joined in root order so
    diagnostics stay deterministic under parallel execution.
    """

    def run(root: Path) -> Tuple[T, List[ScanIssue]]:
        root_issues: List[ScanIssue] = []
        logger.info("Scanning %s...", root)
        return scan(root, options=options, issues=root_issues), root_issues

    if options.workers > 1 and len(roots) > 1:
        with ThreadPoolExecutor(max_workers=min(options.workers, len(roots))) as pool:
            outcomes = list(pool.map(run, roots))
    else:
        outcomes = [run(root) for root in roots]

    results: List[T] = []
    for result, root_issues in outcomes:
        results.append(result)
        if issues is not None:
            issues.extend(root_issues)
    return results


def scan_flat(
    roots: Optional[Iterable[Path | str]] = None,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> List[SetSummary]:
    """Scan roots and return the flat list of learning sets.

    Args:
        roots: Directories to scan; None uses the stored library folders
        options: Scan options
        issues: Optional collector for recovered problems

    Returns:
        Sets of every root, root by root, each in depth-first post-order.
    """
    options = options or ScanOptions()
    per_root = _run_per_root(scan_sets, resolve_roots(roots), options, issues)
    return [summary for sets in per_root for summary in sets]


def scan_tree(
    roots: Optional[Iterable[Path | str]] = None,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> List[TreeNode]:
    """Scan roots and return one TreeNode per readable root.

    Empty roots are kept; filter with ``TreeNode.is_empty`` if unwanted.
    Thumbnails are not loaded; see ``core.thumbnail.with_thumbnail``.
    """
    options = options or ScanOptions()
    nodes = _run_per_root(build_tree, resolve_roots(roots), options, issues)
    return [node for node in nodes if node is not None]


def list_documents(
    set_path: Path,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> List[FileEntry]:
    """List every document in a set folder and its subfolders."""
    return list_files(set_path, Category.DOCUMENT, options=options, issues=issues)


def list_audio(
    set_path: Path,
    *,
    options: Optional[ScanOptions] = None,
    issues: Optional[List[ScanIssue]] = None,
) -> List[FileEntry]:
    """List every audio track in a set folder and its subfolders."""
    return list_files(set_path, Category.AUDIO, options=options, issues=issues)
