"""Core functionality for learnshelf.

This package exposes the library scanning API used by the CLI and by any
presentation layer:
- scan_flat / scan_tree: flat and hierarchical projections of the roots.
- list_grouped / list_documents / list_audio: contents of one opened set.
- resolve_thumbnail / with_thumbnail: lazy cover image lookup.
- classify: extension-based file classification.

See scanner.py for how roots are resolved and scanned.
"""

from learnshelf.core.classifier import classify
from learnshelf.core.scanner import (
    list_audio,
    list_documents,
    list_grouped,
    resolve_thumbnail,
    scan_flat,
    scan_tree,
)
from learnshelf.core.thumbnail import with_thumbnail

__all__ = [
    "classify",
    "list_audio",
    "list_documents",
    "list_grouped",
    "resolve_thumbnail",
    "scan_flat",
    "scan_tree",
    "with_thumbnail",
]
