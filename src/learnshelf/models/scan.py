"""Scan options model.

This module defines the knobs that parameterize a library scan.
- Depth bounds protect against symlink cycles and pathological nesting.
- ``workers`` allows one thread per root; roots share no mutable state.
- ``cancel_event`` lets a long-running caller stop a scan between directory
  visits and keep the partial result.
"""

import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TREE_MAX_DEPTH = 10
DEFAULT_FLAT_MAX_DEPTH = 5


class ScanOptions(BaseModel):
    """Options for scanning a learning library.

    Shared by the tree builder, the flat set extractor and the grouped file
    lister. Each projection reads the depth bound that applies to it.
    """

    tree_max_depth: int = Field(default=DEFAULT_TREE_MAX_DEPTH, ge=0)
    """Deepest level visited by the tree builder and grouped lister (root is 0)."""

    flat_max_depth: int = Field(default=DEFAULT_FLAT_MAX_DEPTH, ge=0)
    """Deepest level visited by the flat set extractor (root is 0)."""

    workers: int = Field(default=1, ge=1)
    """Number of roots scanned in parallel. 1 scans roots one after another."""

    cancel_event: Optional[threading.Event] = None
    """When set, remaining directory visits are skipped."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def cancelled(self: "ScanOptions") -> bool:
        """Return True once the cancel event has been set."""
        return self.cancel_event is not None and self.cancel_event.is_set()
