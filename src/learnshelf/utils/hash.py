"""Utilities for computing stable identifiers.

This module derives one-way identifiers for folders from their absolute paths.
"""

import hashlib
from pathlib import Path
from typing import Union


def path_id(path: Union[str, Path]) -> str:
    """Compute the identifier of a folder or file from its path.

    The same path always yields the same identifier; the path cannot be
    recovered from it.

    Args:
        path: The path to derive the identifier from

    Returns:
        The hexadecimal SHA-256 digest of the absolute path
    """
    if isinstance(path, str):
        path = Path(path)

    absolute = str(path.absolute())
    return hashlib.sha256(absolute.encode("utf-8", "surrogateescape")).hexdigest()
