"""Utility modules for learnshelf."""

from learnshelf.utils.hash import path_id
from learnshelf.utils.json import DateTimeEncoder

__all__ = [
    "path_id",
    "DateTimeEncoder",
]
