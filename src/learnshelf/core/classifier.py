"""File classification by extension.

Maps a file name to one of the learnshelf categories. Classification is a pure
lookup on the lower-cased extension; content is never inspected.
"""

from pathlib import PurePath
from typing import Dict, FrozenSet

from learnshelf.models.core import Category

DOCUMENT_EXTENSIONS = frozenset({".pdf", ".doc", ".docx"})
AUDIO_EXTENSIONS = frozenset({".mp3", ".wav", ".m4a", ".wma", ".ogg", ".flac"})

# Order matters: the thumbnail resolver walks these in sequence.
IMAGE_EXTENSIONS_ORDERED = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp")
IMAGE_EXTENSIONS = frozenset(IMAGE_EXTENSIONS_ORDERED)

CATEGORY_EXTENSIONS: Dict[Category, FrozenSet[str]] = {
    Category.DOCUMENT: DOCUMENT_EXTENSIONS,
    Category.AUDIO: AUDIO_EXTENSIONS,
    Category.IMAGE: IMAGE_EXTENSIONS,
}

# File name prefixes whose first characters describe a set.
DESCRIPTION_PREFIXES = ("readme", "intro")


def extension_of(file_name: str) -> str:
    """Return the lower-cased extension of *file_name*, including the dot.

    Dotfiles such as ``.pdf`` have no extension, matching ``os.path.splitext``.
    """
    return PurePath(file_name).suffix.lower()


def extension_token(file_name: str) -> str:
    """Return the extension without its dot, e.g. ``"pdf"``."""
    return extension_of(file_name)[1:]


def classify(file_name: str) -> Category:
    """Classify a file by its extension.

    Args:
        file_name: File name or path; only the final suffix is considered.

    Returns:
        The matching Category, or Category.OTHER.
    """
    ext = extension_of(file_name)
    for category, extensions in CATEGORY_EXTENSIONS.items():
        if ext in extensions:
            return category
    return Category.OTHER


def is_description_file(file_name: str) -> bool:
    """Check whether a file name suggests a description (readme/intro)."""
    return file_name.lower().startswith(DESCRIPTION_PREFIXES)
