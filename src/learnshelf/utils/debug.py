"""Logging setup for learnshelf.

Library modules log through ``logging.getLogger(__name__)`` and stay silent
until a handler is installed (the package registers a NullHandler). The CLI
calls setup_logger() to print those records to stderr. Debug output is
controlled by the ``--verbose`` flag or the LEARNSHELF_DEBUG environment
variable.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("LEARNSHELF_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Attach a console handler to the ``learnshelf`` logger once.

    Args:
        verbose: Log at DEBUG level instead of WARNING.

    Returns:
        The configured ``learnshelf`` logger.
    """
    global _logger
    logger = _logger or logging.getLogger("learnshelf")
    if _logger is None:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _logger = logger
    logger.setLevel(logging.DEBUG if verbose or DEBUG_ON else logging.WARNING)
    return logger
