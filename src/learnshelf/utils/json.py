"""JSON serialization helpers for learnshelf.

This module provides helpers for serializing scan results to JSON, especially
for types not natively supported by the standard library (e.g., datetime,
pathlib.Path, Enum).
- Used by the CLI to hand scan projections across the process boundary.
- Ensures that datetime objects are stored in ISO 8601 format.
- Ensures Path objects are serialized as strings.
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder for learnshelf.

    Handles serialization of datetime, Path and Enum objects, which appear in
    every scan model.
    """

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize (may be datetime, Path, Enum or other types)

        Returns:
            JSON-serializable representation of the object.
            - datetime: ISO 8601 string
            - Path: string
            - Enum: its value
            - Otherwise: falls back to base class
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def dumps(data: object, *, indent: int | None = 2) -> str:
    """Serialize *data* using :class:`DateTimeEncoder`."""
    return json.dumps(data, cls=DateTimeEncoder, indent=indent, ensure_ascii=False)
