"""Tests for JSON serialization helpers."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from learnshelf.models.core import SetType
from learnshelf.utils.json import DateTimeEncoder, dumps


def test_encoder_handles_scan_types() -> None:
    data = {
        "when": datetime(2024, 5, 6, 7, 8, 9),
        "where": Path("/lib/course"),
        "type": SetType.DOC_ONLY,
    }

    decoded = json.loads(json.dumps(data, cls=DateTimeEncoder))

    assert decoded == {
        "when": "2024-05-06T07:08:09",
        "where": str(Path("/lib/course")),
        "type": "Doc Only",
    }


def test_encoder_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        json.dumps({"x": object()}, cls=DateTimeEncoder)


def test_dumps_keeps_non_ascii() -> None:
    text = dumps({"name": "Cours de français"}, indent=None)

    assert text == '{"name": "Cours de français"}'
