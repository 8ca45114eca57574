"""Tests for extension-based file classification."""

import pytest

from learnshelf.core.classifier import (
    classify,
    extension_token,
    is_description_file,
)
from learnshelf.models.core import Category


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("notes.pdf", Category.DOCUMENT),
        ("Syllabus.DOCX", Category.DOCUMENT),
        ("old.doc", Category.DOCUMENT),
        ("lecture 1.mp3", Category.AUDIO),
        ("take.FLAC", Category.AUDIO),
        ("memo.m4a", Category.AUDIO),
        ("cover.JPEG", Category.IMAGE),
        ("poster.webp", Category.IMAGE),
        ("readme.txt", Category.OTHER),
        ("Makefile", Category.OTHER),
        (".pdf", Category.OTHER),
        ("archive.pdf.zip", Category.OTHER),
    ],
)
def test_classify(name: str, expected: Category) -> None:
    assert classify(name) == expected


def test_extension_token_is_lower_case_without_dot() -> None:
    assert extension_token("b2.PDF") == "pdf"
    assert extension_token("noext") == ""


def test_description_files() -> None:
    assert is_description_file("README.md")
    assert is_description_file("introduction.txt")
    assert not is_description_file("notes-readme.txt")
